"""
Stored field payloads for the in-memory index.

Values are JSON encoded, compressed with zstd and guarded by an xxhash32
checksum of the uncompressed bytes.
"""

import json
from typing import Any, List, Tuple

import xxhash
import zstandard as zstd


def pack_values(values: List[Any], level: int = 3) -> Tuple[bytes, int]:
    """
    Encode and compress the stored values of one field.

    Args:
        values: JSON-serializable field values
        level: zstd compression level (1-22, default 3)

    Returns:
        Tuple of (compressed payload, checksum of uncompressed payload)
    """
    raw = json.dumps(values, ensure_ascii=False).encode("utf-8")
    cctx = zstd.ZstdCompressor(level=level)
    return cctx.compress(raw), xxhash.xxh32(raw).intdigest()


def unpack_values(payload: bytes, checksum: int) -> List[Any]:
    """
    Decompress and decode stored values, verifying the checksum.

    Raises:
        OSError: If the payload is corrupt
    """
    dctx = zstd.ZstdDecompressor()
    try:
        raw = dctx.decompress(payload)
    except zstd.ZstdError as e:
        raise OSError(f"Corrupt stored field payload: {e}") from e
    if xxhash.xxh32(raw).intdigest() != checksum:
        raise OSError("Checksum mismatch for stored field payload")
    return json.loads(raw.decode("utf-8"))
