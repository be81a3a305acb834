"""
Default document projector: reads field values from mappings or attributes.
"""

from typing import Any, Dict, Iterable, List


def _lookup(value: Any, name: str) -> Any:
    if isinstance(value, dict):
        return value.get(name)
    return getattr(value, name, None)


class AttributeProjector:
    """
    Projects an entity onto field values without building a full document.

    Field names may be dotted paths ("author.name"); list values along the
    path are flattened.
    """

    def project(self, entity: Any, field_names: Iterable[str]) -> Dict[str, List[Any]]:
        projected: Dict[str, List[Any]] = {}
        for field_name in field_names:
            current = [entity]
            for part in field_name.split("."):
                next_values = []
                for item in current:
                    found = _lookup(item, part)
                    if isinstance(found, (list, tuple)):
                        next_values.extend(found)
                    elif found is not None:
                        next_values.append(found)
                current = next_values
            projected[field_name] = [v for v in current if v is not None]
        return projected
