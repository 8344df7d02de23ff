from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from .errors import ShapeMismatchError

# Record ids are signed 32-bit integers.
ID_MIN = -(2 ** 31)
ID_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class Record:
    """One decoded row of the selected object."""
    id: int
    name: str
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_value(cls, value: Any, *, strict: bool = False) -> "Record":
        """Validate a parsed JSON value and build a ``Record`` from it.

        Raises
        ------
        ShapeMismatchError
            If ``value`` is not an object, ``id`` is missing or not an integer
            in range, ``name`` is missing or not a string, or (when ``strict``)
            the object carries fields other than ``id`` and ``name``.
        """
        if not isinstance(value, Mapping):
            raise ShapeMismatchError(f"expected a JSON object, got {type(value).__name__}")
        if "id" not in value:
            raise ShapeMismatchError("missing required field 'id'")
        if "name" not in value:
            raise ShapeMismatchError("missing required field 'name'")

        rec_id = value["id"]
        # bool is an int subclass; JSON true/false is not an id
        if isinstance(rec_id, bool) or not isinstance(rec_id, int):
            raise ShapeMismatchError(f"field 'id' must be an integer, got {rec_id!r}")
        if not ID_MIN <= rec_id <= ID_MAX:
            raise ShapeMismatchError(f"field 'id' out of 32-bit range: {rec_id}")

        name = value["name"]
        if not isinstance(name, str):
            raise ShapeMismatchError(f"field 'name' must be a string, got {name!r}")

        extra = {k: v for k, v in value.items() if k not in ("id", "name")}
        if strict and extra:
            raise ShapeMismatchError(f"unexpected field(s): {sorted(extra)}")
        return cls(id=rec_id, name=name, extra=extra)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, **self.extra}
