"""Hints that steer inference at specific document positions.

A hint is a JSON Pointer (RFC 6901) naming one position in the example
documents. Three kinds exist:

- enum hints point at a string value, which is then inferred as an enum of
  every string seen there;
- values hints point at an object, which is then inferred as a free-form map;
- discriminator hints point at the tag property of an object, which is then
  inferred as a tagged union over the values of that property. The object
  position is the pointer without its last segment.

Positions are tracked as tuples of property names. Array elements share the
position of their array; members of a values map share the position of the
map extended by `VALUES_SEGMENT`.
"""

from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

import jsonpointer
from jsonpointer import JsonPointerException

from jtdinfer.numtype import NumType

Path = Tuple[str, ...]

VALUES_SEGMENT = '-'


def parse_json_pointer(pointer: str) -> Path:
    """Parses a JSON Pointer into the tuple of property names it addresses.

    Raises:
        ValueError: if the pointer is not a valid RFC 6901 pointer
    """
    try:
        return tuple(jsonpointer.JsonPointer(pointer).parts)
    except JsonPointerException as e:
        raise ValueError(f"Invalid JSON Pointer hint {pointer!r}: {e}") from e


def path_to_pointer(path: Sequence[str]) -> str:
    """Formats a path as a JSON Pointer, mainly for log messages."""
    return jsonpointer.JsonPointer.from_parts(list(path)).path


class HintSet:
    """An immutable set of paths, matched exactly."""

    def __init__(self, paths: Iterable[Sequence[str]] = ()):
        self._paths: FrozenSet[Path] = frozenset(tuple(p) for p in paths)

    @classmethod
    def from_pointers(cls, pointers: Iterable[str]) -> 'HintSet':
        return cls(parse_json_pointer(p) for p in pointers)

    def matches(self, path: Path) -> bool:
        return path in self._paths

    def children(self, path: Path) -> List[str]:
        """Returns, sorted, the last segments of hinted paths one level below `path`."""
        depth = len(path)
        return sorted(p[depth] for p in self._paths if len(p) == depth + 1 and p[:depth] == path)

    def __repr__(self) -> str:
        return f"HintSet({sorted(self._paths)!r})"


class Hints:
    """The complete hint configuration of one inference run."""

    def __init__(self, default_num_type: NumType = NumType.UINT8,
                 enums: Optional[HintSet] = None,
                 values: Optional[HintSet] = None,
                 discriminators: Optional[HintSet] = None):
        self.default_num_type = default_num_type
        self.enums = enums or HintSet()
        self.values = values or HintSet()
        self.discriminators = discriminators or HintSet()

    @classmethod
    def from_pointers(cls, default_number_type: str = 'uint8',
                      enum_hints: Iterable[str] = (),
                      values_hints: Iterable[str] = (),
                      discriminator_hints: Iterable[str] = ()) -> 'Hints':
        """Builds hints from JSON Pointer strings and a number type name.

        Raises:
            ValueError: on an unknown number type name or a malformed pointer
        """
        return cls(
            NumType.from_name(default_number_type),
            HintSet.from_pointers(enum_hints),
            HintSet.from_pointers(values_hints),
            HintSet.from_pointers(discriminator_hints),
        )

    def is_enum(self, path: Path) -> bool:
        return self.enums.matches(path)

    def is_values(self, path: Path) -> bool:
        return self.values.matches(path)

    def discriminator_tag(self, path: Path) -> Optional[str]:
        """Returns the tag property hinted for the object at `path`, if any."""
        tags = self.discriminators.children(path)
        return tags[0] if tags else None
