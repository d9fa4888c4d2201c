"""Numeric type lattice for JTD inference.

JTD has eight numeric types. Every number observed at a schema position is
classified into the smallest of them that can hold it exactly, and the kinds
observed at one position are combined with `join`, the least upper bound of
the widening order below:

    int8 < int16 < int32 < float64
    uint8 < uint16 < uint32 < float64
    uint8 < int16, uint16 < int32
    float32 < float64
"""

import struct
from enum import Enum
from typing import Dict, FrozenSet, Union


class NumType(Enum):
    """The JTD numeric types, valued by their JTD type names."""
    INT8 = "int8"
    UINT8 = "uint8"
    INT16 = "int16"
    UINT16 = "uint16"
    INT32 = "int32"
    UINT32 = "uint32"
    FLOAT32 = "float32"
    FLOAT64 = "float64"

    @classmethod
    def from_name(cls, name: str) -> 'NumType':
        """Looks up a numeric type by its JTD name.

        Raises:
            ValueError: if the name is not one of the eight JTD numeric types
        """
        try:
            return cls(name)
        except ValueError:
            names = ', '.join(t.value for t in cls)
            raise ValueError(f"Invalid default number type: {name!r} (expected one of {names})") from None


# Integer kinds in the order `classify` tries them.
_UNSIGNED_RANGES = [
    (NumType.UINT8, 255),
    (NumType.UINT16, 65535),
    (NumType.UINT32, 4294967295),
]
_SIGNED_RANGES = [
    (NumType.INT8, -128),
    (NumType.INT16, -32768),
    (NumType.INT32, -2147483648),
]
_INTEGER_RANGES = {
    NumType.INT8: (-128, 127),
    NumType.UINT8: (0, 255),
    NumType.INT16: (-32768, 32767),
    NumType.UINT16: (0, 65535),
    NumType.INT32: (-2147483648, 2147483647),
    NumType.UINT32: (0, 4294967295),
}

# Direct widening edges; `_UPPER_BOUNDS` is their reflexive-transitive closure.
_WIDENS_TO: Dict[NumType, tuple] = {
    NumType.INT8: (NumType.INT16,),
    NumType.UINT8: (NumType.UINT16, NumType.INT16),
    NumType.INT16: (NumType.INT32,),
    NumType.UINT16: (NumType.UINT32, NumType.INT32),
    NumType.INT32: (NumType.FLOAT64,),
    NumType.UINT32: (NumType.FLOAT64,),
    NumType.FLOAT32: (NumType.FLOAT64,),
    NumType.FLOAT64: (),
}


def _upper_bounds(num_type: NumType) -> FrozenSet[NumType]:
    bounds = {num_type}
    pending = [num_type]
    while pending:
        for wider in _WIDENS_TO[pending.pop()]:
            if wider not in bounds:
                bounds.add(wider)
                pending.append(wider)
    return frozenset(bounds)


_UPPER_BOUNDS: Dict[NumType, FrozenSet[NumType]] = {t: _upper_bounds(t) for t in NumType}


def _fits_float32(value: Union[int, float]) -> bool:
    try:
        return struct.unpack('f', struct.pack('f', value))[0] == value
    except (OverflowError, struct.error):
        return False


def classify(value: Union[int, float]) -> NumType:
    """Picks the smallest numeric type that represents `value` exactly.

    Non-negative integers prefer unsigned kinds. Integral floats such as
    ``5.0`` are treated as integers, since JSON does not distinguish them.
    """
    if isinstance(value, float):
        if not value.is_integer():
            return NumType.FLOAT32 if _fits_float32(value) else NumType.FLOAT64
        value = int(value)

    if value >= 0:
        for num_type, maximum in _UNSIGNED_RANGES:
            if value <= maximum:
                return num_type
    else:
        for num_type, minimum in _SIGNED_RANGES:
            if value >= minimum:
                return num_type
    return NumType.FLOAT64


def join(a: NumType, b: NumType) -> NumType:
    """Returns the least upper bound of two numeric types."""
    common = _UPPER_BOUNDS[a] & _UPPER_BOUNDS[b]
    for candidate in common:
        if _UPPER_BOUNDS[candidate] == common:
            return candidate
    return NumType.FLOAT64


def holders(value: Union[int, float]) -> FrozenSet[NumType]:
    """Returns every numeric type that represents `value` exactly.

    Unlike `classify`, this keeps every candidate, so the kinds able to hold
    all values seen at a position are the intersection of their holders.
    """
    kinds = {NumType.FLOAT64}
    if _fits_float32(value):
        kinds.add(NumType.FLOAT32)
    if isinstance(value, float):
        if not value.is_integer():
            return frozenset(kinds)
        value = int(value)
    for num_type, (minimum, maximum) in _INTEGER_RANGES.items():
        if minimum <= value <= maximum:
            kinds.add(num_type)
    return frozenset(kinds)


def resolve(observed: NumType, held_by: FrozenSet[NumType], default: NumType) -> NumType:
    """Applies the configured default number type at one position.

    Args:
        observed: Join of the kinds classified at the position
        held_by: Kinds that represent every number seen at the position
        default: Configured default number type

    Returns:
        The default when it holds every number seen, else the observed kind
    """
    if default in held_by:
        return default
    return observed
