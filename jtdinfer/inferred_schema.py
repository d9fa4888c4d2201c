"""Inferred schema tree and the merge that folds example values into it.

Each node describes every value observed at one document position. Merging
is total: values that no single JTD form can describe together degrade the
position to `Any` instead of failing. The result does not depend on the order
in which examples are merged.
"""

import datetime
import logging
import re
from dataclasses import dataclass, field
from typing import Any as AnyValue, Dict, FrozenSet, Optional, Set

from jtdinfer.hints import Hints, Path, VALUES_SEGMENT, path_to_pointer
from jtdinfer.numtype import NumType, classify, holders, join

logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class InferredSchema:
    """Base of all inferred schema variants."""
    nullable: bool = False


@dataclass
class Unknown(InferredSchema):
    """No non-null value has been seen at this position yet."""


@dataclass
class Any(InferredSchema):
    """Values seen here have conflicting shapes; anything is accepted."""


@dataclass
class Boolean(InferredSchema):
    pass


@dataclass
class Number(InferredSchema):
    num_type: NumType
    held_by: FrozenSet[NumType]  # kinds that represent every number seen


@dataclass
class String(InferredSchema):
    pass


@dataclass
class Timestamp(InferredSchema):
    """Every string seen here so far is an RFC 3339 timestamp."""


@dataclass
class Enum(InferredSchema):
    values: Set[str] = field(default_factory=set)


@dataclass
class Elements(InferredSchema):
    items: InferredSchema = field(default_factory=Unknown)


@dataclass
class Properties(InferredSchema):
    properties: Dict[str, InferredSchema] = field(default_factory=dict)
    required: Set[str] = field(default_factory=set)  # keys present in every object seen


@dataclass
class Values(InferredSchema):
    values: InferredSchema = field(default_factory=Unknown)


@dataclass
class Discriminator(InferredSchema):
    tag: str
    mapping: Dict[str, Properties] = field(default_factory=dict)


_TIMESTAMP_PATTERN = re.compile(
    r'([0-9]{4})-([0-9]{2})-([0-9]{2})[Tt]([0-9]{2}):([0-9]{2}):([0-9]{2})(\.[0-9]+)?([Zz]|[+-]([0-9]{2}):([0-9]{2}))')


def is_timestamp(text: str) -> bool:
    """Checks whether a string is an RFC 3339 date-time.

    Leap seconds (second 60) are accepted, as RFC 3339 allows them.
    """
    match = _TIMESTAMP_PATTERN.fullmatch(text)
    if not match:
        return False
    year, month, day, hour, minute, second = (int(g) for g in match.group(1, 2, 3, 4, 5, 6))
    try:
        datetime.date(year, month, day)
    except ValueError:
        return False
    if hour > 23 or minute > 59 or second > 60:
        return False
    if match.group(9) is not None and (int(match.group(9)) > 23 or int(match.group(10)) > 59):
        return False
    return True


def _is_number(value: AnyValue) -> bool:
    # bool is a subclass of int
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def merge(current: InferredSchema, value: AnyValue, hints: Hints, path: Path = ()) -> InferredSchema:
    """Folds one JSON value into the inferred schema for its position.

    `current` is owned by the caller and may be updated in place; the
    returned node replaces it.

    Args:
        current: The schema inferred so far at `path`
        value: The newly observed JSON value (as decoded by `json`)
        hints: Hint configuration of the run
        path: Position of `value` relative to the document root

    Returns:
        The schema accepting every value previously merged into `current`
        plus `value`
    """
    if value is None:
        current.nullable = True
        return current

    nullable = current.nullable
    merged = _merge_value(current, value, hints, path)
    merged.nullable = merged.nullable or nullable
    return merged


def _merge_value(current: InferredSchema, value: AnyValue, hints: Hints, path: Path) -> InferredSchema:
    if isinstance(current, Any):
        return current
    if isinstance(current, Unknown):
        return _infer_fresh(value, hints, path)

    if isinstance(current, Boolean) and isinstance(value, bool):
        return current

    if isinstance(current, Number) and _is_number(value):
        current.num_type = join(current.num_type, classify(value))
        current.held_by &= holders(value)
        return current

    if isinstance(value, str):
        if isinstance(current, String):
            return current
        if isinstance(current, Timestamp):
            return current if is_timestamp(value) else String()
        if isinstance(current, Enum):
            current.values.add(value)
            return current

    if isinstance(current, Elements) and isinstance(value, list):
        for item in value:
            current.items = merge(current.items, item, hints, path)
        return current

    if isinstance(value, dict):
        if isinstance(current, Properties):
            return _merge_properties(current, value, hints, path)
        if isinstance(current, Values):
            return _merge_values(current, value, hints, path)
        if isinstance(current, Discriminator):
            return _merge_discriminator(current, value, hints, path)

    return _conflict(current, value, path)


def _infer_fresh(value: AnyValue, hints: Hints, path: Path) -> InferredSchema:
    if isinstance(value, bool):
        return Boolean()
    if _is_number(value):
        return Number(classify(value), holders(value))
    if isinstance(value, str):
        if hints.is_enum(path):
            return Enum({value})
        return Timestamp() if is_timestamp(value) else String()
    if isinstance(value, list):
        return _merge_value(Elements(), value, hints, path)
    if isinstance(value, dict):
        tag = hints.discriminator_tag(path)
        if tag is not None:
            return _merge_discriminator(Discriminator(tag), value, hints, path)
        if hints.is_values(path):
            return _merge_values(Values(), value, hints, path)
        return _merge_properties(Properties(required=set(value)), value, hints, path)
    # json never produces anything else, but merge stays total
    return Any()


def _merge_properties(current: Properties, value: Dict[str, AnyValue], hints: Hints, path: Path) -> Properties:
    current.required &= set(value)
    for key, member in value.items():
        child = current.properties.get(key, Unknown())
        current.properties[key] = merge(child, member, hints, path + (key,))
    return current


def _merge_values(current: Values, value: Dict[str, AnyValue], hints: Hints, path: Path) -> Values:
    member_path = path + (VALUES_SEGMENT,)
    for member in value.values():
        current.values = merge(current.values, member, hints, member_path)
    return current


def _merge_discriminator(current: Discriminator, value: Dict[str, AnyValue], hints: Hints,
                         path: Path) -> InferredSchema:
    tag_value = value.get(current.tag)
    if not isinstance(tag_value, str):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Object at %r has no string %r tag, widening to any",
                         path_to_pointer(path), current.tag)
        return Any()

    rest = {k: v for k, v in value.items() if k != current.tag}
    variant: Optional[Properties] = current.mapping.get(tag_value)
    if variant is None:
        variant = Properties(required=set(rest))
    current.mapping[tag_value] = _merge_properties(variant, rest, hints, path)
    return current


def _conflict(current: InferredSchema, value: AnyValue, path: Path) -> InferredSchema:
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Conflicting shapes at %r (%s vs %s), widening to any",
                     path_to_pointer(path), type(current).__name__, type(value).__name__)
    return Any()
