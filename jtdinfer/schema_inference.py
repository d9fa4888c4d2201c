"""Schema inference driver.

This module ties the pieces together:
- Inferrer: folds JSON values one at a time and emits the JTD schema
- infer_jtd_schema_from_json: one-shot inference over a list of values
"""

import logging
from typing import Any, Dict, Iterable

from jtdinfer.emission import to_jtd
from jtdinfer.hints import Hints
from jtdinfer.inferred_schema import InferredSchema, Unknown, merge

logger = logging.getLogger(__name__)


class Inferrer:
    """Keeps track of a sequence of example values and infers their JTD schema."""

    def __init__(self, hints: Hints | None = None):
        """Initialize the inferrer.

        Args:
            hints: Hint configuration; defaults to no hints and uint8 as the
                default number type
        """
        self.hints = hints or Hints()
        self.inference: InferredSchema = Unknown()
        self.example_count = 0

    def infer(self, value: Any) -> 'Inferrer':
        """Folds one example value into the inference.

        Returns:
            The inferrer itself, so calls can be chained
        """
        self.inference = merge(self.inference, value, self.hints)
        self.example_count += 1
        return self

    def infer_from_json_values(self, values: Iterable[Any]) -> Dict[str, Any]:
        """Folds every value in `values` and returns the resulting schema."""
        for value in values:
            self.infer(value)
        return self.into_schema()

    def into_schema(self) -> Dict[str, Any]:
        """Emits the JTD schema accepting every value folded in so far."""
        logger.debug("Emitting schema from %d example(s)", self.example_count)
        return to_jtd(self.inference, self.hints.default_num_type)


# Convenience functions for direct use

def infer_jtd_schema_from_json(
    json_values: Iterable[Any],
    default_number_type: str = 'uint8',
    enum_hints: Iterable[str] = (),
    values_hints: Iterable[str] = (),
    discriminator_hints: Iterable[str] = ()
) -> Dict[str, Any]:
    """Infers a JTD schema from JSON values.

    Args:
        json_values: Parsed JSON values
        default_number_type: Name of the JTD numeric type to prefer
        enum_hints: JSON Pointers of positions to infer as enums
        values_hints: JSON Pointers of objects to infer as maps
        discriminator_hints: JSON Pointers of discriminator tag properties

    Returns:
        Inferred JTD schema

    Raises:
        ValueError: on an unknown number type name or a malformed pointer
    """
    hints = Hints.from_pointers(default_number_type, enum_hints, values_hints, discriminator_hints)
    return Inferrer(hints).infer_from_json_values(json_values)
