"""Infers JTD schemas from JSON text and files.

This module provides:
- iter_json_values: decode a stream of concatenated JSON values
- generate_schema: text in, serialized schema out
- convert_json_to_jtd: infer a schema from JSON files and write it to a file
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

from jtdinfer.hints import Hints
from jtdinfer.schema_inference import Inferrer

logger = logging.getLogger(__name__)

_WHITESPACE = ' \t\n\r'


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Invalid JSON number: {name}")


def iter_json_values(text: str) -> Iterator[Any]:
    """Yields each JSON value in a text of whitespace-separated values.

    Handles single documents, JSON Lines and values simply concatenated
    one after another. Unlike a root-level array, each value is yielded
    as-is.

    Raises:
        json.JSONDecodeError: on malformed input
        ValueError: on NaN or Infinity, which are not JSON
    """
    decoder = json.JSONDecoder(parse_constant=_reject_constant)
    pos = 0
    end = len(text)
    while True:
        while pos < end and text[pos] in _WHITESPACE:
            pos += 1
        if pos >= end:
            return
        value, pos = decoder.raw_decode(text, pos)
        yield value


@dataclass
class SchemaParams:
    """Parameters of a single text-to-schema run."""
    input: str
    enum_hints: List[str] = field(default_factory=list)
    values_hints: List[str] = field(default_factory=list)
    discriminator_hints: List[str] = field(default_factory=list)
    default_number_type: str = 'uint8'

    # camelCase keys accepted by from_dict
    _ALIASES = {
        'enumHints': 'enum_hints',
        'valuesHints': 'values_hints',
        'discriminatorHints': 'discriminator_hints',
        'defaultNumberType': 'default_number_type',
    }

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'SchemaParams':
        """Builds parameters from a dict with snake_case or camelCase keys.

        Raises:
            ValueError: on unknown keys or a missing input
        """
        kwargs = {}
        for key, value in params.items():
            name = cls._ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise ValueError(f"Unknown schema parameter: {key}")
            kwargs[name] = value
        if 'input' not in kwargs:
            raise ValueError("Schema parameter 'input' is required")
        return cls(**kwargs)

    def hints(self) -> Hints:
        return Hints.from_pointers(self.default_number_type, self.enum_hints,
                                   self.values_hints, self.discriminator_hints)


def infer_schema_from_text(text: str, hints: Hints) -> Dict[str, Any]:
    """Folds every JSON value in `text` and returns the inferred schema."""
    inferrer = Inferrer(hints)
    for value in iter_json_values(text):
        inferrer.infer(value)
    logger.info("Inferred schema from %d value(s)", inferrer.example_count)
    return inferrer.into_schema()


def generate_schema(params: SchemaParams | Dict[str, Any]) -> str:
    """Infers a JTD schema from JSON text and returns it serialized.

    Hints are validated before any input is decoded. There is no partial
    result: any configuration or decoding error propagates.

    Args:
        params: A SchemaParams record or an equivalent dict

    Returns:
        The schema as compact JSON text
    """
    if isinstance(params, dict):
        params = SchemaParams.from_dict(params)
    schema = infer_schema_from_text(params.input, params.hints())
    return json.dumps(schema)


def convert_json_to_jtd(
    input_files: List[str],
    jtd_schema_file: str,
    default_number_type: str = 'uint8',
    enum_hints: List[str] | None = None,
    values_hints: List[str] | None = None,
    discriminator_hints: List[str] | None = None
) -> None:
    """Infers a JTD schema from JSON files.

    Every file may hold any number of whitespace-separated JSON values; the
    values of all files are analyzed together to produce one schema.

    Args:
        input_files: List of JSON file paths to analyze
        jtd_schema_file: Output path for the JTD schema
        default_number_type: Name of the JTD numeric type to prefer
        enum_hints: JSON Pointers of positions to infer as enums
        values_hints: JSON Pointers of objects to infer as maps
        discriminator_hints: JSON Pointers of discriminator tag properties
    """
    if not input_files:
        raise ValueError("At least one input file is required")

    hints = Hints.from_pointers(default_number_type, enum_hints or [],
                                values_hints or [], discriminator_hints or [])

    inferrer = Inferrer(hints)
    for file_path in input_files:
        with open(file_path, 'r', encoding='utf-8') as f:
            content = f.read()
        for value in iter_json_values(content):
            inferrer.infer(value)
    logger.info("Inferred schema from %d value(s) in %d file(s)", inferrer.example_count, len(input_files))

    # Ensure output directory exists
    output_dir = os.path.dirname(jtd_schema_file)
    if output_dir and not os.path.exists(output_dir):
        os.makedirs(output_dir)

    with open(jtd_schema_file, 'w', encoding='utf-8') as f:
        json.dump(inferrer.into_schema(), f, indent=2)
