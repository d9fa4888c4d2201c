"""Conversion of an inferred schema tree into a JSON Type Definition schema.

The output is a plain dict in RFC 8927 form, ready for `json.dump`. Object
keys and enum members are sorted so the output is reproducible.
"""

from typing import Any, Dict

from jtdinfer import inferred_schema as inferred
from jtdinfer.numtype import NumType, resolve


def to_jtd(node: inferred.InferredSchema, default_num_type: NumType = NumType.UINT8) -> Dict[str, Any]:
    """Emits the JTD schema for an inferred schema tree.

    Args:
        node: Root of the inferred schema tree
        default_num_type: Numeric type to prefer wherever it holds every
            number observed at a position

    Returns:
        JTD schema as a dict
    """
    schema = _to_jtd_form(node, default_num_type)
    if node.nullable:
        schema["nullable"] = True
    return schema


def _to_jtd_form(node: inferred.InferredSchema, default_num_type: NumType) -> Dict[str, Any]:
    if isinstance(node, (inferred.Unknown, inferred.Any)):
        return {}
    if isinstance(node, inferred.Boolean):
        return {"type": "boolean"}
    if isinstance(node, inferred.String):
        return {"type": "string"}
    if isinstance(node, inferred.Timestamp):
        return {"type": "timestamp"}
    if isinstance(node, inferred.Number):
        return {"type": resolve(node.num_type, node.held_by, default_num_type).value}
    if isinstance(node, inferred.Enum):
        return {"enum": sorted(node.values)}
    if isinstance(node, inferred.Elements):
        return {"elements": to_jtd(node.items, default_num_type)}
    if isinstance(node, inferred.Properties):
        return _properties_form(node, default_num_type)
    if isinstance(node, inferred.Values):
        return {"values": to_jtd(node.values, default_num_type)}
    if isinstance(node, inferred.Discriminator):
        return {
            "discriminator": node.tag,
            "mapping": {
                tag_value: _properties_form(variant, default_num_type)
                for tag_value, variant in sorted(node.mapping.items())
            },
        }
    raise TypeError(f"Unsupported inferred schema node: {type(node).__name__}")


def _properties_form(node: inferred.Properties, default_num_type: NumType) -> Dict[str, Any]:
    required: Dict[str, Any] = {}
    optional: Dict[str, Any] = {}
    for key in sorted(node.properties):
        target = required if key in node.required else optional
        target[key] = to_jtd(node.properties[key], default_num_type)

    schema: Dict[str, Any] = {}
    # the properties form needs at least one of the two keywords
    if required or not optional:
        schema["properties"] = required
    if optional:
        schema["optionalProperties"] = optional
    return schema
