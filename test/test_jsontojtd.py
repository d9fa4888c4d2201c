"""Tests for inferring JTD schemas from JSON text and files."""

import json
import os
import sys
import tempfile
import unittest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jtdinfer.jsontojtd import SchemaParams, convert_json_to_jtd, generate_schema, iter_json_values


class TestIterJsonValues(unittest.TestCase):
    """Test cases for decoding streams of JSON values."""

    def test_json_lines(self):
        text = '{"a": 1}\n{"a": 2}\n\n'
        self.assertEqual(list(iter_json_values(text)), [{"a": 1}, {"a": 2}])

    def test_concatenated_values(self):
        self.assertEqual(list(iter_json_values('1 "x"[true]{}null')), [1, "x", [True], {}, None])

    def test_root_array_is_one_value(self):
        self.assertEqual(list(iter_json_values('[1, 2]')), [[1, 2]])

    def test_empty_input(self):
        self.assertEqual(list(iter_json_values('  \n ')), [])

    def test_malformed_input(self):
        with self.assertRaises(json.JSONDecodeError):
            list(iter_json_values('{"a": 1}\n{"a": '))

    def test_non_finite_constants_rejected(self):
        for text in ('{"a": Infinity}', 'NaN', '[1, -Infinity]'):
            with self.assertRaises(ValueError):
                list(iter_json_values(text))


class TestSchemaParams(unittest.TestCase):

    def test_camel_case_keys(self):
        params = SchemaParams.from_dict({
            "input": "1",
            "enumHints": ["/a"],
            "valuesHints": [],
            "discriminatorHints": ["/b/kind"],
            "defaultNumberType": "int16",
        })
        self.assertEqual(params.enum_hints, ["/a"])
        self.assertEqual(params.discriminator_hints, ["/b/kind"])
        self.assertEqual(params.default_number_type, "int16")

    def test_unknown_key(self):
        with self.assertRaises(ValueError):
            SchemaParams.from_dict({"input": "1", "colour": "red"})

    def test_missing_input(self):
        with self.assertRaises(ValueError):
            SchemaParams.from_dict({"enumHints": []})


class TestGenerateSchema(unittest.TestCase):
    """Test cases for the text-to-schema boundary."""

    def test_reference_example(self):
        text = '{"foo": true, "bar": "xxx"}\n{"foo": false, "bar": null, "baz": 5}'
        schema = json.loads(generate_schema(SchemaParams(input=text)))
        self.assertEqual(schema, {
            "properties": {
                "bar": {"type": "string", "nullable": True},
                "foo": {"type": "boolean"},
            },
            "optionalProperties": {"baz": {"type": "uint8"}},
        })

    def test_dict_params(self):
        result = generate_schema({
            "input": '{"kind": "a", "x": 1} {"kind": "b", "y": true}',
            "discriminatorHints": ["/kind"],
            "defaultNumberType": "uint8",
        })
        schema = json.loads(result)
        self.assertEqual(schema["discriminator"], "kind")
        self.assertEqual(schema["mapping"]["a"], {"properties": {"x": {"type": "uint8"}}})

    def test_invalid_number_type(self):
        with self.assertRaises(ValueError) as cm:
            generate_schema(SchemaParams(input='1', default_number_type='number'))
        self.assertIn('number', str(cm.exception))

    def test_malformed_input_aborts(self):
        with self.assertRaises(json.JSONDecodeError):
            generate_schema(SchemaParams(input='{"a": 1} {oops}'))

    def test_non_finite_number_aborts(self):
        with self.assertRaises(ValueError):
            generate_schema(SchemaParams(input='{"a": 1}\n{"a": Infinity}'))


class TestConvertJsonToJtd(unittest.TestCase):

    def test_convert_json_to_jtd_file(self):
        """Test the full file conversion flow."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.jsonl', delete=False) as f:
            f.write('{"id": 1, "name": "Test1"}\n{"id": 2}\n')
            first_file = f.name
        with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
            json.dump({"id": 300, "name": "Test3", "color": "red"}, f)
            second_file = f.name

        try:
            output_file = os.path.join(tempfile.gettempdir(), 'jtdinfer', 'test_json2jtd.jtd.json')
            convert_json_to_jtd(
                input_files=[first_file, second_file],
                jtd_schema_file=output_file,
                enum_hints=['/color']
            )

            with open(output_file, 'r', encoding='utf-8') as f:
                schema = json.load(f)

            self.assertEqual(schema, {
                "properties": {"id": {"type": "uint16"}},
                "optionalProperties": {
                    "color": {"enum": ["red"]},
                    "name": {"type": "string"},
                },
            })
        finally:
            os.unlink(first_file)
            os.unlink(second_file)

    def test_no_input_files(self):
        with self.assertRaises(ValueError):
            convert_json_to_jtd([], os.path.join(tempfile.gettempdir(), 'unused.jtd.json'))


if __name__ == '__main__':
    unittest.main()
