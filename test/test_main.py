import argparse
import io
import json
import os
import tempfile
import sys
import unittest
from unittest.mock import patch

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from jtdinfer.jtdinfer import main


def make_args(**overrides):
    """Provides a namespace with the parser's defaults."""
    args = dict(input='-', enum_hints=[], values_hints=[], discriminator_hints=[],
                default_number_type='uint8', out=None, verbose=False, version=False)
    args.update(overrides)
    return argparse.Namespace(**args)


def write_examples(text):
    """Writes example JSON to a temp file and returns its path."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.jsonl', delete=False, encoding='utf-8') as f:
        f.write(text)
        return f.name


class TestMain(unittest.TestCase):

    def test_main_version(self):
        """Test main function with --version."""
        with patch('argparse.ArgumentParser.parse_args', return_value=make_args(version=True)):
            with patch('builtins.print') as mock_print:
                main()
        self.assertTrue(mock_print.call_args[0][0].startswith('jtd-infer '))

    def test_main_reads_stdin(self):
        """Test main function reading examples from stdin."""
        stdin = io.StringIO('{"foo": true, "bar": "xxx"}\n{"foo": false, "bar": null, "baz": 5}\n')
        with patch('argparse.ArgumentParser.parse_args', return_value=make_args()), \
                patch('sys.stdin', stdin), patch('sys.stdout', new_callable=io.StringIO) as stdout:
            main()
        schema = json.loads(stdout.getvalue())
        self.assertEqual(schema["optionalProperties"], {"baz": {"type": "uint8"}})
        self.assertEqual(schema["properties"]["bar"], {"type": "string", "nullable": True})

    def test_main_input_file_and_out(self):
        """Test main function with an input file and --out."""
        input_file = write_examples('{"color": "red", "n": 1}\n{"color": "blue", "n": 2}\n')
        output_file = os.path.join(tempfile.gettempdir(), 'jtdinfer_output.jtd.json')
        try:
            args = make_args(input=input_file, out=output_file, enum_hints=['/color'],
                             default_number_type='int32')
            with patch('argparse.ArgumentParser.parse_args', return_value=args):
                main()
            with open(output_file, 'r', encoding='utf-8') as f:
                schema = json.load(f)
            self.assertEqual(schema, {
                "properties": {"color": {"enum": ["blue", "red"]}, "n": {"type": "int32"}},
            })
        finally:
            os.unlink(input_file)

    def test_main_malformed_input(self):
        """Test main function exits with an error on malformed JSON."""
        input_file = write_examples('{"a": 1}\n{"a": \n')
        try:
            with patch('argparse.ArgumentParser.parse_args', return_value=make_args(input=input_file)):
                with patch('builtins.print') as mock_print:
                    with self.assertRaises(SystemExit) as cm:
                        main()
            self.assertEqual(cm.exception.code, 1)
            self.assertEqual(mock_print.call_args[0][0], "Error: ")
        finally:
            os.unlink(input_file)

    def test_main_bad_hint(self):
        """Test main function exits with an error on an invalid hint pointer."""
        with patch('argparse.ArgumentParser.parse_args', return_value=make_args(enum_hints=['color'])):
            with patch('builtins.print'):
                with self.assertRaises(SystemExit):
                    main()


if __name__ == '__main__':
    unittest.main()
