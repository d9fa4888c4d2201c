"""

Command line utility to infer a JSON Type Definition schema from example JSON values.

"""


import argparse
import json
import logging
import sys

from jtdinfer import _version
from jtdinfer.hints import Hints
from jtdinfer.jsontojtd import infer_schema_from_text
from jtdinfer.numtype import NumType


def create_parser():
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog='jtd-infer',
        description='Infer a JSON Type Definition schema from lines of JSON.')
    parser.add_argument('input', nargs='?', default='-',
                        help='Where to read examples from. To read from stdin, use "-". Defaults to stdin.')
    parser.add_argument('--enum-hint', dest='enum_hints', action='append', default=[], metavar='POINTER',
                        help='Treat the strings at the given JSON Pointer as an enum. May be repeated.')
    parser.add_argument('--values-hint', dest='values_hints', action='append', default=[], metavar='POINTER',
                        help='Treat the object at the given JSON Pointer as a map. May be repeated.')
    parser.add_argument('--discriminator-hint', dest='discriminator_hints', action='append', default=[],
                        metavar='POINTER',
                        help='Treat the given JSON Pointer as the tag of a discriminated union. May be repeated.')
    parser.add_argument('--default-number-type', default='uint8', choices=[t.value for t in NumType],
                        help='The numeric type to use when it fits every number seen. Defaults to uint8.')
    parser.add_argument('--out', help='Write the schema to this file instead of stdout.')
    parser.add_argument('--verbose', action='store_true', help='Log inference progress to stderr.')
    parser.add_argument('--version', action='store_true', help='Print the version of jtd-infer.')
    return parser


def read_input(input_path):
    """Read the whole input, from stdin when the path is '-'."""
    if input_path == '-':
        return sys.stdin.read()
    with open(input_path, 'r', encoding='utf-8') as f:
        return f.read()


def main():
    """Main function for the command line utility."""
    parser = create_parser()
    args = parser.parse_args()

    if getattr(args, 'version', False):
        print(f'jtd-infer {_version.version}')
        return

    if getattr(args, 'verbose', False):
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    try:
        hints = Hints.from_pointers(args.default_number_type, args.enum_hints,
                                    args.values_hints, args.discriminator_hints)
        schema = infer_schema_from_text(read_input(args.input), hints)

        if args.out:
            with open(args.out, 'w', encoding='utf-8') as f:
                json.dump(schema, f)
        else:
            sys.stdout.write(json.dumps(schema) + '\n')

    except Exception as e:
        print("Error: ", str(e))
        sys.exit(1)

if __name__ == "__main__":
    main()
