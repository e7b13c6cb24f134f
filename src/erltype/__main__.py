"""CLI entry point: run `erltype type TEXT` or `python -m erltype type TEXT`."""

import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    import logging
    from .translator import Translator
    from .shared.errors import ErltypeError
    from .utils.io_utils import read_input, read_source_file

    parser = argparse.ArgumentParser(prog="erltype", description="Print Dialyzer type notation as Elixir.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("type", "Print a type"),
        ("pattern", "Print a pattern (an optional 'pattern ' prefix is dropped)"),
        ("args", "Print an argument list"),
        ("shallow", "Print a type without record contents"),
    ):
        command = commands.add_parser(name, help=help_text)
        command.add_argument("text", help="Notation text, or - for standard input")

    contract = commands.add_parser("contract", help="Print a contract")
    contract.add_argument("text", help="Notation text, or - for standard input")
    contract.add_argument("--module", help="Module name to strip from the first clause")
    contract.add_argument("--function", help="Function name to strip from the first clause")

    diff = commands.add_parser("diff", help="Show mismatched fields between two types")
    diff.add_argument("expected", help="Expected notation text, or - for standard input")
    diff.add_argument("actual", help="Actual notation text")

    file_command = commands.add_parser("file", help="Print every line of a file as a type")
    file_command.add_argument("path", help="Path to a file with one notation per line")

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    translator = Translator()
    try:
        if args.command == "contract":
            output = translator.print_contract(read_input(args.text), args.module, args.function)
        elif args.command == "diff":
            output = translator.diff(read_input(args.expected), read_input(args.actual))
        elif args.command == "file":
            try:
                source = read_source_file(args.path)
            except OSError as e:
                sys.stderr.write(f"erltype: error: could not read file: {e}\n")
                return 1
            output = "\n".join(translator.print_type(line) for line in source.splitlines() if line.strip())
        else:
            text = read_input(args.text)
            printers = {
                "type": translator.print_type,
                "pattern": translator.print_pattern,
                "args": translator.print_args,
                "shallow": translator.shallow_print_type,
            }
            output = printers[args.command](text)
    except ErltypeError as e:
        sys.stderr.write(f"{e}\n")
        return 1

    if output:
        sys.stdout.write(output + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
