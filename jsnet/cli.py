"""Command-line entry point."""

from __future__ import annotations

import sys

from jsnet.ast import CompilationUnit, to_dict
from jsnet.backend.assembler import CompilationError, assemble
from jsnet.frontend.parse import ParseError, parse
from jsnet.frontend.tokens import TokenizeError
from jsnet.middleend.rewrite import ReplacerVisitor
from jsnet.serialize import to_json

PHASES: list[str] = ["parse"]

USAGE: str = """\
jsnet [OPTIONS] [FILE...] [-o OUTPUT]

Translate C# class declarations to JavaScript. Reads stdin when no FILE
is given; several FILEs are compiled together in order.

Options:
  --stop-at PHASE     Stop after phase: parse (prints the declaration tree as JSON)
  --replace OLD=NEW   Replace identifier OLD with NEW in method bodies (repeatable)
  -o, --output FILE   Write output to FILE instead of stdout
  --help              Show this help message
"""


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + input_file + "'", file=sys.stderr)
            return ("", 1)
    else:
        raw = sys.stdin.buffer.read()
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("error: invalid utf-8 in input", file=sys.stderr)
        return ("", 1)
    return (source, 0)


def write_output(output: str, output_file: str | None) -> int:
    """Write output to file or stdout. Returns 0 on success, 1 on error."""
    if output_file is not None:
        try:
            with open(output_file, "w") as f:
                f.write(output)
        except OSError:
            print("error: cannot write '" + output_file + "'", file=sys.stderr)
            return 1
        return 0
    print(output)
    return 0


def run_pipeline(
    sources: list[str], stop_at: str | None, replacements: dict[str, str]
) -> tuple[int, str]:
    """Run the translation pipeline. Returns (exit_code, output)."""
    units: list[CompilationUnit] = []
    for source in sources:
        try:
            units.append(parse(source))
        except (TokenizeError, ParseError) as e:
            print("error:" + str(e.line) + ":" + str(e.col) + ": " + e.msg, file=sys.stderr)
            return (1, "")
    if stop_at == "parse":
        return (0, to_json(to_dict(units)))
    rewriter = None
    if len(replacements) > 0:
        rewriter = ReplacerVisitor(replacements)
    try:
        output = assemble(units, rewriter)
    except CompilationError as e:
        print("error: " + str(e), file=sys.stderr)
        return (1, "")
    return (0, output)


def parse_args() -> tuple[str | None, dict[str, str], list[str], str | None]:
    """Parse command-line arguments. Returns (stop_at, replacements, input_files, output_file)."""
    args = sys.argv[1:]
    stop_at: str | None = None
    replacements: dict[str, str] = {}
    input_files: list[str] = []
    output_file: str | None = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg == "--stop-at":
            if i + 1 >= len(args):
                print("error: --stop-at requires an argument", file=sys.stderr)
                sys.exit(2)
            stop_at = args[i + 1]
            i += 2
        elif arg == "--replace":
            if i + 1 >= len(args):
                print("error: --replace requires an argument", file=sys.stderr)
                sys.exit(2)
            old, sep, new = args[i + 1].partition("=")
            if sep == "" or not old.isidentifier() or not new.isidentifier():
                print("error: --replace expects OLD=NEW identifiers", file=sys.stderr)
                sys.exit(2)
            replacements[old] = new
            i += 2
        elif arg == "-o" or arg == "--output":
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                sys.exit(2)
            output_file = args[i + 1]
            i += 2
        elif arg.startswith("-") and arg != "-":
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(2)
        else:
            input_files.append(arg)
            i += 1
    if stop_at is not None and stop_at not in PHASES:
        print("error: unknown phase '" + stop_at + "'", file=sys.stderr)
        sys.exit(2)
    return (stop_at, replacements, input_files, output_file)


def main() -> int:
    """Main entry point."""
    stop_at, replacements, input_files, output_file = parse_args()
    sources: list[str] = []
    if len(input_files) == 0:
        source, err = read_source(None)
        if err != 0:
            return err
        if len(source) == 0:
            print("error: no input provided", file=sys.stderr)
            return 2
        sources.append(source)
    for input_file in input_files:
        name: str | None = input_file
        if input_file == "-":
            name = None
        source, err = read_source(name)
        if err != 0:
            return err
        sources.append(source)
    exit_code, output = run_pipeline(sources, stop_at, replacements)
    if exit_code != 0:
        return exit_code
    return write_output(output, output_file)


if __name__ == "__main__":
    sys.exit(main())
