"""CLI entry point for the While interpreter.

Usage:
    python -m whilelang [-v|-vv|-vvv] [--parser {descent,grammar}] <program_file>
    python -m whilelang [-v...] --emit-ast <program_file>
    python -m whilelang [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --parser      Pick the hand-written parser (default) or the Lark grammar
  --emit-ast    Parse the given .while file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. On success the final state is printed as
`[name -> value, ...]`.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from .ast_json import ast_to_obj, ast_from_obj
from .errors import InterpretError, LexError, ParseError
from .interpreter import Interpreter, parse_source
from .source_navigator import SourceNavigator


def read_source(path: Path) -> Optional[str]:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        return None
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def report_syntax_error(source: str, error) -> None:
    print(f"Error: {error}", file=sys.stderr)
    print(SourceNavigator(source).get_annotated_span(error.span), file=sys.stderr)


def execute(ast, debug_level: int) -> None:
    interpreter = Interpreter(ast, debug_level=debug_level)
    try:
        state = interpreter.interpret()
    except InterpretError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    print(state)


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="While language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--parser', choices=['descent', 'grammar'], default='descent',
                        help='parser implementation to use (default: descent)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='WHILE_FILE', help='emit AST JSON for the given .while file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='While program file (.while) to execute')
    args = parser.parse_args(argv)

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        text = read_source(ast_path)
        if text is None:
            sys.exit(1)
        try:
            ast_program = ast_from_obj(json.loads(text))
        except (ValueError, TypeError, KeyError) as e:
            print(f"Error: invalid AST file {ast_path}: {e}", file=sys.stderr)
            sys.exit(1)
        execute(ast_program, args.v)
        return

    program = args.emit_ast or args.program
    if not program:
        parser.error('missing program file; or use --emit-ast/--ast')
    program_file = Path(program)
    source = read_source(program_file)
    if source is None:
        sys.exit(1)
    try:
        ast_program = parse_source(source, args.parser)
    except (LexError, ParseError) as e:
        report_syntax_error(source, e)
        sys.exit(1)

    # Emit AST mode
    if args.emit_ast:
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    execute(ast_program, args.v)


if __name__ == '__main__':
    main()
