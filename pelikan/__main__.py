"""CLI entry point for the Pelikan interpreter.

Usage:
    python -m pelikan [-v|-vv|-vvv|-vvvv] [--feathers-path PATHS] <program_file>
    python -m pelikan [-v...] --emit-ast <program_file>
    python -m pelikan [-v...] --ast <ast_json_file>
    python -m pelikan                (interactive REPL)

Options:
  -v               Increase debug verbosity (can be repeated)
  --feathers-path  Extra feather search directories, separated by os.pathsep
  --emit-ast       Parse the given .pl file and emit an AST JSON file
  --ast            Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Feathers are searched in the built-in
feathers directory, then in PELIKAN_FEATHERS_PATH, then in --feathers-path.
"""

import argparse
import json
import os
import sys
from pathlib import Path
from .ast_json import ast_to_obj, ast_from_obj
from .context import ExecutionContext
from .errors import LexError, PelikanError
from .interpreter import Interpreter
from .lexer import read_source, tokenize
from .parser import parse_program
from .types import NUN, to_string

BANNER = "Pelikan Interpreter (pelin) v0.1.0"


def _read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    try:
        return read_source(path)
    except LexError as e:
        _fail(e)


def _fail(e: BaseException) -> None:
    if isinstance(e, RecursionError):
        print("Runtime error: maximum recursion depth exceeded", file=sys.stderr)
    else:
        print(f"Error: {e}", file=sys.stderr)
    sys.exit(1)


def _is_incomplete(chunk: str) -> bool:
    """True while a block, string or comment in the chunk is still open."""
    try:
        tokens = tokenize(chunk)
    except LexError as e:
        return e.message.startswith('unterminated')
    depth = 0
    for token in tokens:
        if token.type == '{':
            depth += 1
        elif token.type == '}':
            depth -= 1
    return depth > 0


def repl(interpreter: Interpreter) -> None:
    """Read lines and evaluate them in one persistent scope; 'exit' quits."""
    print(BANNER)
    print("Type 'exit' to quit the REPL")
    buffer = []
    while True:
        try:
            line = input('pelin> ' if not buffer else '...... ')
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not buffer and line.strip() == 'exit':
            break
        buffer.append(line)
        chunk = '\n'.join(buffer)
        if _is_incomplete(chunk):
            continue
        buffer = []
        try:
            program = parse_program(chunk)
            value = interpreter.execute_program(program, interpreter.global_env)
        except (PelikanError, RecursionError) as e:
            print(f"Error: {e}" if isinstance(e, PelikanError) else "Error: maximum recursion depth exceeded")
            continue
        if value is not NUN:
            print(to_string(value))
    interpreter.close()


def main(argv: list = None) -> None:
    parser = argparse.ArgumentParser(description="Pelikan language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--feathers-path', metavar='PATHS', default=None,
                        help='extra feather search directories, separated by os.pathsep')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='PL_FILE', help='emit AST JSON for the given .pl file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Pelikan program file (.pl) to execute')
    args = parser.parse_args(argv)

    extra_paths = [p for p in args.feathers_path.split(os.pathsep) if p] if args.feathers_path else None

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = _read_source(program_file)
        try:
            ast_program = parse_program(source)
        except PelikanError as e:
            _fail(e)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    context = ExecutionContext.create(extra_paths)

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        data = json.loads(_read_source(ast_path))
        ast_program = ast_from_obj(data)
        interpreter = Interpreter(context, debug_level=args.v)
        try:
            interpreter.run(ast_program)
        except (PelikanError, RecursionError) as e:
            _fail(e)
        return

    # No program: interactive REPL
    if not args.program:
        repl(Interpreter(context, debug_level=args.v))
        return

    program_file = Path(args.program)
    source = _read_source(program_file)
    interpreter = Interpreter(context, debug_level=args.v)
    interpreter.global_env.origin_dir = str(program_file.resolve().parent)
    try:
        ast_program = parse_program(source)
        interpreter.run(ast_program)
    except (PelikanError, RecursionError) as e:
        _fail(e)
    finally:
        interpreter.close()


if __name__ == '__main__':
    main()
