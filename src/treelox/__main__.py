import argparse
import logging
import sys
from pathlib import Path

from .code import ProgramCode
from .errors import EX_SOFTWARE, LoxError
from .main import Interpreter
from .printer import to_sexpr
from .scanner import Scanner

EX_NOINPUT = 66
RECURSION_LIMIT = 10_000

COMMANDS = ("tokenize", "parse", "evaluate", "run")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m treelox",
        usage="python -m treelox {tokenize,parse,evaluate,run} <script.lox>",
    )
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("script")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="log level for interpreter diagnostics (written to stderr)",
    )
    return parser


def _report(exc: LoxError) -> int:
    print(exc, file=sys.stderr)
    return exc.exit_code


def tokenize(source: str) -> int:
    tokens, errors = Scanner(source).scan_tokens()
    for error in errors:
        print(error, file=sys.stderr)
    for token in tokens:
        print(token)
    return errors[0].exit_code if errors else 0


def parse(source: str, filename: str) -> int:
    try:
        code = ProgramCode(source, filename)
    except LoxError as exc:
        return _report(exc)
    for stmt in code.statements:
        print(to_sexpr(stmt))
    return 0


def execute(source: str, filename: str, mode: str) -> int:
    interpreter = Interpreter(mode)
    # each Lox call costs several Python frames
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))
    try:
        result = interpreter.run(source, filename)
    except RecursionError:
        print("Fatal error: stack overflow.", file=sys.stderr)
        return EX_SOFTWARE
    if result.exception is not None:
        return _report(result.exception)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args_list = sys.argv[1:] if argv is None else argv
    try:
        args = parser.parse_args(args_list)
    except SystemExit as exc:
        return int(exc.code)

    logging.basicConfig(
        level=args.log_level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )

    script_path = Path(args.script).resolve()
    if not script_path.is_file():
        print(f"treelox: script not found: {script_path}", file=sys.stderr)
        return EX_NOINPUT

    source = script_path.read_text()
    if args.command == "tokenize":
        return tokenize(source)
    if args.command == "parse":
        return parse(source, str(script_path))
    return execute(source, str(script_path), args.command)


if __name__ == "__main__":
    raise SystemExit(main())
