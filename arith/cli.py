from __future__ import annotations

import argparse
import logging
import sys
from importlib import metadata
from pathlib import Path
from typing import TextIO

from .config import ArithConfig, load_config, resolve_log_level, setup_logging
from .errors import ArithUserError, ConfigError
from .evaluator import evaluate_line
from .jsonic import dumps as jdumps
from .lexer import Lexer
from .parser import InvalidExpression
from .schema import ErrorInfo, EvalReport, TokenInfo, TokensReport

logger = logging.getLogger(__name__)


def _tool_version() -> str:
    """Version of the installed distribution; 0.0.0 when running from a source checkout."""
    try:
        return metadata.version("arith-calc")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="arith",
        description="Integer arithmetic calculator (+ - * / and parentheses)",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {_tool_version()}")
    p.add_argument(
        "--config",
        type=Path,
        metavar="PATH",
        help="YAML config file (default: $ARITH_CONFIG or ./.arith.yaml)",
    )
    p.add_argument(
        "--format",
        choices=["text", "json"],
        help="output format (overrides the config file)",
    )
    p.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="logging level: DEBUG, INFO, WARNING, ERROR",
    )
    sub = p.add_subparsers(dest="cmd")

    sub.add_parser("repl", help="evaluate stdin line by line (default)")

    sp_eval = sub.add_parser("eval", help="evaluate one expression")
    sp_eval.add_argument("expression", nargs="+", help="expression; several arguments are joined with spaces")

    sp_tokens = sub.add_parser("tokens", help="print the token sequence of an expression")
    sp_tokens.add_argument("expression", nargs="+", help="expression; several arguments are joined with spaces")

    return p


def _error_info(e: ArithUserError) -> ErrorInfo:
    if isinstance(e, InvalidExpression):
        return ErrorInfo(
            type=type(e).__name__,
            message=str(e),
            expected_kind=str(e.expected),
            got=TokenInfo.of(e.got) if e.got is not None else None,
        )
    return ErrorInfo(type=type(e).__name__, message=str(e))


def _report(line: str) -> EvalReport:
    try:
        return EvalReport(expression=line, result=evaluate_line(line))
    except ArithUserError as e:
        logger.debug("Failed to evaluate %r: %s", line, e)
        return EvalReport(expression=line, error=_error_info(e))


def _render(report: EvalReport, fmt: str) -> str:
    if fmt == "json":
        return jdumps(report)
    if report.error is not None:
        return report.error.message
    return str(report.result)


def run_repl(cfg: ArithConfig, fmt: str, stdin: TextIO, stdout: TextIO) -> int:
    """
    Drives the calculator over stdin: one expression per line.

    Blank lines are skipped. Every other line produces exactly one output
    line: the result or the rendered error.
    """
    interactive = bool(cfg.prompt) and stdin.isatty()
    while True:
        if interactive:
            stdout.write(cfg.prompt)
            stdout.flush()
        line = stdin.readline()
        if not line:
            return 0
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        stdout.write(_render(_report(line), fmt) + "\n")
        stdout.flush()


def run_eval(expression: str, fmt: str) -> int:
    report = _report(expression)
    if fmt == "json":
        sys.stdout.write(_render(report, fmt) + "\n")
    elif report.error is not None:
        sys.stderr.write(report.error.message + "\n")
    else:
        sys.stdout.write(f"{report.result}\n")
    return 0 if report.error is None else 1


def run_tokens(expression: str, fmt: str) -> int:
    logger.info("Lexing expression %r", expression)
    tokens = list(Lexer.from_str(expression).tokens())
    if fmt == "json":
        data = TokensReport(expression=expression, tokens=[TokenInfo.of(t) for t in tokens])
        sys.stdout.write(jdumps(data) + "\n")
    else:
        for token in tokens:
            sys.stdout.write(f"{token!r}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)

    try:
        cfg = load_config(ns.config)
        setup_logging(resolve_log_level(ns.log_level, cfg))
    except ConfigError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    fmt: str = ns.format or cfg.format

    if ns.cmd in (None, "repl"):
        return run_repl(cfg, fmt, sys.stdin, sys.stdout)

    expression = " ".join(ns.expression)
    if ns.cmd == "eval":
        return run_eval(expression, fmt)

    if ns.cmd == "tokens":
        return run_tokens(expression, fmt)

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
