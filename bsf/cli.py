"""The bsf command line: attestation inspection, direnv setup and configuration."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Sequence

from bsf import styles
from bsf.attestation import (
    Statement,
    get_relevant_statements,
    validate_in_toto_statement,
)
from bsf.config import pre_check_conf
from bsf.direnv import fetch_gitignore, generate_envrc, set_direnv

DEBUG_DIR = ""

VALID_PRED_ARGS = (
    "provenance",
    "vulnerability",
    "vsa",
    "test-result",
    "spdx",
    "scai",
    "runtime-trace",
    "release",
    "link",
    "cdx",
)

TABLE_HEADER = ("Predicate", "Subjects")

ATT_HINT = "hint: use bsf att with a subcomand"

_GO_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def get_debug_path() -> str:
    """Return the directory to run in when debugging, or "" when none is set."""
    global DEBUG_DIR
    env_dir = os.environ.get("BSF_DEBUG_DIR", "")
    if env_dir:
        DEBUG_DIR = env_dir
    return DEBUG_DIR


def _validate_jsonl(data: bytes) -> None:
    text = data.decode("utf-8", errors="replace")
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    for number, line in enumerate(lines, start=1):
        try:
            json.loads(line.removesuffix("\r"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON on line {number}: {exc}") from exc


def validate_file(
    file_path: str | Path, file_type: str
) -> dict[str, list[Statement]] | None:
    """Check a file as JSON Lines ("JSON") or as in-toto statements ("inToto").

    Returns the statements grouped by predicate type for "inToto" and None for
    "JSON"; raises when the file is unreadable or invalid.
    """
    data = Path(file_path).read_bytes()
    if file_type == "JSON":
        _validate_jsonl(data)
        return None
    if file_type == "inToto":
        return validate_in_toto_statement(data)
    raise ValueError(f"unknown file type: {file_type}")


def conv_pred_sub_to_rows(ps_map: dict[str, list[Statement]]) -> list[tuple[str, str]]:
    """One row per statement: its predicate type and its comma-joined subject names."""
    return [
        (statement.predicate_type, ", ".join(s.name for s in statement.subject))
        for statements in ps_map.values()
        for statement in statements
    ]


def render_pred_subj_table(ps_map: dict[str, list[Statement]]) -> str:
    """Render the predicate/subject rows as a bordered text table."""
    header = tuple(title.upper() for title in TABLE_HEADER)
    rows = conv_pred_sub_to_rows(ps_map)
    widths = [
        max(len(cell) for cell in column) for column in zip(header, *rows)
    ]
    border = "+" + "+".join("-" * (width + 2) for width in widths) + "+"

    def line(cells: Sequence[str]) -> str:
        return "|" + "|".join(f" {cell.ljust(width)} " for cell, width in zip(cells, widths)) + "|"

    out = [border, line(header), border]
    if rows:
        out.extend(line(row) for row in rows)
        out.append(border)
    return "\n".join(out)


def _marshal_indent(data: Any) -> str:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    for char, escape in _GO_JSON_ESCAPES.items():
        text = text.replace(char, escape)
    return text.replace("\n", "\n ")


def _error(*parts: object) -> None:
    print(styles.ERROR_STYLE.render(*parts))


def _load_statements(file_path: str) -> dict[str, list[Statement]] | None:
    try:
        validate_file(file_path, "JSON")
    except (OSError, ValueError) as exc:
        _error("error parsing JSONL:", str(exc))
        return None
    try:
        return validate_file(file_path, "inToto")
    except (OSError, ValueError) as exc:
        _error("error validating intoto attestation:", str(exc))
        return None


def _cmd_att_cat(args: argparse.Namespace) -> int:
    if not args.path or not args.predicate_type:
        print(
            styles.HINT_STYLE.render(
                "hint: bsf att cat <path-to-file> --predicate-type <predicate-type"
            )
        )
        return 1
    if args.predicate_type not in VALID_PRED_ARGS:
        print(
            styles.HINT_STYLE.render(
                "Hint: validate predicate types:", ", ".join(VALID_PRED_ARGS)
            ),
            end="",
        )
        return 1

    ps_map = _load_statements(args.path)
    if ps_map is None:
        return 1

    relevant = get_relevant_statements(ps_map, args.predicate_type, args.subject)
    if not relevant:
        _error("no relevant statements found")
        return 1

    for statement in relevant:
        data = statement.predicate if args.predicate else statement.to_dict()
        text = _marshal_indent(data)
        if args.output:
            try:
                Path(args.output).write_text(text, encoding="utf-8")
            except OSError as exc:
                print(exc)
                return 1
        else:
            print(text)
    return 0


def _cmd_att_ls(args: argparse.Namespace) -> int:
    if not args.path:
        print(styles.HINT_STYLE.render("hint: bsf att ls <path.to.JSONL_file>"))
        return 1
    try:
        validate_file(args.path, "JSON")
    except (OSError, ValueError) as exc:
        _error("error parsing JSONL:", str(exc))
        return 1
    print(styles.SUCCESS_STYLE.render("✅ JSONL is valid"))

    try:
        ps_map = validate_file(args.path, "inToto")
    except (OSError, ValueError) as exc:
        _error("error validating intoto attestation:", str(exc))
        return 1
    print(styles.SUCCESS_STYLE.render("✅ intoto attestations are valid"))
    print(render_pred_subj_table(ps_map or {}))
    return 0


def _cmd_configure(args: argparse.Namespace) -> int:
    try:
        pre_check_conf()
    except (OSError, ValueError) as exc:
        _error("error:", str(exc))
        return 1
    return 0


def _cmd_direnv(args: argparse.Namespace) -> int:
    try:
        generate_envrc()
        fetch_gitignore()
        if args.env:
            set_direnv(args.env)
    except (OSError, ValueError) as exc:
        _error("error: ", str(exc))
        return 1
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bsf",
        description="bsf CLI lets you manage OS dependencies of your application seamlessly",
    )
    commands = parser.add_subparsers(dest="command")

    att = commands.add_parser(
        "att",
        help="perform attestation ops",
        description="used to perform various operations on your attestations",
    )
    att_commands = att.add_subparsers(dest="att_command")

    ls = att_commands.add_parser("ls", help="lists predicate types")
    ls.add_argument("path", nargs="?", default="")
    ls.set_defaults(handler=_cmd_att_ls)

    cat = att_commands.add_parser("cat", help="prints out the predicate type in JSON")
    cat.add_argument("path", nargs="?", default="")
    cat.add_argument("-t", "--predicate-type", default="", help="type of the predicate")
    cat.add_argument("-s", "--subject", default="", help="subject of the predicate")
    cat.add_argument("-o", "--output", default="", help="name of the output file")
    cat.add_argument("-p", "--predicate", action="store_true", help="print predicate")
    cat.set_defaults(handler=_cmd_att_cat)

    direnv = commands.add_parser(
        "direnv", help="direnv initializes the direnv environment for the project"
    )
    direnv.add_argument(
        "-e", "--env", default="", help="set environment variable [key=value]"
    )
    direnv.set_defaults(handler=_cmd_direnv)

    if os.environ.get("BSF_DEBUG_MODE") == "true":
        configure = commands.add_parser(
            "configure", help="configures global settings for bsf"
        )
        configure.set_defaults(handler=_cmd_configure)

    return parser


def _execute(argv: Sequence[str] | None) -> int:
    debug_dir = get_debug_path()
    if debug_dir:
        try:
            os.chdir(debug_dir)
        except OSError as exc:
            _error("error:", str(exc))
            return 1

    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return 0 if exc.code in (0, None) else 1

    handler = getattr(args, "handler", None)
    if handler is not None:
        return handler(args)
    if args.command == "att":
        # "att" on its own only points at its subcommands.
        print(styles.HINT_STYLE.render(ATT_HINT))
        return 1
    parser.print_help()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    try:
        return _execute(argv)
    except Exception as exc:
        if os.environ.get("BSF_DEBUG") == "true":
            raise
        print("Something went wrong, please reach out to the maintainers:", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())