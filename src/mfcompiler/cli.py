"""Command-line compiler for message catalogues.

Reads JSON and .properties files, compiles every message, and writes a
Python module exposing the compiled message tree.

Usage:
    mfcompiler [options] INPUT [INPUT ...]

Output formats:
    (default)           module with ``messages`` and ``__all__``
    -n NAME             isolated variable NAME
    -n package.mod.attr attribute attr set on the importable module

Defaults for any long option may be set in ``messageformat.rc.json`` in
the working directory, e.g. ``{"locale": ["en", "fr"], "simplify": true}``.

Exit codes:
    0: Success
    1: Input or compilation error (reported on stderr)
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from pathlib import Path

from mfcompiler.diagnostics import DiagnosticFormatter, MessageFormatError, OutputFormat
from mfcompiler.enums import ModuleFormat
from mfcompiler.loading import DEFAULT_DELIMITERS, DEFAULT_EXTENSIONS, load_messages, simplify
from mfcompiler.messageformat import MessageFormat

__all__ = ["main"]

logger = logging.getLogger(__name__)

RC_FILE: str = "messageformat.rc.json"

_LIST_SPLIT_RE = re.compile(r"[\s,]+")


def _split_list(values: list[str] | str | None) -> list[str]:
    """Flatten repeated and comma/space separated option values."""
    if not values:
        return []
    if isinstance(values, str):
        values = [values]
    return [item for value in values for item in _LIST_SPLIT_RE.split(value) if item]


def _read_rc(directory: Path) -> dict[str, object]:
    """Option defaults from messageformat.rc.json, if present."""
    path = directory / RC_FILE
    if not path.is_file():
        return {}
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict) and isinstance(data.get("messageformat"), dict):
        data = data["messageformat"]
    if not isinstance(data, dict):
        return {}
    logger.debug("Read option defaults from %s", path)
    return {key.replace("-", "_"): value for key, value in data.items()}


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="mfcompiler",
        description=(
            "Compile JSON and .properties files of MessageFormat strings into a "
            "Python module of corresponding hierarchical functions. Input "
            "directories are scanned recursively."
        ),
    )
    parser.add_argument("include", nargs="+", metavar="INPUT", help="Input files or directories.")
    parser.add_argument(
        "-l", "--locale",
        action="append",
        help=(
            "Locale(s) to include; if several, selected by matching message key. "
            "Default: path keys matching any locale set the active locale, "
            "starting with 'en'."
        ),
    )
    parser.add_argument(
        "-n", "--namespace",
        help="Export as variable NAME, or as attribute of an importable module (pkg.mod.attr).",
    )
    parser.add_argument(
        "-o", "--outfile",
        help="Write output to this file; '-' or unset prints to stdout.",
    )
    parser.add_argument(
        "-e", "--extensions",
        action="append",
        help=f"File extensions to read (default: {', '.join(DEFAULT_EXTENSIONS)}).",
    )
    parser.add_argument(
        "-d", "--delimiters",
        help=f"Characters splitting file paths into keys (default: {DEFAULT_DELIMITERS!r}).",
    )
    parser.add_argument(
        "-s", "--simplify",
        action="store_true",
        help="Drop key levels that hold the same single key everywhere.",
    )
    parser.add_argument(
        "--strict-number-sign",
        action="store_true",
        help="Require numeric values for '#', and keep '#' literal inside nested selects.",
    )
    parser.add_argument(
        "--bidi",
        action="store_true",
        help="Wrap arguments in directional marks matching the locale.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log compilation details to stderr.",
    )
    parser.set_defaults(**_read_rc(Path.cwd()))
    return parser.parse_args(argv)


def _module_format(namespace: str | None) -> ModuleFormat:
    if not namespace:
        return ModuleFormat.MODULE
    if "." in namespace:
        return ModuleFormat.NAMESPACE
    return ModuleFormat.VARIABLE


def main(argv: list[str] | None = None) -> int:
    """Compile the inputs and write the module."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    locales = _split_list(args.locale)
    extensions = _split_list(args.extensions) or list(DEFAULT_EXTENSIONS)
    delimiters = args.delimiters or DEFAULT_DELIMITERS

    try:
        messages = load_messages(args.include, extensions=extensions, delimiters=delimiters)
        if args.simplify and isinstance(messages, dict):
            messages = simplify(messages)
        mf = MessageFormat(
            locales or None,
            bidi_support=args.bidi,
            strict_number_sign=args.strict_number_sign,
        )
        output = mf.compile(messages).render(_module_format(args.namespace), args.namespace)
    except MessageFormatError as e:
        if e.diagnostic is not None:
            print(DiagnosticFormatter(OutputFormat.RUST).format(e.diagnostic), file=sys.stderr)
        else:
            print(f"error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError, TypeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.outfile and args.outfile != "-":
        Path(args.outfile).write_text(output, encoding="utf-8")
        logger.info("Wrote %s", args.outfile)
    else:
        sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
