from __future__ import annotations

import argparse
import csv
import json
import logging
import sys
import unicodedata
from pathlib import Path
from typing import List, Optional, TextIO

from .check import check_unicode
from .collation import get_comparator, sort_entries
from .config import AgldtConfig, get_config_file, read_config, write_config
from .doc import Treebank
from .errors import StructuralError
from .info import describe
from .lexicon import forms, frequencies, lexicon_items
from .treebank import read_treebank

logger = logging.getLogger(__name__)

TASK_CHOICES = ("lexicon", "describe", "unicheck", "config")
UNKNOWN_PREFIX = "UNKNOWN: "


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


def _error(message: str) -> None:
    print(f"[agldt] {message}", file=sys.stderr)


def _load_treebank(name: str, config: AgldtConfig) -> Optional[Treebank]:
    """Read one treebank, reporting failures instead of raising."""
    path = config.resolve_treebank_path(name)
    logger.info("Reading %s", path)
    try:
        return read_treebank(path)
    except StructuralError as exc:
        logger.debug("Structural error in %s at %s", path, exc.path)
        _error(str(exc))
    except (OSError, UnicodeDecodeError) as exc:
        _error(f"Error reading {path}: {exc}")
    return None


def _open_output(target: str) -> TextIO:
    if target == "-":
        return sys.stdout
    return open(target, "w", encoding="utf-8", newline="")


def default_lexicon_output(treebank_path: str) -> str:
    """``lexicon-<name>.csv`` for a treebank file ``<name>.xml``."""
    return f"lexicon-{Path(treebank_path).stem}.csv"


def lexicon_entries(treebank: Treebank, use_forms: bool = False, unicode_form: str = "NFKC") -> List[str]:
    """
    Lexicon lines for ``treebank``, before sorting and deduplication.

    Lemmas annotated as unknown are reported as ``UNKNOWN: <form>``. Every
    entry is brought to ``unicode_form``.
    """
    if use_forms:
        entries = forms(treebank)
    else:
        entries = []
        for lemma, form in lexicon_items(treebank):
            if lemma == "":
                entries.append(UNKNOWN_PREFIX + form)
                continue
            if lemma != lemma.strip():
                logger.warning("Stripping whitespace around lemma %r (form %r)", lemma, form)
                lemma = lemma.strip()
            entries.append(lemma)
    return [unicodedata.normalize(unicode_form, entry) for entry in entries]


def run_lexicon(args: argparse.Namespace) -> int:
    config = AgldtConfig.load()
    treebank = _load_treebank(args.treebank, config)
    if treebank is None:
        return 1

    entries = lexicon_entries(treebank, use_forms=args.forms, unicode_form=config.unicode_form)
    output = args.output or default_lexicon_output(args.treebank)
    handle = _open_output(output)
    try:
        if args.count:
            writer = csv.writer(handle, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
            writer.writerows(frequencies(entries))
        else:
            compare = get_comparator(args.collation or config.lexicon_collation)
            for entry in sort_entries(dict.fromkeys(entries), compare):
                handle.write(entry + "\n")
    finally:
        if handle is not sys.stdout:
            handle.close()
    logger.info("Wrote %d %s entries to %s", len(set(entries)), "form" if args.forms else "lemma", output)
    return 0


def run_describe(args: argparse.Namespace) -> int:
    config = AgldtConfig.load()
    status = 0
    for name in args.treebanks:
        treebank = _load_treebank(name, config)
        if treebank is None:
            status = 1
            continue
        print(describe(treebank))
        print()
    return status


def run_unicheck(args: argparse.Namespace) -> int:
    config = AgldtConfig.load()
    form = args.form or config.unicode_form
    status = 0
    reports = []
    for name in args.treebanks:
        treebank = _load_treebank(name, config)
        if treebank is None:
            status = 1
            continue
        reports.append(check_unicode(treebank, form=form).render())

    output = args.output or config.report_file
    handle = _open_output(output)
    try:
        handle.write("\n".join(reports))
    finally:
        if handle is not sys.stdout:
            handle.close()
    logger.info("Wrote %d report(s) to %s", len(reports), output)
    return status


def run_config(args: argparse.Namespace) -> int:
    """Show or change the stored configuration."""
    updates = {}
    if args.set_treebank_dir:
        updates["treebank_dir"] = str(Path(args.set_treebank_dir).expanduser().resolve())
    if args.set_collation:
        updates["lexicon_collation"] = args.set_collation
    if args.set_unicode_form:
        updates["unicode_form"] = args.set_unicode_form
    if updates:
        write_config(updates)
        print(f"Updated {get_config_file()}")
        return 0

    print(f"Config file: {get_config_file()}")
    print("Stored settings:")
    print(json.dumps(read_config(), indent=2, ensure_ascii=False))
    print("Effective settings:")
    print(json.dumps(AgldtConfig.load().to_dict(), indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    from . import __version__

    parser = argparse.ArgumentParser(
        prog="agldt",
        description="Tools for Ancient Greek and Latin Dependency Treebank files",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--verbose", action="store_true", help="Print high-level progress messages")
    subparsers = parser.add_subparsers(dest="task", required=False)

    lexicon_parser = subparsers.add_parser(
        "lexicon",
        help="Write the lexicon (lemmas or forms) of a treebank",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    lexicon_parser.add_argument("treebank", help="Treebank file (looked up in AGLDT_PATH first)")
    lexicon_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file ('-' for stdout); default: lexicon-<treebank name>.csv",
    )
    lexicon_parser.add_argument("-f", "--forms", action="store_true", help="List surface forms instead of lemmas")
    lexicon_parser.add_argument(
        "-c", "--count", action="store_true", help="Write entry frequencies as CSV, most frequent first"
    )
    lexicon_parser.add_argument(
        "--collation",
        choices=["primary", "codepoint"],
        default=None,
        help="Sort order of the lexicon (default: from config, else primary)",
    )

    describe_parser = subparsers.add_parser("describe", help="Summarize treebank files")
    describe_parser.add_argument("treebanks", nargs="+", help="Treebank file(s)")

    unicheck_parser = subparsers.add_parser(
        "unicheck",
        aliases=["uni-check"],
        help="Check that word forms are Unicode-normalized",
    )
    unicheck_parser.add_argument("treebanks", nargs="+", help="Treebank file(s)")
    unicheck_parser.add_argument("-o", "--output", default=None, help="Report file (default: report.txt)")
    unicheck_parser.add_argument(
        "--form",
        choices=["NFC", "NFD", "NFKC", "NFKD"],
        default=None,
        help="Normalization form to check against (default: from config, else NFKC)",
    )

    config_parser = subparsers.add_parser("config", help="Show or change agldt configuration")
    config_parser.add_argument("--set-treebank-dir", default=None, help="Directory to look up treebank files in")
    config_parser.add_argument("--set-collation", choices=["primary", "codepoint"], default=None)
    config_parser.add_argument("--set-unicode-form", choices=["NFC", "NFD", "NFKC", "NFKD"], default=None)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=args.verbose, debug=args.debug)

    if not args.task:
        parser.print_help()
        return 1

    if args.task == "lexicon":
        return run_lexicon(args)
    if args.task == "describe":
        return run_describe(args)
    if args.task in ("unicheck", "uni-check"):
        return run_unicheck(args)
    if args.task == "config":
        return run_config(args)

    parser.error(f"Unknown task '{args.task}'. Supported tasks: {', '.join(TASK_CHOICES)}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
