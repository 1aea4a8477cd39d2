#!/usr/bin/env python3
"""Find query words in a text, report their gaps, and highlight them.

Tokenizes the input with the verse-marker and conjunction rules, writes the
gap report (one line per query word, sorted) to --output, and optionally
saves the full result as JSON, writes a highlighted HTML page, or prints the
highlighted text to the terminal.

Usage:
    python3 scripts/query_words.py --input surah.txt --output gaps.txt \
      --query "كتاب قال" --html surah.html
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from wordgap.io_utils import InputUnavailable, save_json
from wordgap.query import parse_queries, run_query
from wordgap.render import render_ansi, render_html
from wordgap.report import format_results, write_report

log = logging.getLogger("query_words")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Locate query words in a text and report the gaps between them."
    )
    parser.add_argument("--input", required=True, type=Path, help="Text file to search")
    parser.add_argument("--output", required=True, type=Path, help="Report file to write")
    parser.add_argument(
        "--query", required=True,
        help="Query words, separated by whitespace",
    )
    parser.add_argument(
        "--json", type=Path, default=None,
        help="Also save the full result (queries, positions, gaps, spans) as JSON",
    )
    parser.add_argument("--html", type=Path, default=None, help="Write a highlighted HTML page")
    parser.add_argument(
        "--show", action="store_true",
        help="Print the highlighted text and report to stdout",
    )
    parser.add_argument(
        "--absolute", action="store_true",
        help="Report absolute token positions instead of gaps",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    queries = parse_queries(args.query)
    if not queries:
        log.warning("No query words given; the report will be empty")

    try:
        result = run_query(queries, args.input)
    except InputUnavailable as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    index = result.positions if args.absolute else result.gaps
    write_report(index, args.output)
    log.info("Report for %d/%d query words written to %s", len(index), len(set(queries)), args.output)

    if args.json is not None:
        save_json(result.to_dict(), args.json)
        log.info("Result written to %s", args.json)

    stats = format_results(index)
    if args.html is not None:
        args.html.parent.mkdir(parents=True, exist_ok=True)
        page = render_html(result.text, result.spans, title=args.input.name, stats=stats)
        args.html.write_text(page, encoding="utf-8")
        log.info("Highlighted text written to %s", args.html)

    if args.show:
        sys.stdout.write(render_ansi(result.text, result.spans))
        if not result.text.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.write(stats)

    return 0


if __name__ == "__main__":
    sys.exit(main())
