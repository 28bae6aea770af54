#!/usr/bin/env python3
"""HTML to Markdown command line interface.

Usage:
    html2md page.html
    html2md < page.html
    html2md --base-url https://example.com --width 100 page.html
    html2md --from files.txt --output-dir out/
    echo '{"html": "<b>hi</b>"}' | html2md --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import ConvertOptions, load_config
from .converter import convert
from .tools import handle_request

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def convert_file(path: Path, options: ConvertOptions) -> str:
    """Read an HTML file and return its Markdown."""
    return convert(path.read_bytes(), base_url=options.base_url, width=options.width)


def write_markdown(path: Path, markdown: str, output_dir: Path) -> dict:
    """Write ``<stem>.md`` under *output_dir* and return a summary entry."""
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / f"{path.stem}.md"
    target.write_text(markdown + "\n", encoding="utf-8")
    return {"source": str(path), "output": str(target), "chars": len(markdown)}


def _read_paths(from_file: Path) -> list[Path]:
    paths = []
    for line in from_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            paths.append(Path(line))
    return paths


def _resolve_options(args: argparse.Namespace) -> ConvertOptions:
    options = ConvertOptions() if args.no_config else load_config(args.config)
    if args.base_url is not None:
        options.base_url = args.base_url or None
    if args.width is not None:
        if args.width < 1:
            raise ValueError(f"--width must be a positive integer (got {args.width})")
        options.width = args.width
    return options


def _run_tool_request() -> int:
    try:
        payload = json.loads(sys.stdin.read())
    except json.JSONDecodeError as e:
        print(f"Error: invalid JSON request: {e}", file=sys.stderr)
        return 1
    response = handle_request(payload)
    print(json.dumps(response, indent=2, ensure_ascii=False))
    return 1 if response.get("isError") else 0


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="html2md: Convert HTML to CommonMark",
    )
    parser.add_argument(
        "files", nargs="*", type=Path, help="HTML files to convert (default: stdin)",
    )
    parser.add_argument(
        "--from", dest="from_file", type=Path, metavar="FILE",
        help="Read input paths from a file (one per line)",
    )
    parser.add_argument(
        "--output-dir", type=Path,
        help="Write <name>.md files here and print a JSON summary",
    )
    parser.add_argument(
        "--base-url", help="Base URL for relative links",
    )
    parser.add_argument(
        "--width", type=int, help="Line width to wrap at (default: 80)",
    )
    parser.add_argument(
        "--config", type=Path, metavar="PATH",
        help="Config file (default: ./.html-to-md.toml)",
    )
    parser.add_argument(
        "--no-config", action="store_true",
        help="Ignore .html-to-md.toml",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Read a tool request object from stdin and print the response",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log conversion details to stderr",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, stream=sys.stderr)

    if args.json:
        sys.exit(_run_tool_request())

    try:
        options = _resolve_options(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    paths: list[Path] = list(args.files)
    if args.from_file:
        if not args.from_file.exists():
            print(f"Error: file not found: {args.from_file}", file=sys.stderr)
            sys.exit(1)
        paths.extend(_read_paths(args.from_file))

    if not paths:
        if args.output_dir:
            print("Error: --output-dir needs input files", file=sys.stderr)
            sys.exit(1)
        html = sys.stdin.buffer.read()
        print(convert(html, base_url=options.base_url, width=options.width))
        return

    missing = [p for p in paths if not p.exists()]
    if missing:
        for p in missing:
            print(f"Error: file not found: {p}", file=sys.stderr)
        sys.exit(1)

    if args.output_dir:
        results = []
        for i, path in enumerate(paths, 1):
            print(f"[{i}/{len(paths)}] {path}", file=sys.stderr)
            results.append(write_markdown(path, convert_file(path, options), args.output_dir))
        print(json.dumps(results, indent=2, ensure_ascii=False))
        return

    print("\n\n".join(convert_file(path, options) for path in paths))


if __name__ == "__main__":
    main()
