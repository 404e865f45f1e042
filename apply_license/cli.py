#!/usr/bin/env python3
"""Command-line entry points for applying open-source licenses."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from .authors import parse_author_names
from .catalog import License, load_catalog
from .errors import ApplyLicenseError
from .manifest import DEFAULT_LICENSE, DEFAULT_MANIFEST, apply_manifest_license
from .render import render_license_text, write_license_files
from .spdx import parse_spdx


def report_error(exc: BaseException) -> None:
    """Print *exc* and the chain of exceptions that caused it."""
    print(f"error: {exc}", file=sys.stderr)
    cause = exc.__cause__
    while cause is not None:
        print(f"caused by: {cause}", file=sys.stderr)
        cause = cause.__cause__


def display_license_list(licenses: Sequence[License]) -> None:
    width = max(len(license.spdx) for license in licenses)
    for license in licenses:
        print(f"{license.spdx.ljust(width)} - {license.name} (LICENSE-{license.identifier})")


def print_rendered(rendered: Mapping[str, str]) -> None:
    if len(rendered) == 1:
        sys.stdout.write(next(iter(rendered.values())))
        return
    for position, (name, text) in enumerate(rendered.items()):
        if position:
            sys.stdout.write("\n")
        sys.stdout.write(f"==> {name} <==\n{text}")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="apply-license",
        description="Apply open-source licenses to your project.",
    )
    parser.add_argument(
        "-a",
        "--author",
        dest="authors",
        action="append",
        default=[],
        metavar="AUTHOR",
        help="An author of the project, e.g. 'John Doe <jd@example.com>' (repeatable)",
    )
    parser.add_argument("-l", "--license", help="An SPDX license expression, e.g. 'MIT OR Apache-2.0'")
    parser.add_argument(
        "-C",
        "--directory",
        type=Path,
        default=Path("."),
        help="Write license files into this directory (default: current directory)",
    )
    parser.add_argument("--year", type=int, help="Override the copyright year")
    parser.add_argument("--stdout", action="store_true", help="Print the licenses instead of writing files")
    parser.add_argument("--list", action="store_true", help="List supported licenses and exit")
    return parser.parse_args(argv)


def parse_manifest_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="apply-license-manifest",
        description=(
            "Apply open-source licenses to your project using the authors and license "
            f"declared in its manifest ({DEFAULT_MANIFEST} or Cargo.toml)."
        ),
    )
    parser.add_argument(
        "--manifest-path",
        type=Path,
        default=Path(DEFAULT_MANIFEST),
        metavar="PATH",
        help=f"Path to the project manifest (default: {DEFAULT_MANIFEST})",
    )
    parser.add_argument(
        "--license",
        help=f"An SPDX license expression, overriding the manifest (default when absent: {DEFAULT_LICENSE})",
    )
    parser.add_argument("--year", type=int, help="Override the copyright year")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> List[Path]:
    names = parse_author_names(args.authors)
    licenses = parse_spdx(args.license)
    rendered = render_license_text(licenses, names, year=args.year)
    if args.stdout:
        print_rendered(rendered)
        return []
    return write_license_files(rendered, args.directory)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        if args.list:
            display_license_list(load_catalog().licenses)
            return 0
        if not args.license:
            print("No license specified. Use --list to see available options.", file=sys.stderr)
            return 1
        run(args)
    except ApplyLicenseError as exc:
        report_error(exc)
        return 1
    return 0


def manifest_main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_manifest_args(argv)
    try:
        result = apply_manifest_license(args.manifest_path, license=args.license, year=args.year)
    except ApplyLicenseError as exc:
        report_error(exc)
        return 1
    if result.manifest_updated:
        print(f"Set license = \"{result.license}\" in {args.manifest_path}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
