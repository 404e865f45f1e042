"""Reading author and license metadata from project manifests.

``pyproject.toml`` keeps it in the ``[project]`` table (PEP 621) and
``Cargo.toml`` in ``[package]``. When the license has to be written back,
only the ``license`` line is touched so the rest of the file keeps its
formatting and comments.
"""
from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .authors import parse_author_names
from .catalog import Catalog
from .errors import LicenseIOError, ManifestError
from .render import render_license_text, write_license_files
from .spdx import SpdxReferenceList, parse_spdx

DEFAULT_LICENSE = "MIT OR Apache-2.0"
DEFAULT_MANIFEST = "pyproject.toml"
METADATA_TABLES = ("project", "package")

_HEADER_RE = re.compile(r"^\s*\[")


@dataclass
class Manifest:
    path: Path
    text: str
    table: str
    authors: List[str] = field(default_factory=list)
    license: Optional[str] = None


@dataclass(frozen=True)
class ManifestResult:
    license: str
    written: List[Path]
    manifest_updated: bool


def _format_pep621_author(entry: Any) -> str:
    if not isinstance(entry, dict):
        raise ManifestError("entries of project.authors must be tables with a name and/or email")
    name = str(entry.get("name", "")).strip()
    email = str(entry.get("email", "")).strip()
    if name and email:
        return f"{name} <{email}>"
    if name or email:
        return name or email
    raise ManifestError("entries of project.authors need a name or an email")


def _read_authors(table_name: str, table: Dict[str, Any]) -> List[str]:
    authors = table.get("authors", [])
    if not isinstance(authors, list):
        raise ManifestError(f"{table_name}.authors must be an array")
    if table_name == "project":
        return [_format_pep621_author(entry) for entry in authors]
    if not all(isinstance(author, str) for author in authors):
        raise ManifestError(f"entries of {table_name}.authors must be strings")
    return list(authors)


def _read_license(table_name: str, table: Dict[str, Any]) -> Optional[str]:
    value = table.get("license")
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, dict) and isinstance(value.get("text"), str):
        return value["text"]
    raise ManifestError(f"{table_name}.license must be an SPDX expression string")


def parse_manifest(path: Path, text: str) -> Manifest:
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(f"unable to parse {path}") from exc

    for table_name in METADATA_TABLES:
        table = document.get(table_name)
        if isinstance(table, dict):
            return Manifest(
                path=path,
                text=text,
                table=table_name,
                authors=_read_authors(table_name, table),
                license=_read_license(table_name, table),
            )
    raise ManifestError(f"{path} has no [project] or [package] table")


def read_manifest(path: Path) -> Manifest:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LicenseIOError("read", path) from exc
    return parse_manifest(path, text)


def toml_quote_string(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\").replace("\t", "\\t").replace("\r", "\\r").replace("\n", "\\n").replace('"', '\\"')
    )
    return f'"{escaped}"'


def set_license(text: str, table: str, expression: str) -> str:
    """Return *text* with ``license`` in ``[table]`` set to *expression*.

    The first ``license = ...`` or dotted ``license.text = ...`` line is
    replaced in place, keeping its indentation, and any further dotted
    ``license.*`` lines are dropped. Otherwise the key is added after the
    last entry of the table.
    """
    lines = text.splitlines(keepends=True)
    header_re = re.compile(rf"^\s*\[\s*{re.escape(table)}\s*\]\s*(#.*)?$")
    license_re = re.compile(r"^(\s*)license\s*[.=]")
    new_line = f"license = {toml_quote_string(expression)}"

    start = next((index for index, line in enumerate(lines) if header_re.match(line)), None)
    if start is None:
        raise ManifestError(f"no [{table}] table to write the license to")

    end = len(lines)
    for index in range(start + 1, len(lines)):
        if _HEADER_RE.match(lines[index]):
            end = index
            break

    matches = [index for index in range(start + 1, end) if license_re.match(lines[index])]
    if matches:
        first = lines[matches[0]]
        indent = license_re.match(first).group(1)
        newline = first[len(first.rstrip("\r\n")):] or "\n"
        lines[matches[0]] = f"{indent}{new_line}{newline}"
        for index in reversed(matches[1:]):
            del lines[index]
        return "".join(lines)

    insert_at = start + 1
    for index in range(start + 1, end):
        line = lines[index]
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            insert_at = index + 1

    if insert_at > 0 and not lines[insert_at - 1].endswith("\n"):
        lines[insert_at - 1] += "\n"
    lines.insert(insert_at, new_line + "\n")
    return "".join(lines)


def apply_manifest_license(
    path: Path,
    *,
    license: Optional[str] = None,
    year: Optional[int] = None,
    catalog: Optional[Catalog] = None,
    reference: Optional[SpdxReferenceList] = None,
) -> ManifestResult:
    """Write license files for the project described by the manifest at *path*.

    *license* takes precedence over the manifest's own value, which in turn
    falls back to :data:`DEFAULT_LICENSE`. Every file is rendered before
    anything is written, and the manifest is only rewritten when its license
    changed.
    """
    manifest = read_manifest(path)
    names = parse_author_names(manifest.authors)
    expression = license or manifest.license or DEFAULT_LICENSE
    licenses = parse_spdx(expression, catalog=catalog, reference=reference)
    rendered = render_license_text(licenses, names, year=year)

    written = write_license_files(rendered, path.parent)

    updated = expression != manifest.license
    if updated:
        try:
            path.write_text(set_license(manifest.text, manifest.table, expression), encoding="utf-8")
        except OSError as exc:
            raise LicenseIOError("write", path) from exc
    return ManifestResult(license=expression, written=written, manifest_updated=updated)
