"""Rendering license templates into the files that get written to a project."""
from __future__ import annotations

import datetime as _dt
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from .catalog import License
from .errors import LicenseIOError, TemplateSyntaxError

SINGLE_LICENSE_FILENAME = "LICENSE"


def license_filename(license: License, count: int) -> str:
    if count == 1:
        return SINGLE_LICENSE_FILENAME
    return f"{SINGLE_LICENSE_FILENAME}-{license.identifier}"


def render_template(license: License, context: Mapping[str, object]) -> str:
    try:
        text = license.text.format_map(context)
    except KeyError as exc:
        raise TemplateSyntaxError(license.spdx, f"unknown placeholder {exc.args[0]!r}") from exc
    except (ValueError, IndexError, AttributeError, TypeError) as exc:
        raise TemplateSyntaxError(license.spdx, str(exc)) from exc
    if not text.endswith("\n"):
        text += "\n"
    return text


def render_license_text(
    licenses: Sequence[License],
    authors: Sequence[str],
    *,
    year: Optional[int] = None,
) -> Dict[str, str]:
    """Render *licenses* for *authors*, keyed by output file name.

    A single license is written to ``LICENSE``; several licenses are written
    to ``LICENSE-{identifier}`` each.
    """
    context = {
        "year": year if year is not None else _dt.date.today().year,
        "copyright_holders": ", ".join(authors),
    }
    return {license_filename(license, len(licenses)): render_template(license, context) for license in licenses}


def write_license_files(rendered: Mapping[str, str], directory: Path) -> List[Path]:
    """Write every rendered license into *directory*, replacing existing files."""
    written = []
    for name, text in rendered.items():
        path = directory / name
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise LicenseIOError("write", path) from exc
        written.append(path)
    return written
