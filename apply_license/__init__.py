"""Apply open-source license files to a project from an SPDX expression."""
from __future__ import annotations

from .authors import parse_author_names, parse_git_style_author
from .catalog import Catalog, License, load_catalog
from .errors import (
    ApplyLicenseError,
    CatalogError,
    EmptyExpressionError,
    InvalidSpdxIdError,
    LicenseIOError,
    ManifestError,
    NoAuthorsError,
    TemplateSyntaxError,
    UnsupportedLicenseError,
)
from .manifest import DEFAULT_LICENSE, apply_manifest_license
from .render import render_license_text, write_license_files
from .spdx import SpdxReferenceList, is_valid_spdx_id, load_spdx_reference, parse_spdx

__all__ = [
    "ApplyLicenseError",
    "Catalog",
    "CatalogError",
    "DEFAULT_LICENSE",
    "EmptyExpressionError",
    "InvalidSpdxIdError",
    "License",
    "LicenseIOError",
    "ManifestError",
    "NoAuthorsError",
    "SpdxReferenceList",
    "TemplateSyntaxError",
    "UnsupportedLicenseError",
    "apply_manifest_license",
    "is_valid_spdx_id",
    "load_catalog",
    "load_spdx_reference",
    "parse_author_names",
    "parse_git_style_author",
    "parse_spdx",
    "render_license_text",
    "write_license_files",
]
