"""SPDX license ID validation and license expression parsing.

Only a flat list of identifiers is understood. Boolean keywords are
dropped without interpretation, and ``/`` separated lists (as found in
older package manifests) are accepted alongside proper SPDX syntax.
"""
from __future__ import annotations

import json
import threading
from functools import lru_cache
from importlib.resources.abc import Traversable
from typing import Iterable, List, Optional

from .catalog import DATA_ROOT, Catalog, License, load_catalog
from .errors import CatalogError, EmptyExpressionError, InvalidSpdxIdError, UnsupportedLicenseError

REFERENCE_FILE = "spdx-licenses.json"
OPERATORS = frozenset({"WITH", "OR", "AND"})

_LOAD_LOCK = threading.Lock()


class SpdxReferenceList:
    """The set of license IDs known to SPDX."""

    def __init__(self, license_ids: Iterable[str], version: str = "") -> None:
        self._ids = frozenset(license_ids)
        self.version = version

    def __contains__(self, license_id: object) -> bool:
        return license_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)


def read_spdx_reference(root: Traversable) -> SpdxReferenceList:
    """Parse an SPDX ``licenses.json`` document found under *root*."""
    try:
        document = json.loads((root / REFERENCE_FILE).read_text(encoding="utf-8"))
        ids = [entry["licenseId"] for entry in document["licenses"]]
    except (OSError, ValueError, KeyError, TypeError) as exc:
        raise CatalogError(f"unable to load {REFERENCE_FILE}") from exc
    return SpdxReferenceList(ids, version=document.get("licenseListVersion", ""))


@lru_cache(maxsize=None)
def _bundled_reference() -> SpdxReferenceList:
    return read_spdx_reference(DATA_ROOT)


def load_spdx_reference() -> SpdxReferenceList:
    with _LOAD_LOCK:
        return _bundled_reference()


def is_valid_spdx_id(license_id: str, reference: Optional[SpdxReferenceList] = None) -> bool:
    """Return True if *license_id* is a known SPDX license ID (case-sensitive)."""
    if reference is None:
        reference = load_spdx_reference()
    return license_id in reference


def tokenize(expression: str) -> List[str]:
    if "/" in expression:
        tokens = [token.strip() for token in expression.split("/")]
    else:
        tokens = expression.split()
    return [token for token in tokens if token and token not in OPERATORS]


def parse_spdx(
    expression: str,
    *,
    catalog: Optional[Catalog] = None,
    reference: Optional[SpdxReferenceList] = None,
) -> List[License]:
    """Resolve every license named by *expression* to its catalog entry.

    Licenses are returned in the order they first appear; repeated IDs are
    only returned once. The first unknown or unsupported ID aborts the parse.
    """
    if catalog is None:
        catalog = load_catalog()
    if reference is None:
        reference = load_spdx_reference()

    resolved: List[License] = []
    for token in tokenize(expression):
        if not is_valid_spdx_id(token, reference):
            raise InvalidSpdxIdError(token)
        license = catalog.find(token)
        if license is None:
            raise UnsupportedLicenseError(token)
        if license not in resolved:
            resolved.append(license)

    if not resolved:
        raise EmptyExpressionError(expression)
    return resolved
