"""The catalog of license templates bundled with the package."""
from __future__ import annotations

import threading
import tomllib
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from importlib.resources.abc import Traversable
from typing import Iterator, Optional, Sequence

from .errors import CatalogError

PACKAGE_NAME = __package__ or "apply_license"
DATA_ROOT = resources.files(PACKAGE_NAME) / "data"
CATALOG_FILE = "licenses.toml"
TEMPLATES_DIR = "licenses"

_REQUIRED_KEYS = ("identifier", "spdx", "name", "file")
_LOAD_LOCK = threading.Lock()


@dataclass(frozen=True)
class License:
    identifier: str
    spdx: str
    name: str
    text: str


class Catalog:
    """Read-only collection of licenses, in the order they were declared."""

    def __init__(self, licenses: Sequence[License]) -> None:
        seen_spdx: set[str] = set()
        seen_identifiers: set[str] = set()
        for license in licenses:
            if license.spdx in seen_spdx:
                raise CatalogError(f"duplicate SPDX ID in license catalog: {license.spdx}")
            if license.identifier in seen_identifiers:
                raise CatalogError(f"duplicate identifier in license catalog: {license.identifier}")
            seen_spdx.add(license.spdx)
            seen_identifiers.add(license.identifier)
        self._licenses = tuple(licenses)

    @property
    def licenses(self) -> tuple[License, ...]:
        return self._licenses

    def find(self, spdx: str) -> Optional[License]:
        for license in self._licenses:
            if license.spdx == spdx:
                return license
        return None

    def __iter__(self) -> Iterator[License]:
        return iter(self._licenses)

    def __len__(self) -> int:
        return len(self._licenses)


def _read_template(root: Traversable, filename: str) -> str:
    resource = root / TEMPLATES_DIR / filename
    if not resource.is_file():
        raise CatalogError(f"license template not found: {filename}")
    return resource.read_text(encoding="utf-8")


def read_catalog(root: Traversable) -> Catalog:
    """Build a catalog from ``licenses.toml`` and the templates under *root*.

    Any problem with the data is a packaging defect and raises
    :class:`CatalogError`.
    """
    try:
        document = tomllib.loads((root / CATALOG_FILE).read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise CatalogError(f"unable to load {CATALOG_FILE}") from exc

    entries = document.get("license")
    if not isinstance(entries, list):
        raise CatalogError(f"{CATALOG_FILE} must declare a [[license]] array")

    licenses = []
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise CatalogError(f"license #{position} in {CATALOG_FILE} is not a table")
        missing = [key for key in _REQUIRED_KEYS if not isinstance(entry.get(key), str)]
        if missing:
            raise CatalogError(f"license #{position} in {CATALOG_FILE} is missing {', '.join(missing)}")
        licenses.append(
            License(
                identifier=entry["identifier"],
                spdx=entry["spdx"],
                name=entry["name"],
                text=_read_template(root, entry["file"]),
            )
        )
    return Catalog(licenses)


@lru_cache(maxsize=None)
def _bundled_catalog() -> Catalog:
    return read_catalog(DATA_ROOT)


def load_catalog() -> Catalog:
    """Return the bundled catalog, loading it on first use."""
    with _LOAD_LOCK:
        return _bundled_catalog()
