from __future__ import annotations

from pathlib import Path

import pytest

from apply_license.catalog import Catalog, License, load_catalog
from apply_license.spdx import SpdxReferenceList, load_spdx_reference


@pytest.fixture
def catalog() -> Catalog:
    return load_catalog()


@pytest.fixture
def reference() -> SpdxReferenceList:
    return load_spdx_reference()


@pytest.fixture
def get_license(catalog):
    def _get(spdx: str) -> License:
        license = catalog.find(spdx)
        assert license is not None, spdx
        return license

    return _get


@pytest.fixture
def write_catalog(tmp_path: Path):
    """Lay out a catalog data directory under tmp_path."""

    def _write(toml_text: str, templates: dict[str, str] | None = None) -> Path:
        root = tmp_path / "data"
        (root / "licenses").mkdir(parents=True)
        (root / "licenses.toml").write_text(toml_text, encoding="utf-8")
        for name, text in (templates or {}).items():
            (root / "licenses" / name).write_text(text, encoding="utf-8")
        return root

    return _write
