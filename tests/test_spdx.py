from __future__ import annotations

import pytest

from apply_license.catalog import Catalog, License
from apply_license.errors import CatalogError, EmptyExpressionError, InvalidSpdxIdError, UnsupportedLicenseError
from apply_license.spdx import SpdxReferenceList, is_valid_spdx_id, parse_spdx, read_spdx_reference, tokenize


def test_valid_spdx_ids():
    assert is_valid_spdx_id("MIT")
    assert is_valid_spdx_id("Apache-2.0")
    assert not is_valid_spdx_id("foobar")


def test_spdx_ids_are_case_sensitive():
    assert not is_valid_spdx_id("mit")
    assert not is_valid_spdx_id("APACHE-2.0")


def test_simple(get_license):
    assert parse_spdx("GPL-3.0") == [get_license("GPL-3.0")]


@pytest.mark.parametrize("spdx", ["MIT", "Apache-2.0", "BSD-3-Clause", "ISC", "MPL-2.0", "GPL-2.0-or-later"])
def test_single_known_id(spdx, get_license):
    assert parse_spdx(spdx) == [get_license(spdx)]


@pytest.mark.parametrize(
    "expression",
    ["MIT OR Apache-2.0", "MIT AND Apache-2.0", "MIT/Apache-2.0", "MIT / Apache-2.0"],
)
def test_compound(expression, get_license):
    assert parse_spdx(expression) == [get_license("MIT"), get_license("Apache-2.0")]


def test_compound_keeps_expression_order(get_license):
    assert parse_spdx("Apache-2.0 OR MIT") == [get_license("Apache-2.0"), get_license("MIT")]


def test_slash_and_or_resolve_identically():
    assert parse_spdx("MIT/Apache-2.0") == parse_spdx("MIT OR Apache-2.0")


def test_invalid_id():
    with pytest.raises(InvalidSpdxIdError, match="invalid SPDX license ID: foobar") as excinfo:
        parse_spdx("MIT OR foobar")
    assert excinfo.value.license_id == "foobar"


def test_valid_but_unsupported_id():
    with pytest.raises(UnsupportedLicenseError, match="Beerware") as excinfo:
        parse_spdx("Beerware")
    assert excinfo.value.license_id == "Beerware"


@pytest.mark.parametrize("spdx", ["curl", "JSON", "HPND", "Artistic-1.0-Perl", "libpng-2.0", "BUSL-1.1", "SSPL-1.0"])
def test_uncommon_spdx_ids_are_unsupported_not_invalid(spdx):
    assert is_valid_spdx_id(spdx)
    with pytest.raises(UnsupportedLicenseError):
        parse_spdx(spdx)


def test_reference_list_is_complete(reference):
    assert len(reference) > 600
    for deprecated in ("GPL-2.0+", "LGPL-2.1", "eCos-2.0", "wxWindows"):
        assert deprecated in reference


@pytest.mark.parametrize(
    "deprecated, current",
    [
        ("GPL-2.0", "GPL-2.0-only"),
        ("GPL-2.0+", "GPL-2.0-or-later"),
        ("GPL-3.0", "GPL-3.0-only"),
        ("GPL-3.0+", "GPL-3.0-or-later"),
        ("LGPL-2.1", "LGPL-2.1-only"),
        ("LGPL-2.1+", "LGPL-2.1-or-later"),
        ("LGPL-3.0", "LGPL-3.0-only"),
        ("LGPL-3.0+", "LGPL-3.0-or-later"),
    ],
)
def test_deprecated_ids_share_current_text(deprecated, current, get_license):
    assert parse_spdx(deprecated)[0].text == get_license(current).text


def test_first_failure_wins():
    with pytest.raises(InvalidSpdxIdError):
        parse_spdx("foobar OR Beerware")


def test_lowercase_operators_are_tokens():
    with pytest.raises(InvalidSpdxIdError, match="or"):
        parse_spdx("MIT or Apache-2.0")


def test_duplicates_are_collapsed(get_license):
    assert parse_spdx("MIT OR MIT") == [get_license("MIT")]
    assert parse_spdx("MIT/Apache-2.0/MIT") == [get_license("MIT"), get_license("Apache-2.0")]


@pytest.mark.parametrize("expression", ["", "   ", "OR", "AND WITH OR", "/", " / "])
def test_empty_expression_rejected(expression):
    with pytest.raises(EmptyExpressionError):
        parse_spdx(expression)


def test_tokenize_drops_operators():
    assert tokenize("MIT WITH foo AND bar") == ["MIT", "foo", "bar"]
    assert tokenize(" MIT /Apache-2.0 ") == ["MIT", "Apache-2.0"]


def test_injected_reference_and_catalog():
    license = License(identifier="ZZ", spdx="Zlib", name="zlib", text="{year}")
    catalog = Catalog([license])
    reference = SpdxReferenceList(["Zlib", "MIT"])

    assert parse_spdx("Zlib", catalog=catalog, reference=reference) == [license]
    with pytest.raises(UnsupportedLicenseError):
        parse_spdx("MIT", catalog=catalog, reference=reference)
    with pytest.raises(InvalidSpdxIdError):
        parse_spdx("Apache-2.0", catalog=catalog, reference=reference)


def test_read_spdx_reference(tmp_path):
    (tmp_path / "spdx-licenses.json").write_text(
        '{"licenseListVersion": "3.0", "licenses": [{"licenseId": "MIT"}, {"licenseId": "0BSD"}]}',
        encoding="utf-8",
    )
    reference = read_spdx_reference(tmp_path)
    assert reference.version == "3.0"
    assert len(reference) == 2
    assert "0BSD" in reference


def test_read_spdx_reference_malformed(tmp_path):
    (tmp_path / "spdx-licenses.json").write_text('{"licenses": [{"id": "MIT"}]}', encoding="utf-8")
    with pytest.raises(CatalogError):
        read_spdx_reference(tmp_path)
