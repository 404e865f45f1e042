"""Exceptions raised while resolving and rendering licenses."""
from __future__ import annotations

from pathlib import Path


class ApplyLicenseError(Exception):
    """Base class for every failure reported to the user."""


class CatalogError(ApplyLicenseError):
    """The bundled license data is malformed."""


class NoAuthorsError(ApplyLicenseError):
    def __init__(self) -> None:
        super().__init__("at least one author is required")


class EmptyExpressionError(ApplyLicenseError):
    def __init__(self, expression: str) -> None:
        super().__init__(f"license expression '{expression}' does not name any license")
        self.expression = expression


class InvalidSpdxIdError(ApplyLicenseError):
    def __init__(self, license_id: str) -> None:
        super().__init__(f"invalid SPDX license ID: {license_id}")
        self.license_id = license_id


class UnsupportedLicenseError(ApplyLicenseError):
    def __init__(self, license_id: str) -> None:
        super().__init__(
            f"SPDX ID '{license_id}' is valid, but unsupported by this program. Please open a pull request!"
        )
        self.license_id = license_id


class TemplateSyntaxError(ApplyLicenseError):
    def __init__(self, spdx: str, reason: str) -> None:
        super().__init__(f"syntax error in license template for {spdx}: {reason}")
        self.spdx = spdx


class ManifestError(ApplyLicenseError):
    """The project manifest lacks the data needed to apply a license."""


class LicenseIOError(ApplyLicenseError):
    """Reading or writing a file failed; the original ``OSError`` is chained."""

    def __init__(self, action: str, path: Path) -> None:
        super().__init__(f"unable to {action} {path}")
        self.path = path
