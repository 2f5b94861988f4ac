"""Domain exceptions for trusted_content."""

from __future__ import annotations


class TrustedContentError(Exception):
    """Base class for every error the service reports to its callers."""


class InvalidCoordinateError(TrustedContentError):
    """Raised when a string cannot be decoded as a package URL."""

    def __init__(self, purl: str, message: str | None = None) -> None:
        self.purl = purl
        if message is None:
            message = f"{purl} is not a valid package URL"
        super().__init__(message)


class MissingVersionError(TrustedContentError):
    """Raised when an exact key is requested for a coordinate lacking namespace or version."""

    def __init__(self, purl: str) -> None:
        self.purl = purl
        super().__init__(f"{purl} has no namespace or version")


class MissingQueryArgumentError(TrustedContentError):
    def __init__(self) -> None:
        super().__init__("No query argument was specified")


class PackageNotFoundError(TrustedContentError):
    def __init__(self, purl: str) -> None:
        self.purl = purl
        super().__init__(f"Package {purl} was not found")


class AdapterError(TrustedContentError):
    """Raised by graph adapters on transport failures or malformed responses."""


class UpstreamUnavailableError(TrustedContentError):
    """The package graph could not be queried.

    Distinct from an empty answer: callers must be able to tell
    "no vulnerabilities" apart from "could not ask".
    """

    def __init__(self, message: str = "Error querying the package graph") -> None:
        super().__init__(message)


class TrustTableError(TrustedContentError):
    """Raised when the trust snapshot is malformed. Fatal at start-up."""
