from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from packageurl import PackageURL

from .exceptions import InvalidCoordinateError, MissingVersionError


@dataclass(frozen=True)
class Coordinate:
    """A package coordinate decoded from a package URL.

    ``namespace`` and ``version`` are optional: a coordinate without a version
    stands for every known version of a package and is only used for broad
    searches, never handed back to a client as an identity.
    """

    type: str
    name: str
    namespace: Optional[str] = None
    version: Optional[str] = None
    qualifiers: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    subpath: Optional[str] = None

    @classmethod
    def parse(cls, value: str) -> "Coordinate":
        try:
            purl = PackageURL.from_string(value)
        except ValueError as exc:
            raise InvalidCoordinateError(value) from exc
        if not purl.type or not purl.name:
            raise InvalidCoordinateError(value)
        qualifiers = purl.qualifiers or {}
        return cls(
            type=purl.type,
            name=purl.name,
            namespace=purl.namespace or None,
            version=purl.version or None,
            qualifiers=tuple(sorted(qualifiers.items())),
            subpath=purl.subpath or None,
        )

    def broad_search_key(self) -> str:
        """Return ``pkg:type/namespace/name``: every version of this package."""
        if self.namespace:
            return f"pkg:{self.type}/{self.namespace}/{self.name}"
        return f"pkg:{self.type}/{self.name}"

    def exact_key(self) -> str:
        """Return ``pkg:type/namespace/name@version``, the trust table key format."""
        if not self.namespace or not self.version:
            raise MissingVersionError(self.to_string())
        return f"pkg:{self.type}/{self.namespace}/{self.name}@{self.version}"

    @property
    def has_exact_key(self) -> bool:
        return bool(self.namespace and self.version)

    def lookup_key(self) -> str:
        # Graph queries fall back to the canonical form when no exact key exists
        return self.exact_key() if self.has_exact_key else self.to_string()

    def to_string(self) -> str:
        return PackageURL(
            type=self.type,
            namespace=self.namespace,
            name=self.name,
            version=self.version,
            qualifiers=dict(self.qualifiers) or None,
            subpath=self.subpath,
        ).to_string()

    def __str__(self) -> str:
        return self.to_string()
