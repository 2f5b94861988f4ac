from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class PackageRef:
    """Lightweight reference to a concrete package version.

    ``trusted`` is tri-state: None means trust could not be evaluated.
    Equality is by ``purl`` only.
    """

    purl: str
    href: str = field(compare=False)
    trusted: Optional[bool] = field(default=None, compare=False)


@dataclass(frozen=True)
class VulnerabilityRef:
    identifier: str
    href: str


@dataclass(frozen=True)
class Package:
    purl: Optional[str] = None
    href: Optional[str] = None
    trusted: Optional[bool] = None
    trusted_versions: tuple[PackageRef, ...] = field(default_factory=tuple)
    vulnerabilities: tuple[VulnerabilityRef, ...] = field(default_factory=tuple)
    # Reserved for a second trust signal source; never populated yet
    snyk: Optional[dict] = None

    @property
    def found(self) -> bool:
        return self.purl is not None

    def with_updates(self, **kwargs) -> "Package":
        return replace(self, **kwargs)


@dataclass(frozen=True)
class Cvss3:
    score: str
    status: str


@dataclass(frozen=True)
class AdvisorySummary:
    """Human-readable enrichment fetched from the advisory detail source."""

    details: tuple[str, ...] = field(default_factory=tuple)
    public_date: Optional[datetime] = None
    severity: Optional[str] = None
    cvss3: Optional[Cvss3] = None

    @property
    def summary(self) -> Optional[str]:
        return self.details[0] if self.details else None


@dataclass(frozen=True)
class Vulnerability:
    identifier: str
    summary: str
    advisory: str
    date: Optional[datetime] = None
    severity: Optional[str] = None
    cvss3: Optional[Cvss3] = None
    packages: tuple[PackageRef, ...] = field(default_factory=tuple)
