"""Wire shapes of the HTTP API and their assembly from domain values.

Absent optionals and empty lists are left out of the JSON, so a package
that was not found serializes without ``purl``, ``trusted`` or
``trustedVersions``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer

from ..core.domain.models import Package, PackageRef, Vulnerability, VulnerabilityRef

_QUARKUS = "pkg:maven/org.apache.quarkus/quarkus@1.2"
_QUARKUS_REBUILD = "pkg:maven/org.apache.quarkus/quarkus@1.2-redhat-003"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @model_serializer(mode="wrap")
    def omit_empty(self, handler):
        data = handler(self)
        return {k: v for k, v in data.items() if v is not None and v != []}


class PackageRefView(_WireModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "purl": _QUARKUS_REBUILD,
                "href": "/api/package?purl=pkg%3Amaven%2Forg.apache.quarkus%2Fquarkus%401.2-redhat-003",
                "trusted": True,
            }
        },
    )

    purl: str
    href: str
    trusted: Optional[bool] = None


class VulnerabilityRefView(_WireModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {"cve": "CVE-1234", "href": "https://access.redhat.com/security/cve/cve-1234"}},
    )

    cve: str
    href: str


class PackageView(_WireModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "purl": _QUARKUS,
                "href": "/api/package?purl=pkg%3Amaven%2Forg.apache.quarkus%2Fquarkus%401.2",
                "trusted": False,
                "trustedVersions": [
                    {
                        "purl": _QUARKUS_REBUILD,
                        "href": "/api/package?purl=pkg%3Amaven%2Forg.apache.quarkus%2Fquarkus%401.2-redhat-003",
                        "trusted": True,
                    }
                ],
                "vulnerabilities": [
                    {"cve": "CVE-1234", "href": "https://access.redhat.com/security/cve/cve-1234"}
                ],
            }
        },
    )

    purl: Optional[str] = None
    href: Optional[str] = None
    trusted: Optional[bool] = None
    trusted_versions: list[PackageRefView] = Field(default_factory=list, alias="trustedVersions")
    vulnerabilities: list[VulnerabilityRefView] = Field(default_factory=list)
    snyk: Optional[dict] = None


class Cvss3View(_WireModel):
    score: str
    status: str


class VulnerabilityView(_WireModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "cve": "CVE-1234",
                "summary": "It's broken",
                "severity": "Important",
                "advisory": "https://access.redhat.com/security/cve/cve-1234",
                "date": "2023-01-10T00:00:00Z",
                "cvss3": {"score": "7.3", "status": "verified"},
                "packages": [{"purl": _QUARKUS, "href": "/api/package?purl=pkg%3Amaven%2Forg.apache.quarkus%2Fquarkus%401.2"}],
            }
        },
    )

    cve: str
    date: Optional[datetime] = None
    severity: Optional[str] = None
    cvss3: Optional[Cvss3View] = None
    summary: str
    advisory: str
    packages: list[PackageRefView] = Field(default_factory=list)


class ErrorView(BaseModel):
    status: int
    error: str


def package_ref_view(ref: PackageRef) -> PackageRefView:
    return PackageRefView(purl=ref.purl, href=ref.href, trusted=ref.trusted)


def vulnerability_ref_view(ref: VulnerabilityRef) -> VulnerabilityRefView:
    return VulnerabilityRefView(cve=ref.identifier, href=ref.href)


def package_view(package: Package) -> PackageView:
    if not package.found:
        return PackageView(vulnerabilities=[vulnerability_ref_view(v) for v in package.vulnerabilities])
    return PackageView(
        purl=package.purl,
        href=package.href,
        trusted=package.trusted,
        trusted_versions=[package_ref_view(r) for r in package.trusted_versions],
        vulnerabilities=[vulnerability_ref_view(v) for v in package.vulnerabilities],
        snyk=package.snyk,
    )


def package_ref_list_view(refs: list[PackageRef]) -> list[PackageRefView]:
    return [package_ref_view(r) for r in refs]


def vulnerability_view(vulnerability: Vulnerability) -> VulnerabilityView:
    cvss3 = None
    if vulnerability.cvss3 is not None:
        cvss3 = Cvss3View(score=vulnerability.cvss3.score, status=vulnerability.cvss3.status)
    return VulnerabilityView(
        cve=vulnerability.identifier,
        date=vulnerability.date,
        severity=vulnerability.severity,
        cvss3=cvss3,
        summary=vulnerability.summary,
        advisory=vulnerability.advisory,
        packages=[package_ref_view(p) for p in vulnerability.packages],
    )
