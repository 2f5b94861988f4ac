from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class GuacVersion(BaseModel):
    version: str


class GuacName(BaseModel):
    name: str
    versions: list[GuacVersion] = Field(default_factory=list)


class GuacNamespace(BaseModel):
    namespace: str
    names: list[GuacName] = Field(default_factory=list)


class GuacPackage(BaseModel):
    """allPkgTree fragment: type -> namespaces -> names -> versions."""
    type: str
    namespaces: list[GuacNamespace] = Field(default_factory=list)


class GuacVulnerability(BaseModel):
    """OSV | CVE | GHSA union, discriminated by __typename."""
    typename: Optional[str] = Field(None, alias="__typename")
    osv_id: Optional[str] = Field(None, alias="osvId")
    cve_id: Optional[str] = Field(None, alias="cveId")
    ghsa_id: Optional[str] = Field(None, alias="ghsaId")


class GuacCertifyVuln(BaseModel):
    package: Optional[GuacPackage] = None
    vulnerability: GuacVulnerability


class GuacIsDependency(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
    package: GuacPackage
    dependent_package: GuacPackage = Field(alias="dependentPackage")


class GraphQLError(BaseModel):
    message: str


class GraphQLResponse(BaseModel):
    data: Optional[dict[str, Any]] = None
    errors: Optional[list[GraphQLError]] = None


class HydraCvss3(BaseModel):
    cvss3_base_score: Optional[str | float] = None
    cvss3_scoring_vector: Optional[str] = None
    status: Optional[str] = None


class HydraCve(BaseModel):
    """Red Hat security data API CVE document (only the fields we read)."""
    name: Optional[str] = None
    threat_severity: Optional[str] = None
    public_date: Optional[str] = None
    details: list[str] = Field(default_factory=list)
    cvss3: Optional[HydraCvss3] = None
