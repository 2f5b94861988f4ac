from __future__ import annotations

import logging
from typing import Any, Sequence

import httpx
from pydantic import TypeAdapter, ValidationError

from ..core.domain.enums import VulnerabilityScheme
from ..core.domain.exceptions import AdapterError, InvalidCoordinateError
from ..core.domain.purl import Coordinate
from ..core.domain.tree import NameNode, NamespaceNode, PackageTree, VersionNode, VulnerabilityRecord
from ..core.ports.graph_port import GraphPort
from .http_client import HttpClient
from .schemas import GraphQLResponse, GuacCertifyVuln, GuacIsDependency, GuacPackage, GuacVulnerability

logger = logging.getLogger(__name__)


_PKG_TREE = """
fragment allPkgTree on Package {
  type
  namespaces {
    namespace
    names {
      name
      versions {
        version
      }
    }
  }
}
"""

PACKAGES_QUERY = _PKG_TREE + """
query Packages($filter: PkgSpec!) {
  packages(pkgSpec: $filter) {
    ...allPkgTree
  }
}
"""

CERTIFY_VULN_QUERY = _PKG_TREE + """
query CertifyVuln($filter: CertifyVulnSpec!) {
  CertifyVuln(certifyVulnSpec: $filter) {
    package {
      ...allPkgTree
    }
    vulnerability {
      __typename
      ... on OSV {
        osvId
      }
      ... on CVE {
        cveId
      }
      ... on GHSA {
        ghsaId
      }
    }
  }
}
"""

IS_DEPENDENCY_QUERY = _PKG_TREE + """
query IsDependency($filter: IsDependencySpec!) {
  IsDependency(isDependencySpec: $filter) {
    package {
      ...allPkgTree
    }
    dependentPackage {
      ...allPkgTree
    }
  }
}
"""

_packages_adapter = TypeAdapter(list[GuacPackage])
_certify_adapter = TypeAdapter(list[GuacCertifyVuln])
_dependency_adapter = TypeAdapter(list[GuacIsDependency])


def pkg_spec(key: str) -> dict[str, Any]:
    """Translate a package URL into a GUAC PkgSpec filter."""
    try:
        coordinate = Coordinate.parse(key)
    except InvalidCoordinateError as exc:
        raise AdapterError(f"Cannot build a graph query for {key}") from exc
    spec: dict[str, Any] = {"type": coordinate.type, "name": coordinate.name}
    if coordinate.namespace:
        spec["namespace"] = coordinate.namespace
    if coordinate.version:
        spec["version"] = coordinate.version
    if coordinate.qualifiers:
        spec["qualifiers"] = [{"key": k, "value": v} for k, v in coordinate.qualifiers]
    if coordinate.subpath:
        spec["subpath"] = coordinate.subpath
    return spec


def vulnerability_spec(identifier: str) -> dict[str, Any]:
    u = identifier.upper()
    if u.startswith("CVE-"):
        return {"cve": {"cveId": identifier}}
    if u.startswith("GHSA-"):
        return {"ghsa": {"ghsaId": identifier}}
    return {"osv": {"osvId": identifier}}


def _to_tree(pkg: GuacPackage) -> PackageTree:
    return PackageTree(
        type=pkg.type,
        namespaces=tuple(
            NamespaceNode(
                namespace=ns.namespace,
                names=tuple(
                    NameNode(name=n.name, versions=tuple(VersionNode(v.version) for v in n.versions))
                    for n in ns.names
                ),
            )
            for ns in pkg.namespaces
        ),
    )


def _to_record(item: GuacCertifyVuln) -> VulnerabilityRecord | None:
    vuln: GuacVulnerability = item.vulnerability
    scheme = VulnerabilityScheme.from_typename(vuln.typename)
    if scheme is VulnerabilityScheme.OSV:
        identifier = vuln.osv_id
    elif scheme is VulnerabilityScheme.CVE:
        identifier = vuln.cve_id
    else:
        identifier = vuln.ghsa_id or vuln.osv_id or vuln.cve_id
    if identifier is None:
        if scheme is VulnerabilityScheme.OTHER:
            # NoVuln and other id-less members record a clean scan
            logger.debug("Skipping %s certification without an identifier", vuln.typename)
            return None
        raise AdapterError(f"{vuln.typename} vulnerability without an identifier")
    return VulnerabilityRecord(
        scheme=scheme,
        identifier=identifier,
        package=_to_tree(item.package) if item.package is not None else None,
    )


def _to_records(items: list[GuacCertifyVuln]) -> list[VulnerabilityRecord]:
    records = (_to_record(i) for i in items)
    return [r for r in records if r is not None]


class GuacAdapter(GraphPort):
    """GraphPort backed by a GUAC GraphQL endpoint."""

    def __init__(self, url: str, http_client: HttpClient) -> None:
        self._url = url
        self._http = http_client

    async def _query(self, query: str, variables: dict[str, Any], field: str, adapter: TypeAdapter) -> list:
        try:
            raw = await self._http.post_json(self._url, {"query": query, "variables": variables})
        except (httpx.HTTPError, TypeError, ValueError) as exc:
            raise AdapterError(f"GUAC request failed: {exc}") from exc
        try:
            response = GraphQLResponse.model_validate(raw)
            if response.errors:
                raise AdapterError("; ".join(e.message for e in response.errors))
            if response.data is None or field not in response.data:
                raise AdapterError(f"GUAC response has no '{field}' data")
            return adapter.validate_python(response.data[field] or [])
        except ValidationError as exc:
            raise AdapterError(f"Unexpected GUAC response for '{field}': {exc}") from exc

    async def search_packages(self, broad_key: str) -> Sequence[PackageTree]:
        logger.debug("Searching packages for %s", broad_key)
        pkgs = await self._query(PACKAGES_QUERY, {"filter": pkg_spec(broad_key)}, "packages", _packages_adapter)
        return [_to_tree(p) for p in pkgs]

    async def lookup_vulnerabilities(self, identifier: str) -> Sequence[VulnerabilityRecord]:
        logger.debug("Looking up certifications for %s", identifier)
        variables = {"filter": {"vulnerability": vulnerability_spec(identifier)}}
        items = await self._query(CERTIFY_VULN_QUERY, variables, "CertifyVuln", _certify_adapter)
        return _to_records(items)

    async def certify_vulnerabilities(self, exact_key: str) -> Sequence[VulnerabilityRecord]:
        logger.debug("Looking up vulnerabilities of %s", exact_key)
        variables = {"filter": {"package": pkg_spec(exact_key)}}
        items = await self._query(CERTIFY_VULN_QUERY, variables, "CertifyVuln", _certify_adapter)
        return _to_records(items)

    async def lookup_dependencies(self, exact_key: str) -> Sequence[PackageTree]:
        logger.debug("Looking up dependencies of %s", exact_key)
        variables = {"filter": {"package": pkg_spec(exact_key)}}
        items = await self._query(IS_DEPENDENCY_QUERY, variables, "IsDependency", _dependency_adapter)
        return [_to_tree(i.dependent_package) for i in items]

    async def lookup_dependents(self, exact_key: str) -> Sequence[PackageTree]:
        logger.debug("Looking up dependents of %s", exact_key)
        variables = {"filter": {"dependentPackage": pkg_spec(exact_key)}}
        items = await self._query(IS_DEPENDENCY_QUERY, variables, "IsDependency", _dependency_adapter)
        return [_to_tree(i.package) for i in items]

    async def enumerate_all(self) -> Sequence[PackageTree]:
        logger.debug("Enumerating all packages")
        pkgs = await self._query(PACKAGES_QUERY, {"filter": {}}, "packages", _packages_adapter)
        return [_to_tree(p) for p in pkgs]
