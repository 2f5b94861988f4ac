from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Sequence, TypeVar

from ...config.urls import get_osv_vuln_url, get_package_href, get_redhat_cve_url
from ..domain.enums import VulnerabilityScheme
from ..domain.exceptions import AdapterError, UpstreamUnavailableError
from ..domain.models import Package, PackageRef, Vulnerability, VulnerabilityRef
from ..domain.purl import Coordinate
from ..domain.tree import Leaf, VulnerabilityRecord, flatten_tree, flatten_trees, iter_leaves
from ..domain.trust import TrustPolicy, TrustTable
from ..ports.advisory_port import AdvisoryPort
from ..ports.graph_port import GraphPort

logger = logging.getLogger(__name__)

SUMMARY_UNAVAILABLE = "Unavailable"

# Stays well below the shared HTTP client's connection pool
CATALOG_CONCURRENCY = 8

T = TypeVar("T")


def to_vulnerability_ref(record: VulnerabilityRecord) -> VulnerabilityRef | None:
    if record.scheme is VulnerabilityScheme.OSV:
        return VulnerabilityRef(identifier=record.identifier, href=get_osv_vuln_url(record.identifier))
    if record.scheme is VulnerabilityScheme.CVE:
        return VulnerabilityRef(identifier=record.identifier, href=get_redhat_cve_url(record.identifier))
    return None


def dedup_vulnerability_refs(records: Sequence[VulnerabilityRecord]) -> list[VulnerabilityRef]:
    """Project records to refs, keeping the first of structurally equal entries.

    The graph may certify the same vulnerability several times for one package.
    """
    refs: list[VulnerabilityRef] = []
    for record in records:
        ref = to_vulnerability_ref(record)
        if ref is None:
            logger.debug(f"Ignoring {record.scheme.value} record {record.identifier}")
            continue
        if ref not in refs:
            refs.append(ref)
    return refs


class TrustResolver:
    """Combines graph answers with the trust table into package views.

    Holds no per-call state; every method builds fresh values.
    """

    def __init__(
        self,
        graph: GraphPort,
        advisories: AdvisoryPort,
        trust_table: TrustTable,
        policy: TrustPolicy | None = None,
        catalog_concurrency: int = CATALOG_CONCURRENCY,
    ) -> None:
        self._graph = graph
        self._advisories = advisories
        self._table = trust_table
        self._policy = policy or TrustPolicy()
        self._catalog_concurrency = max(1, catalog_concurrency)

    async def _ask(self, what: str, call: Awaitable[T]) -> T:
        try:
            return await call
        except AdapterError as exc:
            logger.warning(f"Graph query failed ({what}): {exc}")
            raise UpstreamUnavailableError() from exc

    async def vulnerability_refs(self, key: str) -> list[VulnerabilityRef]:
        records = await self._ask(f"certify {key}", self._graph.certify_vulnerabilities(key))
        return dedup_vulnerability_refs(records)

    async def sibling_versions(self, coordinate: Coordinate) -> list[PackageRef]:
        key = coordinate.broad_search_key()
        trees = await self._ask(f"search {key}", self._graph.search_packages(key))
        return flatten_trees(trees, self._policy.for_leaf)

    async def resolve_coordinate(self, coordinate: Coordinate) -> Package:
        purl = coordinate.lookup_key()
        logger.info(f"Resolving {purl}")

        vulnerabilities = await self.vulnerability_refs(purl)
        trusted_versions = await self.sibling_versions(coordinate)

        if coordinate.has_exact_key:
            replacement = self._table.lookup_exact(coordinate.exact_key())
            if replacement is not None:
                logger.debug(f"Trust table hit for {purl}: {replacement}")
                trusted_versions.append(
                    PackageRef(purl=replacement, href=get_package_href(replacement), trusted=True)
                )

        return Package(
            purl=purl,
            href=get_package_href(purl),
            trusted=self._policy.for_coordinate(coordinate),
            trusted_versions=tuple(trusted_versions),
            vulnerabilities=tuple(vulnerabilities),
        )

    async def resolve_versions(self, coordinate: Coordinate) -> list[PackageRef]:
        """Graph siblings followed by trust table rebuilds sharing the package name."""
        refs = await self.sibling_versions(coordinate)
        for _, trusted in self._table.lookup_by_name(coordinate.name):
            ref = PackageRef(purl=trusted, href=get_package_href(trusted), trusted=True)
            if ref not in refs:
                refs.append(ref)
        return refs

    async def resolve_dependencies(self, key: str) -> list[PackageRef]:
        trees = await self._ask(f"dependencies {key}", self._graph.lookup_dependencies(key))
        return flatten_trees(trees)

    async def resolve_dependents(self, key: str) -> list[PackageRef]:
        trees = await self._ask(f"dependents {key}", self._graph.lookup_dependents(key))
        return flatten_trees(trees)

    async def resolve_catalog(self) -> list[Package]:
        """Every trust table entry, then every package the graph knows.

        A single failed lookup fails the whole call; no partial catalog.
        """
        packages: list[Package] = []
        for upstream, trusted in self._table:
            packages.append(
                Package(
                    purl=upstream,
                    href=get_package_href(upstream),
                    # The table key is the untrusted upstream identity
                    trusted=False,
                    trusted_versions=(PackageRef(purl=trusted, href=get_package_href(trusted), trusted=True),),
                )
            )

        trees = await self._ask("enumerate", self._graph.enumerate_all())
        leaves = [leaf for tree in trees for leaf in iter_leaves(tree)]
        logger.info(f"Catalog: {len(packages)} trust entries, {len(leaves)} graph packages")

        vulnerability_lists = await self._catalog_vulnerabilities(leaves)
        for leaf, vulnerabilities in zip(leaves, vulnerability_lists):
            packages.append(
                Package(
                    purl=leaf.purl,
                    href=get_package_href(leaf.purl),
                    trusted=self._policy.for_leaf(leaf),
                    vulnerabilities=tuple(vulnerabilities),
                )
            )
        return packages

    async def _catalog_vulnerabilities(self, leaves: list[Leaf]) -> list[list[VulnerabilityRef]]:
        """Look up every leaf with at most ``catalog_concurrency`` queries in flight.

        The first failure cancels the lookups still pending and propagates.
        """
        limit = asyncio.Semaphore(self._catalog_concurrency)

        async def lookup(leaf: Leaf) -> list[VulnerabilityRef]:
            async with limit:
                return await self.vulnerability_refs(leaf.purl)

        tasks = [asyncio.ensure_future(lookup(leaf)) for leaf in leaves]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def resolve_vulnerability_detail(self, identifier: str) -> Vulnerability:
        logger.info(f"Lookup vulnerability {identifier}")
        records = await self._ask(f"vulnerability {identifier}", self._graph.lookup_vulnerabilities(identifier))

        packages: list[PackageRef] = []
        for record in records:
            if record.package is not None:
                packages.extend(flatten_tree(record.package, self._policy.for_leaf))

        advisory = await self._advisories.fetch_summary(identifier.upper())
        if advisory is None or advisory.summary is None:
            logger.debug(f"No advisory summary for {identifier}")
            summary = SUMMARY_UNAVAILABLE
        else:
            summary = advisory.summary

        return Vulnerability(
            identifier=identifier,
            summary=summary,
            advisory=get_redhat_cve_url(identifier),
            date=advisory.public_date if advisory else None,
            severity=advisory.severity if advisory else None,
            cvss3=advisory.cvss3 if advisory else None,
            packages=tuple(packages),
        )
