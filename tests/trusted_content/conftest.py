"""tests/trusted_content/conftest.py

Fakes for the graph and advisory ports plus shared fixtures.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Sequence

import pytest
from typer.testing import CliRunner

from trusted_content.core.domain.enums import VulnerabilityScheme
from trusted_content.core.domain.exceptions import AdapterError
from trusted_content.core.domain.models import AdvisorySummary
from trusted_content.core.domain.tree import NameNode, NamespaceNode, PackageTree, VersionNode, VulnerabilityRecord
from trusted_content.core.domain.trust import TrustPolicy, TrustTable
from trusted_content.core.ports.advisory_port import AdvisoryPort
from trusted_content.core.ports.graph_port import GraphPort
from trusted_content.core.services.resolver import TrustResolver


QUARKUS = "pkg:maven/org.apache.quarkus/quarkus@1.2"
QUARKUS_REBUILD = "pkg:maven/org.apache.quarkus/quarkus@1.2-redhat-003"


def make_tree(type: str, namespace: str, name: str, *versions: str) -> PackageTree:
    return PackageTree(
        type=type,
        namespaces=(NamespaceNode(namespace, (NameNode(name, tuple(VersionNode(v) for v in versions)),)),),
    )


class FakeGraph(GraphPort):
    """In-memory graph keyed by the exact strings the resolver sends."""

    def __init__(self) -> None:
        self.packages: dict[str, list[PackageTree]] = {}
        self.certifications: dict[str, list[VulnerabilityRecord]] = {}
        self.vulnerabilities: dict[str, list[VulnerabilityRecord]] = {}
        self.dependencies: dict[str, list[PackageTree]] = {}
        self.dependents: dict[str, list[PackageTree]] = {}
        self.catalog: list[PackageTree] = []
        self.calls: list[tuple[str, str]] = []
        self.failing: set[str] = set()
        self.delay = 0.0
        self.in_flight = 0
        self.max_in_flight = 0

    def _record(self, op: str, key: str) -> None:
        self.calls.append((op, key))
        if op in self.failing or key in self.failing:
            raise AdapterError(f"{op} failed for {key}")

    async def search_packages(self, broad_key: str) -> Sequence[PackageTree]:
        self._record("search_packages", broad_key)
        return self.packages.get(broad_key, [])

    async def lookup_vulnerabilities(self, identifier: str) -> Sequence[VulnerabilityRecord]:
        self._record("lookup_vulnerabilities", identifier)
        return self.vulnerabilities.get(identifier, [])

    async def certify_vulnerabilities(self, exact_key: str) -> Sequence[VulnerabilityRecord]:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            self._record("certify_vulnerabilities", exact_key)
            return self.certifications.get(exact_key, [])
        finally:
            self.in_flight -= 1

    async def lookup_dependencies(self, exact_key: str) -> Sequence[PackageTree]:
        self._record("lookup_dependencies", exact_key)
        return self.dependencies.get(exact_key, [])

    async def lookup_dependents(self, exact_key: str) -> Sequence[PackageTree]:
        self._record("lookup_dependents", exact_key)
        return self.dependents.get(exact_key, [])

    async def enumerate_all(self) -> Sequence[PackageTree]:
        self._record("enumerate_all", "*")
        return self.catalog


class FakeAdvisories(AdvisoryPort):
    def __init__(self, summaries: dict[str, AdvisorySummary] | None = None) -> None:
        self.summaries = summaries or {}
        self.requested: list[str] = []

    async def fetch_summary(self, identifier: str) -> AdvisorySummary | None:
        self.requested.append(identifier)
        return self.summaries.get(identifier)


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_cache(tmp_path: Path, monkeypatch):
    """Keep disk caches inside the test's temporary directory."""
    cache_dir = tmp_path / "cache"
    monkeypatch.setenv("TRUSTED_CONTENT_CACHE_DIR", str(cache_dir))
    yield cache_dir


@pytest.fixture
def graph() -> FakeGraph:
    return FakeGraph()


@pytest.fixture
def advisories() -> FakeAdvisories:
    return FakeAdvisories()


@pytest.fixture
def trust_table() -> TrustTable:
    return TrustTable.load([{"upstream": QUARKUS, "trusted": QUARKUS_REBUILD}])


@pytest.fixture
def resolver(graph: FakeGraph, advisories: FakeAdvisories, trust_table: TrustTable) -> TrustResolver:
    return TrustResolver(graph, advisories, trust_table, TrustPolicy())


@pytest.fixture
def quarkus_graph(graph: FakeGraph) -> FakeGraph:
    """The graph knows 1.2 and 1.3 of quarkus and one CVE against 1.2."""
    graph.packages["pkg:maven/org.apache.quarkus/quarkus"] = [
        make_tree("maven", "org.apache.quarkus", "quarkus", "1.2", "1.3"),
    ]
    graph.certifications[QUARKUS] = [
        VulnerabilityRecord(scheme=VulnerabilityScheme.CVE, identifier="CVE-1234"),
    ]
    return graph


@pytest.fixture
def tree():
    """Builds a single-name PackageTree: tree("maven", "io.vertx", "vertx-core", "4.3.7")."""
    return make_tree
