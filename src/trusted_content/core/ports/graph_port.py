from __future__ import annotations

from typing import Protocol, Sequence

from ..domain.tree import PackageTree, VulnerabilityRecord


class GraphPort(Protocol):
    """Queries against the package dependency/vulnerability graph.

    Keys are package URL strings. Every method raises AdapterError when the
    graph cannot be reached or answers with something unexpected.
    """

    async def search_packages(self, broad_key: str) -> Sequence[PackageTree]:
        """Return trees for every known version matching a versionless key."""
        ...

    async def lookup_vulnerabilities(self, identifier: str) -> Sequence[VulnerabilityRecord]:
        """Return certifications naming the vulnerability, each with its affected package tree."""
        ...

    async def certify_vulnerabilities(self, exact_key: str) -> Sequence[VulnerabilityRecord]:
        """Return vulnerability certifications recorded against one package."""
        ...

    async def lookup_dependencies(self, exact_key: str) -> Sequence[PackageTree]:
        ...

    async def lookup_dependents(self, exact_key: str) -> Sequence[PackageTree]:
        ...

    async def enumerate_all(self) -> Sequence[PackageTree]:
        ...
