from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, Optional

from ...config.urls import get_package_href
from .enums import VulnerabilityScheme
from .models import PackageRef


@dataclass(frozen=True)
class VersionNode:
    version: str


@dataclass(frozen=True)
class NameNode:
    name: str
    versions: tuple[VersionNode, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NamespaceNode:
    namespace: str
    names: tuple[NameNode, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PackageTree:
    """Package data as the graph returns it: type -> namespaces -> names -> versions."""

    type: str
    namespaces: tuple[NamespaceNode, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class VulnerabilityRecord:
    scheme: VulnerabilityScheme
    identifier: str
    package: Optional[PackageTree] = None


@dataclass(frozen=True)
class Leaf:
    """One concrete version reached while walking a tree."""

    type: str
    namespace: str
    name: str
    version: str

    @property
    def purl(self) -> str:
        return f"pkg:{self.type}/{self.namespace}/{self.name}@{self.version}"


TrustFn = Callable[[Leaf], Optional[bool]]


def iter_leaves(tree: PackageTree) -> Iterator[Leaf]:
    for namespace in tree.namespaces:
        for name in namespace.names:
            for version in name.versions:
                yield Leaf(tree.type, namespace.namespace, name.name, version.version)


def flatten_tree(tree: PackageTree, trust: TrustFn | None = None) -> Iterator[PackageRef]:
    """Yield one PackageRef per version leaf, in the order the graph returned them.

    ``trust`` computes each ref's trust flag; without it trust stays unknown.
    """
    for leaf in iter_leaves(tree):
        purl = leaf.purl
        yield PackageRef(
            purl=purl,
            href=get_package_href(purl),
            trusted=trust(leaf) if trust is not None else None,
        )


def flatten_trees(trees, trust: TrustFn | None = None) -> list[PackageRef]:
    refs: list[PackageRef] = []
    for tree in trees:
        refs.extend(flatten_tree(tree, trust))
    return refs
