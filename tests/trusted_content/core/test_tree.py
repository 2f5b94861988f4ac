from __future__ import annotations

from trusted_content.core.domain.tree import NameNode, NamespaceNode, PackageTree, VersionNode, flatten_tree, flatten_trees
from trusted_content.core.domain.trust import TrustPolicy


def _two_level_tree() -> PackageTree:
    return PackageTree(
        type="maven",
        namespaces=(
            NamespaceNode(
                "io.vertx",
                (
                    NameNode("vertx-core", (VersionNode("4.3.7"), VersionNode("4.3.7.redhat-00002"))),
                    NameNode("vertx-web", (VersionNode("4.3.7"),)),
                ),
            ),
            NamespaceNode("redhat", (NameNode("ubi", (VersionNode("9"),)),)),
        ),
    )


def test_flatten_keeps_encounter_order():
    refs = list(flatten_tree(_two_level_tree()))
    assert [r.purl for r in refs] == [
        "pkg:maven/io.vertx/vertx-core@4.3.7",
        "pkg:maven/io.vertx/vertx-core@4.3.7.redhat-00002",
        "pkg:maven/io.vertx/vertx-web@4.3.7",
        "pkg:maven/redhat/ubi@9",
    ]


def test_flatten_without_trust_fn_leaves_trust_unknown():
    refs = list(flatten_tree(_two_level_tree()))
    assert all(r.trusted is None for r in refs)
    assert refs[0].href == "/api/package?purl=pkg%3Amaven%2Fio.vertx%2Fvertx-core%404.3.7"


def test_flatten_with_policy():
    refs = list(flatten_tree(_two_level_tree(), TrustPolicy().for_leaf))
    assert [r.trusted for r in refs] == [False, True, False, True]


def test_flatten_empty_tree_and_concatenation():
    empty = PackageTree(type="npm")
    assert list(flatten_tree(empty)) == []
    assert len(flatten_trees([_two_level_tree(), empty, _two_level_tree()])) == 8
