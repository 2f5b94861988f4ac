from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from .exceptions import InvalidCoordinateError, TrustTableError
from .purl import Coordinate
from .tree import Leaf

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrustPolicy:
    """Heuristic trust: the organization namespace or a marker in the version.

    Either signal is enough. Both are independent of trust table hits.
    """

    namespace: str = "redhat"
    marker: str = "redhat"

    def is_trusted(self, namespace: Optional[str], version: Optional[str]) -> bool:
        if namespace is not None and namespace == self.namespace:
            return True
        return bool(version and self.marker and self.marker in version)

    def for_leaf(self, leaf: Leaf) -> bool:
        return self.is_trusted(leaf.namespace, leaf.version)

    def for_coordinate(self, coordinate: Coordinate) -> bool:
        return self.is_trusted(coordinate.namespace, coordinate.version)


class TrustTable:
    """Immutable mapping of exact upstream purl -> trusted rebuild purl.

    Built once from a snapshot and shared read-only by every request.
    """

    def __init__(self, data: Mapping[str, str], names: Mapping[str, str]) -> None:
        self._data = MappingProxyType(dict(data))
        self._names = MappingProxyType(dict(names))

    @classmethod
    def load(cls, entries: Iterable[Any]) -> "TrustTable":
        """Build a table from ``{"upstream": ..., "trusted": ...}`` entries.

        All-or-nothing: a single malformed entry fails the whole load.
        """
        data: dict[str, str] = {}
        names: dict[str, str] = {}
        for index, entry in enumerate(entries):
            if not isinstance(entry, Mapping):
                raise TrustTableError(f"Trust entry #{index} is not an object")
            upstream = entry.get("upstream")
            trusted = entry.get("trusted")
            if not isinstance(upstream, str) or not isinstance(trusted, str):
                raise TrustTableError(f"Trust entry #{index} needs string 'upstream' and 'trusted' fields")
            try:
                coordinate = Coordinate.parse(upstream)
                Coordinate.parse(trusted)
            except InvalidCoordinateError as exc:
                raise TrustTableError(f"Trust entry #{index}: {exc}") from exc
            data[upstream] = trusted
            names[upstream] = coordinate.name
        logger.info(f"Loaded trust table with {len(data)} entries")
        return cls(data, names)

    def lookup_exact(self, purl: str) -> Optional[str]:
        return self._data.get(purl)

    def lookup_by_name(self, name: str) -> Iterator[tuple[str, str]]:
        for upstream, trusted in self._data.items():
            if self._names[upstream] == name:
                yield upstream, trusted

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._data.items())

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, purl: object) -> bool:
        return purl in self._data
