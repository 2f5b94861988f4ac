from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence

from ..domain.models import PackageRef
from ..domain.purl import Coordinate
from ..services.resolver import TrustResolver

logger = logging.getLogger(__name__)


class PackageRelationsUseCase:
    """Dependencies, dependents and versions for a batch of purls.

    Unlike the plain package batch, the first invalid purl aborts the whole
    call with InvalidCoordinateError before the graph is queried.
    """

    def __init__(self, resolver: TrustResolver) -> None:
        self._resolver = resolver

    @staticmethod
    def _validate(purls: Sequence[str]) -> list[Coordinate]:
        return [Coordinate.parse(purl) for purl in purls]

    async def _collect(
        self,
        purls: Sequence[str],
        lookup: Callable[[Coordinate], Awaitable[list[PackageRef]]],
    ) -> list[list[PackageRef]]:
        coordinates = self._validate(purls)
        results: list[list[PackageRef]] = []
        for coordinate in coordinates:
            results.append(await lookup(coordinate))
        return results

    async def dependencies(self, purls: Sequence[str]) -> list[list[PackageRef]]:
        logger.info(f"Dependencies for {len(purls)} purls")
        return await self._collect(purls, lambda c: self._resolver.resolve_dependencies(c.lookup_key()))

    async def dependents(self, purls: Sequence[str]) -> list[list[PackageRef]]:
        logger.info(f"Dependents for {len(purls)} purls")
        return await self._collect(purls, lambda c: self._resolver.resolve_dependents(c.lookup_key()))

    async def versions(self, purls: Sequence[str]) -> list[list[PackageRef]]:
        logger.info(f"Versions for {len(purls)} purls")
        return await self._collect(purls, self._resolver.resolve_versions)
