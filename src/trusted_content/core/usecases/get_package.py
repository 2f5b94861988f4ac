from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..domain.exceptions import MissingQueryArgumentError, TrustedContentError
from ..domain.models import Package
from ..domain.purl import Coordinate
from ..services.resolver import TrustResolver

logger = logging.getLogger(__name__)


class GetPackageUseCase:
    def __init__(self, resolver: TrustResolver) -> None:
        self._resolver = resolver

    async def execute(self, purl: str | None) -> Package:
        if not purl:
            raise MissingQueryArgumentError()
        coordinate = Coordinate.parse(purl)
        return await self._resolver.resolve_coordinate(coordinate)


class QueryPackagesUseCase:
    """Batch lookup: one slot per input, a failing item degrades to None."""

    def __init__(self, resolver: TrustResolver) -> None:
        self._resolver = resolver

    async def execute(self, purls: Sequence[str]) -> list[Optional[Package]]:
        logger.info(f"Batch package lookup for {len(purls)} purls")
        packages: list[Optional[Package]] = []
        for purl in purls:
            try:
                coordinate = Coordinate.parse(purl)
                packages.append(await self._resolver.resolve_coordinate(coordinate))
            except TrustedContentError as e:
                logger.warning(f"Skipping {purl}: {e}")
                packages.append(None)
        return packages
