from __future__ import annotations

from ..domain.exceptions import MissingQueryArgumentError, PackageNotFoundError
from ..domain.purl import Coordinate
from ..ports.sbom_port import SbomPort


class GetSbomUseCase:
    def __init__(self, registry: SbomPort) -> None:
        self._registry = registry

    def execute(self, purl: str | None) -> dict:
        if not purl:
            raise MissingQueryArgumentError()
        Coordinate.parse(purl)
        sbom = self._registry.lookup(purl)
        if sbom is None:
            raise PackageNotFoundError(purl)
        return sbom
