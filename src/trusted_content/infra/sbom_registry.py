from __future__ import annotations

import json
import logging
from importlib import resources
from types import MappingProxyType
from typing import Mapping

from ..core.ports.sbom_port import SbomPort

logger = logging.getLogger(__name__)

REGISTRY_INDEX = "sbom-registry.json"


class SbomRegistry(SbomPort):
    """SBOM documents bundled with the service, keyed by exact purl."""

    def __init__(self, documents: Mapping[str, dict]) -> None:
        self._documents = MappingProxyType(dict(documents))

    @classmethod
    def bundled(cls) -> "SbomRegistry":
        data = resources.files("trusted_content.data")
        index = json.loads(data.joinpath(REGISTRY_INDEX).read_text(encoding="utf-8"))
        documents: dict[str, dict] = {}
        for entry in index:
            raw = data.joinpath("sboms", entry["file"]).read_text(encoding="utf-8")
            documents[entry["purl"]] = json.loads(raw)
        logger.info(f"Loaded {len(documents)} bundled SBOMs")
        return cls(documents)

    def lookup(self, purl: str) -> dict | None:
        return self._documents.get(purl)

    def __len__(self) -> int:
        return len(self._documents)
