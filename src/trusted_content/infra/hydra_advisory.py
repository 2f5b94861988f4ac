from __future__ import annotations

import logging
from datetime import datetime

import httpx
from pydantic import ValidationError

from ..config.urls import get_hydra_cve_url
from ..core.domain.models import AdvisorySummary, Cvss3
from ..core.ports.advisory_port import AdvisoryPort
from ..core.ports.cache_port import CachePort
from ..shared.severity import cvss3_base_score, format_score
from .http_client import HttpClient
from .schemas import HydraCve

logger = logging.getLogger(__name__)


def _parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _to_summary(cve: HydraCve) -> AdvisorySummary:
    cvss3 = None
    if cve.cvss3 is not None:
        score = format_score(cve.cvss3.cvss3_base_score)
        if score is None:
            score = format_score(cvss3_base_score(cve.cvss3.cvss3_scoring_vector))
        if score is not None:
            cvss3 = Cvss3(score=score, status=cve.cvss3.status or "unknown")
    return AdvisorySummary(
        details=tuple(cve.details),
        public_date=_parse_date(cve.public_date),
        severity=cve.threat_severity,
        cvss3=cvss3,
    )


class HydraAdvisoryAdapter(AdvisoryPort):
    """Advisory details from the Red Hat security data API.

    Best effort: every failure is logged and reported as None. Successful
    payloads are cached so repeated detail lookups skip the network.
    """

    def __init__(self, http_client: HttpClient, cache: CachePort | None = None) -> None:
        self._http = http_client
        self._cache = cache

    async def _download(self, identifier: str) -> dict | None:
        try:
            return await self._http.get_json(get_hydra_cve_url(identifier))
        except httpx.HTTPStatusError as e:
            logger.warning("Advisory source answered %s for %s", e.response.status_code, identifier)
        except httpx.HTTPError as e:
            logger.warning("Advisory source unreachable for %s: %s", identifier, type(e).__name__)
        except (TypeError, ValueError) as e:
            logger.warning("Unexpected advisory payload for %s: %s", identifier, e)
        return None

    def _cached(self, key: str) -> dict | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get_json(key)
        except Exception as e:
            # Any unreadable entry counts as a miss
            logger.warning("Ignoring unreadable cache entry %s: %s", key, e)
            return None

    def _store(self, key: str, raw: dict) -> None:
        try:
            self._cache.set_json(key, raw)
        except Exception as e:
            logger.warning("Could not cache %s: %s", key, e)

    async def fetch_summary(self, identifier: str) -> AdvisorySummary | None:
        identifier = identifier.upper()
        key = f"hydra:{identifier}"
        raw = self._cached(key)
        fresh = not isinstance(raw, dict)
        if fresh:
            raw = await self._download(identifier)
            if raw is None:
                return None
        else:
            logger.debug("Cache hit for %s", identifier)

        try:
            cve = HydraCve.model_validate(raw)
        except ValidationError as e:
            logger.warning("Unexpected advisory payload for %s: %d validation errors", identifier, e.error_count())
            return None

        if fresh and self._cache is not None:
            self._store(key, raw)
        return _to_summary(cve)
