from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Optional

from ..core.domain.exceptions import TrustTableError
from ..core.domain.trust import TrustTable

logger = logging.getLogger(__name__)

BUNDLED_SNAPSHOT = "trusted-gav.json"


def read_snapshot(path: Optional[Path] = None) -> str:
    if path is not None:
        logger.info(f"Reading trust snapshot from {path}")
        return Path(path).read_text(encoding="utf-8")
    logger.info("Reading bundled trust snapshot")
    return resources.files("trusted_content.data").joinpath(BUNDLED_SNAPSHOT).read_text(encoding="utf-8")


def load_trust_table(path: Optional[Path] = None) -> TrustTable:
    """Load the trust snapshot, bundled unless a path is given.

    Raises TrustTableError when the snapshot is not a JSON array of
    ``{"upstream", "trusted"}`` objects.
    """
    try:
        entries = json.loads(read_snapshot(path))
    except (OSError, json.JSONDecodeError) as exc:
        raise TrustTableError(f"Cannot read trust snapshot: {exc}") from exc
    if not isinstance(entries, list):
        raise TrustTableError("Trust snapshot must be a JSON array")
    return TrustTable.load(entries)
