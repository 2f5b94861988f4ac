from __future__ import annotations

import logging
from typing import Optional

from cvss import CVSS3
from cvss.exceptions import CVSSError

logger = logging.getLogger(__name__)


def cvss3_base_score(vector: str | None) -> Optional[float]:
	"""Compute the CVSS v3 base score for a vector string such as ``CVSS:3.1/AV:N/...``."""
	if not vector or not vector.upper().startswith("CVSS:3"):
		return None
	try:
		scores = CVSS3(vector).scores()
	except CVSSError as e:
		logger.debug("Invalid CVSS v3 vector %r: %s", vector, e)
		return None
	if isinstance(scores, (tuple, list)) and len(scores) >= 1:
		return float(scores[0])
	return None


def format_score(score: str | float | None) -> Optional[str]:
	"""Render a score the way advisories print it: one decimal place."""
	if score is None:
		return None
	try:
		return f"{float(score):.1f}"
	except ValueError:
		return None
