from __future__ import annotations

from enum import Enum


class VulnerabilityScheme(Enum):
    """Identifier scheme a graph vulnerability record was reported under.

    The set is closed: records under any scheme other than OSV or CVE are
    carried as ``OTHER`` and ignored when building reference lists.
    """

    OSV = "OSV"
    CVE = "CVE"
    OTHER = "OTHER"

    @classmethod
    def from_typename(cls, typename: str | None) -> "VulnerabilityScheme":
        if not typename:
            return cls.OTHER
        u = typename.upper()
        if u == "OSV":
            return cls.OSV
        if u == "CVE":
            return cls.CVE
        return cls.OTHER
