from __future__ import annotations

from urllib.parse import quote


def get_package_href(purl: str) -> str:
    return f"/api/package?purl={quote(purl, safe='')}"


def get_osv_vuln_url(osv_id: str) -> str:
    # The graph stores GHSA ids lower-cased
    return f"https://osv.dev/vulnerability/{osv_id.replace('ghsa', 'GHSA')}"


def get_redhat_cve_url(cve_id: str) -> str:
    return f"https://access.redhat.com/security/cve/{cve_id.lower()}"


def get_hydra_cve_url(cve_id: str) -> str:
    return f"https://access.redhat.com/hydra/rest/securitydata/cve/{cve_id.upper()}.json"
