from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from trusted_content.config.settings import AppConfig
from trusted_content.config.urls import get_hydra_cve_url, get_osv_vuln_url, get_package_href, get_redhat_cve_url


def test_defaults(monkeypatch):
    monkeypatch.delenv("TRUSTED_CONTENT_CACHE_DIR", raising=False)
    cfg = AppConfig()
    assert cfg.bind == "0.0.0.0"
    assert cfg.port == 8080
    assert cfg.guac_url == "http://localhost:8080/query"
    assert cfg.trusted_namespace == "redhat"
    assert cfg.trust_snapshot is None
    assert cfg.cache_dir is None


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("TRUSTED_CONTENT_PORT", "9000")
    monkeypatch.setenv("TRUSTED_CONTENT_GUAC_URL", "http://guac:8080/query")
    monkeypatch.setenv("TRUSTED_CONTENT_TRUST_SNAPSHOT", str(tmp_path / "gav.json"))
    cfg = AppConfig()
    assert cfg.port == 9000
    assert cfg.guac_url == "http://guac:8080/query"
    assert cfg.trust_snapshot == Path(tmp_path / "gav.json")


def test_invalid_values_are_rejected():
    with pytest.raises(ValidationError):
        AppConfig(port=0)
    with pytest.raises(ValidationError):
        AppConfig(unknown_option=True)


def test_urls():
    assert get_package_href("pkg:maven/a/b@1.0?type=jar") == "/api/package?purl=pkg%3Amaven%2Fa%2Fb%401.0%3Ftype%3Djar"
    assert get_osv_vuln_url("ghsa-abcd-efgh-ijkl") == "https://osv.dev/vulnerability/GHSA-abcd-efgh-ijkl"
    assert get_redhat_cve_url("CVE-2022-1471") == "https://access.redhat.com/security/cve/cve-2022-1471"
    assert get_hydra_cve_url("cve-2022-1471") == "https://access.redhat.com/hydra/rest/securitydata/cve/CVE-2022-1471.json"


def test_catalog_concurrency_is_bounded(monkeypatch):
    assert AppConfig().catalog_concurrency == 8
    monkeypatch.setenv("TRUSTED_CONTENT_CATALOG_CONCURRENCY", "16")
    assert AppConfig().catalog_concurrency == 16
    with pytest.raises(ValidationError):
        AppConfig(catalog_concurrency=0)
