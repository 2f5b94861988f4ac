from __future__ import annotations

from trusted_content.app import cli
from trusted_content.app.cli import app
from trusted_content.infra.cache_diskcache import DiskCacheAdapter


def test_cli_help_shows_commands(runner):
	result = runner.invoke(app, ["--help"])
	assert result.exit_code == 0
	assert "run" in result.stdout
	assert "clear-cache" in result.stdout


def test_cli_run_help_lists_overrides(runner):
	result = runner.invoke(app, ["run", "--help"])
	assert result.exit_code == 0
	assert "--bind" in result.stdout
	assert "--port" in result.stdout
	assert "--guac" in result.stdout


def test_cli_run_passes_overrides_to_uvicorn(runner, monkeypatch):
	served = {}

	def fake_run(application, host, port, log_level):
		served.update(app=application, host=host, port=port, log_level=log_level)

	monkeypatch.setattr(cli.uvicorn, "run", fake_run)
	result = runner.invoke(app, ["run", "-b", "127.0.0.1", "-p", "9090", "-g", "http://guac.test/query"])

	assert result.exit_code == 0, result.stdout
	assert served["host"] == "127.0.0.1"
	assert served["port"] == 9090
	assert served["log_level"] == "info"
	container = served["app"].state.container
	assert container.config.guac_url() == "http://guac.test/query"


def test_cli_clear_cache(runner, isolated_cache):
	with DiskCacheAdapter(namespace="advisories") as cache:
		cache.set("hydra:CVE-1", b"{}")

	result = runner.invoke(app, ["clear-cache"])

	assert result.exit_code == 0
	assert "Cache cleared (1 entries)" in result.stdout
	with DiskCacheAdapter(namespace="advisories") as cache:
		assert len(cache) == 0
