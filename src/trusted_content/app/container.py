from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..config.settings import AppConfig
from ..core.domain.trust import TrustPolicy
from ..core.services.resolver import TrustResolver
from ..core.usecases.clear_cache import ClearCacheUseCase
from ..core.usecases.get_package import GetPackageUseCase, QueryPackagesUseCase
from ..core.usecases.get_sbom import GetSbomUseCase
from ..core.usecases.get_vulnerability import GetVulnerabilityUseCase
from ..core.usecases.list_catalog import ListCatalogUseCase
from ..core.usecases.package_relations import PackageRelationsUseCase
from ..infra.cache_diskcache import DiskCacheAdapter
from ..infra.guac_adapter import GuacAdapter
from ..infra.http_client import HttpClient
from ..infra.hydra_advisory import HydraAdvisoryAdapter
from ..infra.sbom_registry import SbomRegistry
from ..infra.trust_snapshot import load_trust_table

logger = logging.getLogger(__name__)


def cache_resource(cache_dir, advisory_cache_ttl_hours):
	cache_dir_str = str(cache_dir) if cache_dir else None
	logger.info(f"Initializing cache at: {cache_dir_str or 'default user cache directory'}")
	with DiskCacheAdapter(
		namespace="advisories",
		default_ttl_seconds=advisory_cache_ttl_hours * 3600,
		base_dir=cache_dir_str,
	) as cache:
		logger.debug("Cache initialized successfully")
		yield cache
	logger.debug("Cache closed")


class Container(containers.DeclarativeContainer):
	config = providers.Configuration(pydantic_settings=[AppConfig()])

	cache = providers.Resource(
		cache_resource,
		cache_dir=config.cache_dir,
		advisory_cache_ttl_hours=config.advisory_cache_ttl_hours,
	)

	# One pooled client shared by the graph and advisory adapters; closed on shutdown
	http_client = providers.Singleton(HttpClient, timeout_seconds=config.http_timeout_seconds)

	# Loaded once; a broken snapshot fails startup
	trust_table = providers.Singleton(load_trust_table, path=config.trust_snapshot)

	trust_policy = providers.Singleton(
		TrustPolicy,
		namespace=config.trusted_namespace,
		marker=config.trust_marker,
	)

	graph = providers.Singleton(GuacAdapter, url=config.guac_url, http_client=http_client)

	advisories = providers.Singleton(HydraAdvisoryAdapter, http_client=http_client, cache=cache)

	sbom_registry = providers.Singleton(SbomRegistry.bundled)

	resolver = providers.Factory(
		TrustResolver,
		graph=graph,
		advisories=advisories,
		trust_table=trust_table,
		policy=trust_policy,
		catalog_concurrency=config.catalog_concurrency,
	)

	package_uc = providers.Factory(GetPackageUseCase, resolver=resolver)
	query_packages_uc = providers.Factory(QueryPackagesUseCase, resolver=resolver)
	relations_uc = providers.Factory(PackageRelationsUseCase, resolver=resolver)
	vulnerability_uc = providers.Factory(GetVulnerabilityUseCase, resolver=resolver)
	catalog_uc = providers.Factory(ListCatalogUseCase, resolver=resolver)
	sbom_uc = providers.Factory(GetSbomUseCase, registry=sbom_registry)
	clear_cache_uc = providers.Factory(ClearCacheUseCase, cache=cache)
