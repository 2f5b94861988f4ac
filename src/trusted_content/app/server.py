from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from ..core.domain.exceptions import (
    InvalidCoordinateError,
    MissingQueryArgumentError,
    MissingVersionError,
    PackageNotFoundError,
    TrustedContentError,
    UpstreamUnavailableError,
)
from .container import Container
from .views import (
    ErrorView,
    PackageRefView,
    PackageView,
    VulnerabilityView,
    package_ref_list_view,
    package_view,
    vulnerability_view,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR: dict[type[TrustedContentError], int] = {
    InvalidCoordinateError: 400,
    MissingVersionError: 400,
    MissingQueryArgumentError: 400,
    PackageNotFoundError: 404,
    UpstreamUnavailableError: 502,
}

_ERRORS: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorView, "description": "Invalid or missing package URL"},
    502: {"model": ErrorView, "description": "The package graph could not be queried"},
}

_PURLS = Body(
    ...,
    examples=[["pkg:maven/org.apache.quarkus/quarkus@1.2", "pkg:maven/io.vertx/vertx-core@4.3.7"]],
)


def status_for(exc: TrustedContentError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 500


def get_container(request: Request) -> Container:
    return request.app.state.container


package_router = APIRouter(prefix="/api/package", tags=["package"])
vulnerability_router = APIRouter(prefix="/api/vulnerability", tags=["vulnerability"])


@package_router.get(
    "",
    response_model=PackageView,
    summary="Retrieve a package",
    responses=_ERRORS,
)
async def get_package(
    purl: Optional[str] = Query(None, description="Package URL to look up"),
    container: Container = Depends(get_container),
):
    package = await container.package_uc().execute(purl)
    return package_view(package)


@package_router.post(
    "",
    response_model=list[Optional[PackageView]],
    summary="Search for packages",
    description="One entry per input purl, in order; invalid or failing purls yield null.",
)
async def query_packages(
    purls: list[str] = _PURLS,
    container: Container = Depends(get_container),
):
    packages = await container.query_packages_uc().execute(purls)
    return [package_view(p) if p is not None else None for p in packages]


@package_router.post(
    "/dependencies",
    response_model=list[list[PackageRefView]],
    summary="Retrieve the dependencies of packages",
    responses=_ERRORS,
)
async def get_dependencies(
    purls: list[str] = _PURLS,
    container: Container = Depends(get_container),
):
    results = await container.relations_uc().dependencies(purls)
    return [package_ref_list_view(refs) for refs in results]


@package_router.post(
    "/dependents",
    response_model=list[list[PackageRefView]],
    summary="Retrieve the dependents of packages",
    responses=_ERRORS,
)
async def get_dependents(
    purls: list[str] = _PURLS,
    container: Container = Depends(get_container),
):
    results = await container.relations_uc().dependents(purls)
    return [package_ref_list_view(refs) for refs in results]


@package_router.post(
    "/versions",
    response_model=list[list[PackageRefView]],
    summary="Retrieve the known and trusted versions of packages",
    responses=_ERRORS,
)
async def get_versions(
    purls: list[str] = _PURLS,
    container: Container = Depends(get_container),
):
    results = await container.relations_uc().versions(purls)
    return [package_ref_list_view(refs) for refs in results]


@package_router.get(
    "/catalog",
    response_model=list[PackageView],
    summary="List all trusted and known packages",
    responses={502: _ERRORS[502]},
)
async def get_catalog(container: Container = Depends(get_container)):
    packages = await container.catalog_uc().execute()
    return [package_view(p) for p in packages]


@package_router.get(
    "/sbom",
    summary="Retrieve the SBOM of a package",
    responses={400: _ERRORS[400], 404: {"model": ErrorView, "description": "No SBOM for this package"}},
)
async def get_sbom(
    purl: Optional[str] = Query(None, description="Exact package URL of the SBOM subject"),
    container: Container = Depends(get_container),
) -> dict:
    return container.sbom_uc().execute(purl)


@vulnerability_router.get(
    "",
    response_model=VulnerabilityView,
    summary="Retrieve a vulnerability",
    responses=_ERRORS,
)
async def get_vulnerability(
    cve: Optional[str] = Query(None, description="Vulnerability identifier, e.g. CVE-2022-1471"),
    container: Container = Depends(get_container),
):
    vulnerability = await container.vulnerability_uc().execute(cve)
    return vulnerability_view(vulnerability)


@vulnerability_router.get(
    "/{cve}",
    response_model=VulnerabilityView,
    summary="Retrieve a vulnerability by path",
    responses={502: _ERRORS[502]},
)
async def get_vulnerability_by_id(cve: str, container: Container = Depends(get_container)):
    vulnerability = await container.vulnerability_uc().execute(cve)
    return vulnerability_view(vulnerability)


async def handle_domain_error(request: Request, exc: TrustedContentError) -> JSONResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status, content={"status": status, "error": str(exc)})


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: Container = app.state.container
    container.init_resources()
    table = container.trust_table()
    logger.info(f"Trusted content API ready ({len(table)} trust entries)")
    try:
        yield
    finally:
        await container.http_client().aclose()
        container.shutdown_resources()
        logger.info("Trusted content API stopped")


def create_app(container: Optional[Container] = None) -> FastAPI:
    app = FastAPI(
        title="Trusted Content API",
        description="Package trust and vulnerability information backed by a GUAC graph",
        lifespan=lifespan,
        docs_url="/swagger-ui",
        openapi_url="/openapi.json",
        redoc_url=None,
    )
    app.state.container = container or Container()
    app.add_exception_handler(TrustedContentError, handle_domain_error)
    app.include_router(package_router)
    app.include_router(vulnerability_router)
    return app
