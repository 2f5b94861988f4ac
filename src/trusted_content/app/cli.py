from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import typer
import uvicorn

from ..config.settings import AppConfig
from .container import Container
from .server import create_app


app = typer.Typer(help="Trusted Content API")


@contextmanager
def provide_container() -> Iterator[Container]:
    container = Container()
    container.init_resources()
    try:
        yield container
    finally:
        container.shutdown_resources()


@app.command(help="Serve the HTTP API. Options override TRUSTED_CONTENT_* environment settings.")
def run(
    bind: str | None = typer.Option(None, "--bind", "-b", help="Address to bind to (default: 0.0.0.0)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on (default: 8080)"),
    guac: str | None = typer.Option(None, "--guac", "-g", help="GUAC GraphQL endpoint (default: http://localhost:8080/query)"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level (default: INFO)"),
) -> None:
    overrides = {
        "bind": bind,
        "port": port,
        "guac_url": guac,
        "log_level": log_level,
    }
    settings = AppConfig(**{k: v for k, v in overrides.items() if v is not None})

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    container = Container()
    container.config.from_pydantic(settings)
    typer.echo(f"Serving on http://{settings.bind}:{settings.port} (graph: {settings.guac_url})")
    uvicorn.run(create_app(container), host=settings.bind, port=settings.port, log_level=settings.log_level.lower())


@app.command("clear-cache", help="Drop cached advisory details.")
def clear_cache() -> None:
    with provide_container() as container:
        removed = container.clear_cache_uc().execute()
        typer.echo(f"Cache cleared ({removed} entries)")


if __name__ == "__main__":
    app()
