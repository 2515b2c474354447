from __future__ import annotations

import logging

import click
import uvicorn

from weather_cache.utils.config import AppConfig

from .app import create_app


@click.group()
def cli() -> None:
    """Weather lookup backend with memoized Open-Meteo calls."""


@cli.command()
@click.option("--host", default=None, help="Interface to bind (defaults to HOST or 127.0.0.1)")
@click.option("--port", default=None, type=int, help="Port to listen on (defaults to PORT or 3001)")
@click.option(
    "--log-level",
    default="INFO",
    help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
@click.option(
    "--environment",
    type=click.Choice(["development", "test", "production"], case_sensitive=False),
    default=None,
    help="Overrides ENVIRONMENT; cache introspection is disabled in production",
)
def serve(host: str | None, port: int | None, log_level: str, environment: str | None) -> None:
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    config = AppConfig.from_env()
    if host:
        config.host = host
    if port:
        config.port = port
    if environment:
        config.environment = environment.lower()

    uvicorn.run(create_app(config), host=config.host, port=config.port, log_level=log_level.lower())


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
