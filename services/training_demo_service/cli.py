"""Command line entrypoint for the Training Demo Service.

Usage:
    training-demo serve --port 3000 --environment development
    training-demo show-config
"""

from __future__ import annotations

import json
from pathlib import Path

import typer
import uvicorn
from pydantic import ValidationError
from training_service_libs.config import Environment

from services.training_demo_service.app import create_app
from services.training_demo_service.config import TrainingDemoSettings, load_settings

app = typer.Typer(help="Training Demo Service CLI")


def _settings_from_options(
    host: str | None,
    port: int | None,
    environment: Environment | None,
    log_level: str | None,
    static_dir: Path | None,
) -> TrainingDemoSettings:
    try:
        return load_settings(
            HOST=host,
            PORT=port,
            ENVIRONMENT=environment,
            LOG_LEVEL=log_level,
            STATIC_DIR=static_dir,
        )
    except ValidationError as e:
        typer.secho(f"Invalid configuration: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=2)


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
    environment: Environment | None = typer.Option(
        None, "--environment", "-e", help="Runtime environment"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level"),
    static_dir: Path | None = typer.Option(None, "--static-dir", help="Public directory"),
) -> None:
    """Run the service under uvicorn until interrupted."""
    settings = _settings_from_options(host, port, environment, log_level, static_dir)
    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


@app.command("show-config")
def show_config(
    host: str | None = typer.Option(None, "--host", help="Interface to bind"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to listen on"),
    environment: Environment | None = typer.Option(
        None, "--environment", "-e", help="Runtime environment"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level"),
    static_dir: Path | None = typer.Option(None, "--static-dir", help="Public directory"),
) -> None:
    """Print the effective configuration as JSON."""
    settings = _settings_from_options(host, port, environment, log_level, static_dir)
    typer.echo(json.dumps(settings.model_dump(mode="json"), indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
