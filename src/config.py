"""Settings for Menu Lens, read from the [tool.config] table of pyproject.toml.

The Gemini API key is a secret and lives in src.values instead.
"""

import tomllib
from pathlib import Path

import typer

_pyproject = Path(__file__).parent.parent / "pyproject.toml"
with _pyproject.open("rb") as f:
    _pyproject_data = tomllib.load(f)

_settings = _pyproject_data["tool"]["config"]

PROJECT_NAME = _pyproject_data["project"]["name"]
PROJECT_VERSION = _pyproject_data["project"]["version"]

FLASK_PORT = _settings["flask_port"]
MAX_UPLOAD_SIZE_MB = _settings["max_upload_size_mb"]
DEFAULT_GEMINI_MODEL = _settings["default_gemini_model"]
DEFAULT_IMAGEN_MODEL = _settings["default_imagen_model"]

SETTINGS = {
    "project_name": PROJECT_NAME,
    "project_version": PROJECT_VERSION,
    "flask_port": FLASK_PORT,
    "max_upload_size_mb": MAX_UPLOAD_SIZE_MB,
    "default_gemini_model": DEFAULT_GEMINI_MODEL,
    "default_imagen_model": DEFAULT_IMAGEN_MODEL,
}


def config_cli(
    key: str | None = typer.Argument(None, help=f"Setting to print: {', '.join(SETTINGS)}"),
    all: bool = typer.Option(False, "--all", help="Print every setting as name=value"),
) -> None:
    """Print Menu Lens settings, e.g. `menu-lens-config default_gemini_model`."""
    if all:
        for name, value in SETTINGS.items():
            typer.echo(f"{name}={value}")
        return

    if key is None:
        typer.secho("Error: No config key specified. Use --help to see available keys.", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if key not in SETTINGS:
        typer.secho(f"Error: Unknown config key {key!r}.", fg=typer.colors.RED, err=True)
        raise typer.Exit(2)

    typer.echo(SETTINGS[key])


def main():
    typer.run(config_cli)


if __name__ == "__main__":
    main()
