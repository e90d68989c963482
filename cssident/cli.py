"""Typer CLI wiring for cssident."""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer

from cssident import __version__
from cssident.config import Configuration, default_configuration, load_configuration
from cssident.errors import LocalIdentError
from cssident.hashing import parse_hash_spec
from cssident.logging_utils import configure_logging, get_logger
from cssident.placeholders import PlaceholderKind, scan_template
from cssident.resolver import resolve_local_ident

app = typer.Typer(help="Generate scoped CSS module class names from templates")

logger = get_logger(__name__)

DEFAULT_TEMPLATE = "[hash]"
_INFERRED_CONFIG = Path("cssident.yaml")


def _version_callback(value: bool) -> None:
    """Print the cssident package version when requested."""

    if value:
        typer.echo(f"cssident {__version__}")
        raise typer.Exit()


@app.callback()
def _main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show the cssident version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: str = typer.Option(
        "",
        "--log-level",
        help="Set log level (e.g. warning, info, debug). Overrides CSSIDENT_LOG_LEVEL.",
    ),
) -> None:
    """Global callback to wire shared options like --version."""

    configure_logging(log_level or None)

    return None


def _config_option(help_text: str) -> Optional[Path]:
    """Shared configuration file option declaration for CLI commands."""

    return typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help=help_text,
    )


def _determine_configuration(
    config_path: Optional[Path],
    overrides: dict[str, Any],
) -> Configuration:
    """Load the configuration file, if any, and apply command line overrides."""

    if config_path is not None:
        configuration = load_configuration(config_path)
    elif _INFERRED_CONFIG.exists():
        logger.info("Using configuration from %s", _INFERRED_CONFIG)
        configuration = load_configuration(_INFERRED_CONFIG)
    else:
        configuration = default_configuration()

    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return configuration
    return configuration.replace(**changes)


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=2)


@app.command()
def resolve(
    resource_path: str = typer.Argument(..., help="Stylesheet path the class names belong to."),
    local_names: List[str] = typer.Argument(..., help="One or more local class names."),
    template: str = typer.Option(
        DEFAULT_TEMPLATE,
        "--template",
        "-t",
        help="Local ident template, e.g. '[name]__[local]--[hash:md5:hex:5]'.",
    ),
    config: Optional[Path] = _config_option(
        "Path to a cssident.yaml configuration file."
    ),
    root: Optional[str] = typer.Option(
        None,
        "--root",
        "--context",
        help="Base directory used to compute [path] and the path-based hash.",
    ),
    hash_algorithm: Optional[str] = typer.Option(
        None, "--hash-algorithm", help="Default algorithm for bare [hash]."
    ),
    hash_digest: Optional[str] = typer.Option(
        None, "--hash-digest", help="Default digest encoding (hex, base64, base64url, ...)."
    ),
    hash_length: Optional[int] = typer.Option(
        None, "--hash-length", help="Default number of hash characters to keep."
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--lenient",
        help="Fail on unknown placeholders instead of keeping them.",
    ),
    ext_with_dot: Optional[bool] = typer.Option(
        None,
        "--ext-dot/--no-ext-dot",
        help="Whether [ext] includes the leading dot.",
    ),
    with_content: bool = typer.Option(
        False,
        "--with-content",
        help="Read the stylesheet and hash its contents instead of its path.",
    ),
) -> None:
    """Print the local ident for each class name, one per line."""

    try:
        configuration = _determine_configuration(
            config,
            {
                "root": root,
                "hash_algorithm": hash_algorithm,
                "hash_digest": hash_digest,
                "hash_digest_length": hash_length,
                "strict_unknown_tokens": strict,
                "ext_with_dot": ext_with_dot,
            },
        )
    except (LocalIdentError, FileNotFoundError) as exc:
        _fail(exc)

    content: Optional[bytes] = None
    if with_content:
        try:
            content = Path(resource_path).read_bytes()
        except OSError as exc:
            _fail(exc)

    for local_name in local_names:
        try:
            ident = resolve_local_ident(
                resource_path,
                local_name,
                template,
                configuration,
                content=content,
            )
        except LocalIdentError as exc:
            _fail(exc)
        typer.echo(ident)


@app.command("check-template")
def check_template(
    template: str = typer.Argument(..., help="Template to validate."),
    config: Optional[Path] = _config_option(
        "Path to a cssident.yaml configuration file."
    ),
    strict: Optional[bool] = typer.Option(
        None,
        "--strict/--lenient",
        help="Treat unknown placeholders as errors.",
    ),
) -> None:
    """List the placeholders in a template and validate their parameters."""

    try:
        configuration = _determine_configuration(config, {"strict_unknown_tokens": strict})
    except (LocalIdentError, FileNotFoundError) as exc:
        _fail(exc)

    placeholders = scan_template(template)
    if not placeholders:
        typer.echo("No placeholders found.")
        return

    unknown: list[str] = []
    for placeholder in placeholders:
        if placeholder.kind is PlaceholderKind.HASH:
            try:
                spec = parse_hash_spec(
                    placeholder.params,
                    defaults=configuration.default_hash_spec,
                    token=placeholder.raw,
                )
            except LocalIdentError as exc:
                _fail(exc)
            length = spec.length if spec.length is not None else "full"
            typer.echo(
                f"{placeholder.start}: {placeholder.raw} -> hash "
                f"({spec.algorithm}, {spec.digest}, {length})"
            )
        elif placeholder.kind is PlaceholderKind.UNKNOWN:
            unknown.append(placeholder.raw)
            typer.echo(f"{placeholder.start}: {placeholder.raw} -> unknown")
        else:
            typer.echo(f"{placeholder.start}: {placeholder.raw} -> {placeholder.kind.value}")

    if unknown and configuration.strict_unknown_tokens:
        typer.echo(f"Error: unknown placeholders: {', '.join(unknown)}", err=True)
        raise typer.Exit(code=2)


def main() -> None:
    """Entry point used by the console script."""

    app()


if __name__ == "__main__":
    main()
