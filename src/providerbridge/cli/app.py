"""Main Click application root."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import click

from providerbridge.core.config import get_core_config, set_core_config
from providerbridge.core.config.main import Config
from providerbridge.core.exceptions import ProviderBridgeError
from providerbridge.errors import ErrorNormalizer
from providerbridge.permissions import PermissionIndex, index_permissions

logger = logging.getLogger(__name__)


def _read_json(stream) -> Any:
    try:
        return json.load(stream)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"{getattr(stream, 'name', 'input')}: invalid JSON ({e})") from e


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, sort_keys=True))


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to settings.toml",
)
@click.pass_context
def cli(ctx, verbose, config_path):
    """Provider bridge core - permission index and RPC error normalization."""
    ctx.ensure_object(dict)

    # Layered config: defaults < TOML < env
    set_core_config(Config.load(config_path))
    cfg = get_core_config()

    level = logging.DEBUG if verbose or cfg.debug else cfg.log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s %(message)s", stream=sys.stderr)


@cli.command("index")
@click.argument("grants_file", type=click.File("r"))
@click.option(
    "--existing",
    "existing_file",
    type=click.File("r"),
    help="Permission map to merge the grants into",
)
def index_command(grants_file, existing_file):
    """Key a JSON list of permission grants by chain ID, address and origin."""
    namespace = get_core_config().permissions.namespace
    grants = _read_json(grants_file)
    if not isinstance(grants, list):
        raise click.BadParameter("grants file must contain a JSON list")

    try:
        existing = (
            PermissionIndex.from_dict(_read_json(existing_file), namespace=namespace)
            if existing_file
            else None
        )
        index = index_permissions(grants, existing)
    except ProviderBridgeError as e:
        raise click.ClickException(str(e)) from e

    _echo_json(index.as_dict(namespace=namespace))


@cli.command("normalize")
@click.argument("raw_file", type=click.File("r"), default="-")
def normalize_command(raw_file):
    """Normalize a raw RPC error (JSON, file or stdin) into a provider error."""
    text = raw_file.read()
    try:
        raw = json.loads(text)
    except json.JSONDecodeError:
        # Non-JSON input is still a raw failure value
        raw = text

    result = ErrorNormalizer.from_core_config().normalize(raw)
    _echo_json(result.to_json())


@cli.command("check")
@click.argument("map_file", type=click.File("r"))
@click.argument("chain_id")
@click.argument("address")
@click.argument("origin")
@click.pass_context
def check_command(ctx, map_file, chain_id, address, origin):
    """Exit 0 if the permission map grants ORIGIN access to ADDRESS on CHAIN_ID."""
    namespace = get_core_config().permissions.namespace
    try:
        index = PermissionIndex.from_dict(_read_json(map_file), namespace=namespace)
    except ProviderBridgeError as e:
        raise click.ClickException(str(e)) from e

    if index.has_permission(chain_id, address, origin):
        click.echo("granted")
        return
    click.echo("not granted")
    ctx.exit(1)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
