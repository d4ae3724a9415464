# maker_indexer/cli/commands.py

import sys
import textwrap
from typing import Tuple

import click

from ..contracts.abi_loader import AbiLoader, AbiLoadError
from ..core.config import IndexerSettings
from ..database.connection import DatabaseManager
from ..events import event_registry
from ..factory import create_transformer
from ..fetch.log_fetcher import build_web3
from ..transform.errors import FatalRangeQueryError, TransformationFailed
from ..types import TransformerConfig, InvalidConfigError


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, verbose):
    """Maker event transformer CLI"""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


@cli.command()
def events():
    """List registered events and their topic signatures"""
    for descriptor in event_registry.all():
        click.echo(f"{descriptor.key:<16} {descriptor.name:<16} {descriptor.signature}")


@cli.command()
@click.option('--event', 'event_key', required=True, help='Registered event key, e.g. flip_kick')
@click.option('--contract', 'contract_address', required=True, help='Contract address emitting the event')
@click.option('--abi', 'abi_path', required=True, type=click.Path(exists=True, dir_okay=False),
              help='Path to the contract ABI JSON file')
@click.option('--start', 'starting_block_number', required=True, type=int, help='First block (inclusive)')
@click.option('--end', 'ending_block_number', required=True, type=int, help='Last block (inclusive)')
@click.option('--topic', 'topics', multiple=True,
              help='Topic hash to filter on (defaults to the event signature)')
@click.pass_context
def execute(ctx, event_key: str, contract_address: str, abi_path: str,
            starting_block_number: int, ending_block_number: int, topics: Tuple[str, ...]):
    """Transform the event logs of one block range"""
    try:
        settings = IndexerSettings.from_env()
    except InvalidConfigError as e:
        raise click.ClickException(str(e))

    if ctx.obj.get('verbose'):
        settings.log_level = "DEBUG"
    settings.configure_logging()

    if settings.rpc is None:
        raise click.ClickException("MAKER_INDEXER_RPC_URL is not set")

    try:
        descriptor = event_registry.get(event_key)
    except KeyError as e:
        raise click.ClickException(str(e.args[0]))

    try:
        config = TransformerConfig(
            contract_address=contract_address,
            contract_abi=AbiLoader().load_abi(abi_path),
            topics=list(topics) or [descriptor.signature],
            starting_block_number=starting_block_number,
            ending_block_number=ending_block_number,
        )
        config.validate()
    except (AbiLoadError, InvalidConfigError) as e:
        raise click.ClickException(str(e))

    db_manager = DatabaseManager(settings.database)
    db_manager.initialize()

    try:
        w3 = build_web3(settings.rpc)
        transformer = create_transformer(descriptor.key, db_manager, w3, config)
        transformer.execute()
    except TransformationFailed as e:
        click.echo(f"❌ {e}", err=True)
        click.echo(textwrap.indent(e.details(), "   "), err=True)
        sys.exit(1)
    except FatalRangeQueryError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)
    finally:
        db_manager.shutdown()

    click.echo(f"✅ {descriptor.name} logs transformed for blocks {starting_block_number}-{ending_block_number}")
