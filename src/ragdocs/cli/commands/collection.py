"""
Vector collection commands
"""

import click
from rich.console import Console

from ...core.environment_manager import EnvironmentManager
from ...models.error_models import ConfigurationError, VectorStoreError
from ..utils.async_runner import async_command
from ..utils.runtime import open_runtime


@click.group()
def collection() -> None:
    """
    Vector collection management commands.
    """
    pass


@collection.command()
@click.pass_context
@async_command
async def init(ctx: click.Context) -> None:
    """
    Create the destination collection if it does not exist yet.

    Safe to run repeatedly. An existing collection is never modified.
    """
    console: Console = ctx.obj["console"]

    try:
        config = EnvironmentManager().build_config()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        ctx.exit(1)

    async with open_runtime(config) as runtime:
        try:
            created = await runtime.vector_store.ensure_collection()
        except VectorStoreError as e:
            console.print(f"[red]{e}[/red]")
            ctx.exit(1)

    name = config.collection.name
    if created:
        console.print(f"[green]Created collection '{name}'[/green]")
    else:
        console.print(f"Collection '{name}' already exists")
