"""
Queue commands
"""

from typing import Tuple

import click
from rich.console import Console

from ...core.environment_manager import EnvironmentManager
from ...core.queue_store import QueueStore
from ...models.error_models import ConfigurationError, VectorStoreError
from ..utils.async_runner import async_command
from ..utils.runtime import open_runtime


@click.group()
def queue() -> None:
    """
    Documentation queue commands.

    Pending documentation URLs live in a plain text file, one URL per line
    (RAGDOCS_QUEUE_PATH, default ./queue.txt).
    """
    pass


@queue.command()
@click.pass_context
@async_command
async def run(ctx: click.Context) -> None:
    """
    Process queued URLs into the vector collection.

    Each URL is fetched, embedded and stored. Processed URLs are removed
    from the queue whether they succeeded or failed; failures are listed
    in the report.
    """
    console: Console = ctx.obj["console"]

    try:
        config = EnvironmentManager().build_config()
    except ConfigurationError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        ctx.exit(1)

    async with open_runtime(config) as runtime:
        try:
            await runtime.vector_store.ensure_collection()
        except VectorStoreError as e:
            console.print(f"[red]{e}[/red]")
            ctx.exit(1)

        with console.status("Processing queue..."):
            response = await runtime.processor.process()

    if response.is_error:
        console.print(f"[red]{response.text}[/red]")
        ctx.exit(1)

    console.print(response.text, markup=False, highlight=False)


@queue.command()
@click.argument("urls", nargs=-1, required=True)
@click.pass_context
@async_command
async def add(ctx: click.Context, urls: Tuple[str, ...]) -> None:
    """
    Append URLS to the end of the queue.
    """
    console: Console = ctx.obj["console"]
    store = _open_store(ctx)

    pending = await store.append(urls)
    console.print(f"[green]Queued {len(urls)} URLs ({pending} pending)[/green]")


@queue.command(name="list")
@click.pass_context
@async_command
async def list_queue(ctx: click.Context) -> None:
    """
    Show pending URLs in processing order.
    """
    console: Console = ctx.obj["console"]
    store = _open_store(ctx)

    entries = await store.load()
    if not entries:
        console.print("Queue is empty")
        return

    console.print(f"[cyan]{len(entries)} URLs pending:[/cyan]")
    for url in entries:
        console.print(url, markup=False, highlight=False)


@queue.command()
@click.pass_context
@async_command
async def clear(ctx: click.Context) -> None:
    """
    Remove every pending URL.
    """
    console: Console = ctx.obj["console"]
    store = _open_store(ctx)

    await store.clear()
    console.print("[green]Queue cleared[/green]")


def _open_store(ctx: click.Context) -> QueueStore:
    try:
        queue_config = EnvironmentManager().build_queue_config()
    except ConfigurationError as e:
        ctx.obj["console"].print(f"[red]Configuration error: {e}[/red]")
        ctx.exit(1)
    return QueueStore(queue_config.path)
