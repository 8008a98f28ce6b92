"""
Main CLI entry point for ragdocs
"""

import logging
import os
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

# Initialize console
console = Console()

# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(console=console, rich_tracebacks=True)],
)


@click.group()
@click.version_option(version="1.0.0", prog_name="ragdocs")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, no_color: bool) -> None:
    """
    ragdocs - Documentation Queue Ingestion

    Queue documentation URLs and ingest them into a Qdrant vector
    collection using OpenAI embeddings.

    Examples:
      ragdocs queue add https://docs.python.org/3/   # Queue a page
      ragdocs queue run                             # Process the queue
      ragdocs collection init                       # Create the collection
    """
    ctx.ensure_object(dict)

    # Configure console
    if no_color:
        ctx.obj["console"] = Console(force_terminal=False, no_color=True)
    else:
        ctx.obj["console"] = console

    # Configure logging level
    log_level = getattr(logging, os.getenv("RAGDOCS_LOG_LEVEL", "").upper(), None)
    if verbose:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger("ragdocs").setLevel(logging.DEBUG)
        ctx.obj["verbose"] = True
    else:
        if isinstance(log_level, int):
            logging.getLogger("ragdocs").setLevel(log_level)
        ctx.obj["verbose"] = False

    ctx.obj["no_color"] = no_color


# Import and register commands at module level to support testing
from .commands import collection, queue  # noqa: E402

cli.add_command(queue.queue)
cli.add_command(collection.collection)


def main() -> None:
    """Main entry point for the CLI application"""
    obj = {}
    try:
        cli(obj=obj)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if obj.get("verbose"):
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
