"""Command-line entry point for running and preparing the catalog service."""

import typer
from rich.console import Console
from rich.table import Table

from src.catalog.runtime.context import get_config

console = Console()

app = typer.Typer(
    help="🛍️  Product Catalog CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Interface to bind, defaults to app.host"),
    port: int | None = typer.Option(None, help="Port to bind, defaults to app.port"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    config = get_config()
    bind_host = host or config.app.host
    bind_port = port or config.app.port
    console.print(f"[green]Starting catalog API on {bind_host}:{bind_port}[/green]")
    uvicorn.run(
        "src.catalog.api.http.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        access_log=False,
    )


@app.command("init-db")
def init_db() -> None:
    """Create the product table if it does not exist."""
    from src.catalog.runtime.init_db import init_db as run_init_db

    run_init_db()
    console.print("[green]✅ Database tables created[/green]")


@app.command("show-config")
def show_config() -> None:
    """Print the effective configuration, secrets masked."""
    config = get_config()
    table = Table(title="Catalog configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("environment", config.app.environment)
    table.add_row("listen", f"{config.app.host}:{config.app.port}")
    table.add_row("database", config.database.url)
    table.add_row("image store", config.images.provider)
    table.add_row("cloudinary cloud", config.images.cloud_name or "-")
    table.add_row("cloudinary secret", "set" if config.images.api_secret else "missing")
    table.add_row("page size", str(config.catalog.default_page_size))
    table.add_row("max upload files", str(config.catalog.max_upload_files))
    console.print(table)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
