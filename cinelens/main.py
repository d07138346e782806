"""
Point d'entrée CLI de CineLens.

Initialise le container DI, configure le logging et fournit les commandes CLI.
"""

import asyncio

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import Settings
from .container import Container
from .logging_config import configure_logging

app = typer.Typer(
    name="cinelens",
    help="Serveur MCP de metadonnees films et series (OMDb + TMDB)",
    no_args_is_help=True,
)
container = Container()

# stdout appartient au protocole MCP pendant `serve`: les messages vont sur stderr
console = Console()
err_console = Console(stderr=True)


def get_config() -> Settings:
    """Récupère les paramètres de l'application depuis le container DI."""
    return container.config()


async def _serve() -> None:
    server = container.mcp_server()
    try:
        await server.run_stdio()
    finally:
        await container.omdb_client().close()
        await container.tmdb_client().close()
        logger.info("Serveur MCP arrete")


@app.command()
def serve() -> None:
    """Lance le serveur MCP sur stdio."""
    config = get_config()
    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        rotation_size=config.log_rotation_size,
        retention_count=config.log_retention_count,
    )

    missing = config.missing_api_keys()
    if missing:
        err_console.print("[red]Missing required API keys:[/red]")
        for key in missing:
            err_console.print(f"  - {key}")
        logger.error("Cles API manquantes", missing=len(missing))
        raise typer.Exit(code=1)

    logger.info("Demarrage de CineLens", version=__version__)
    asyncio.run(_serve())


@app.command()
def tools() -> None:
    """Liste les outils exposes par le serveur."""
    server = container.mcp_server()
    table = Table(title="Outils MCP")
    table.add_column("Nom", style="cyan")
    table.add_column("Titre")
    for tool in asyncio.run(server.list_tools()):
        table.add_row(tool.name, tool.title or "")
    console.print(table)


@app.command()
def version() -> None:
    """Affiche les informations de version."""
    typer.echo(f"CineLens v{__version__}")


def main() -> None:
    """Point d'entrée de l'application."""
    app()


if __name__ == "__main__":
    main()
