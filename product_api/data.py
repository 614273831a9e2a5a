# product_api/data.py

"""
Database maintenance command.

    python -m product_api.data --clear

drops and recreates every table, leaving an empty catalog. Handy before
running the API test suite against a shared database.
"""
import logging

import typer
from sqlalchemy.exc import SQLAlchemyError

from .db import Base, engine

logger = logging.getLogger(__name__)

app = typer.Typer(help="Products API database utilities")


def clear_database() -> None:
    """Drop and recreate all tables."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@app.command()
def main(
    clear: bool = typer.Option(False, "--clear", help="Drop and recreate all tables."),
):
    if not clear:
        typer.echo("Nothing to do. Pass --clear to reset the database.")
        return
    try:
        clear_database()
    except SQLAlchemyError as e:
        logger.error(f"Error clearing the database: {e}", exc_info=True)
        typer.secho(f"Error clearing the database: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    typer.secho("Database cleared successfully.", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
