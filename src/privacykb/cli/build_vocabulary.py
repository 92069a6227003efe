r"""Vocabulary database builder CLI.

This script loads a JSON-LD vocabulary export into the knowledge base database.

Usage:
    privacykb-vocabulary build \
        --input dpv.jsonld \
        --db-file kb.db \
        --sql-file dpv.sql
"""

import sys
from pathlib import Path

import click

from privacykb.vocabulary.builder import VocabularyDatabaseBuilder
from privacykb.vocabulary.models import VocabularyIngestionError


@click.group()
def cli() -> None:
    """Privacy knowledge base vocabulary builder."""
    pass


@cli.command()
@click.option(
    "--input",
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="Path to JSON-LD vocabulary file",
)
@click.option(
    "--db-file",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Path to SQLite database file",
)
@click.option(
    "--sql-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the generated SQL statements to this file (optional)",
)
def build(input_file: Path, db_file: Path, sql_file: Path | None) -> None:
    """Replace the vocabulary tables with the terms of a JSON-LD file."""
    click.echo("Building vocabulary...")
    click.echo(f"Input: {input_file}")
    click.echo(f"Database: {db_file}")
    if sql_file:
        click.echo(f"SQL file: {sql_file}")
    click.echo()

    builder = VocabularyDatabaseBuilder(db_path=db_file)
    try:
        count = builder.populate_from_file(input_file, sql_file)
        message = f"✓ Vocabulary built successfully ({count} statements)"
        click.echo(click.style(message, fg="green"))

    except VocabularyIngestionError as e:
        click.echo(click.style(f"✗ Invalid vocabulary record: {e}", fg="red"), err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(click.style(f"✗ Invalid JSON: {e}", fg="red"), err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(click.style(f"✗ Error building vocabulary: {e}", fg="red"), err=True)
        sys.exit(1)
    finally:
        builder.dispose()


@cli.command("init-schema")
@click.option(
    "--db-file",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Path to SQLite database file",
)
def init_schema(db_file: Path) -> None:
    """Create the reference tables (definitions, gdpr, dpa, articles, threats)."""
    builder = VocabularyDatabaseBuilder(db_path=db_file)
    try:
        builder.create_reference_schema()
        click.echo(click.style(f"✓ Reference schema ready in {db_file}", fg="green"))
    except Exception as e:
        click.echo(click.style(f"✗ Error creating schema: {e}", fg="red"), err=True)
        sys.exit(1)
    finally:
        builder.dispose()


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
