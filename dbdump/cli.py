"""dbdump CLI - Command-line interface for dumping and loading database data."""

import os
from pathlib import Path
from typing import Optional, Union

import typer
from typing_extensions import Annotated

from dbdump import __version__
from dbdump.containers import get_container_class
from dbdump.core.config import load_config
from dbdump.core.helper import SerializationHelper
from dbdump.core.selector import TableSelector
from dbdump.exceptions import DBDumpError
from dbdump.models.results import DumpResult, LoadResult
from dbdump.models.settings import DumpSettings
from dbdump.operators import create_adapter
from dbdump.utils.log import configure_logging

app = typer.Typer(
    name="dbdump",
    help="dbdump - Engine-agnostic database data dump and restore",
    add_completion=True,
)

UrlOption = Annotated[
    Optional[str],
    typer.Option("--url", "-u", help="Database URL (default: $DBDUMP_DATABASE_URL)"),
]
FormatOption = Annotated[
    Optional[str],
    typer.Option("--format", "-f", help="Serialization format: yaml or csv"),
]
IncludeOption = Annotated[
    Optional[str],
    typer.Option("--include", "-i", help="Only these tables (separated by ':' or ',')"),
]
ExcludeOption = Annotated[
    Optional[str],
    typer.Option("--exclude", "-e", help="Skip these tables (separated by ':' or ',')"),
]
PageSizeOption = Annotated[
    Optional[int],
    typer.Option("--page-size", help="Records read per query while dumping", min=1),
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option(
        "--config",
        "-c",
        help="YAML settings file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Verbose output"),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"dbdump version {__version__}")
        raise typer.Exit()


def _build_settings(
    config_path: Optional[Path],
    verbose: bool,
    **overrides: object,
) -> DumpSettings:
    """Layer environment, settings file and command-line options; set up logging."""
    config = load_config()
    configure_logging("DEBUG" if verbose else config.log_level, config.log_format)
    settings = DumpSettings.from_config(config)
    if config_path is not None:
        settings = settings.load_from_yaml(config_path)
    return settings.merged_with(**overrides)


def _helper(adapter, settings: DumpSettings) -> SerializationHelper:
    selector = TableSelector(adapter, include=settings.include, exclude=settings.exclude)
    return SerializationHelper(
        adapter,
        get_container_class(settings.format),
        selector=selector,
        page_size=settings.page_size,
        batch_size=settings.batch_size,
    )


def _connect(settings: DumpSettings):
    return create_adapter(
        settings.require_url(),
        adapter=settings.adapter,
        schema=settings.schema_name,
    )


def _is_directory_target(target: str, force_dir: bool) -> bool:
    return force_dir or Path(target).is_dir() or target.endswith(("/", os.sep))


def _display_result(result: Union[DumpResult, LoadResult], verbose: bool = False) -> None:
    """Display dump/load result to console."""
    action = "Dumped" if isinstance(result, DumpResult) else "Loaded"
    typer.secho(
        f"{action} {result.table_count} tables, {result.total_rows:,} rows "
        f"in {result.duration_seconds:.2f}s",
        fg=typer.colors.GREEN,
        bold=True,
    )

    if verbose and result.tables:
        typer.echo("\nTable details:")
        for table_result in result.tables:
            notes = []
            if table_result.skipped:
                notes.append("no data")
            if table_result.used_delete_fallback:
                notes.append("cleared with DELETE")
            if table_result.sequence_reset:
                notes.append("sequence reset")
            suffix = f" ({', '.join(notes)})" if notes else ""
            typer.echo(f"  {table_result.table}: {table_result.rows:,} rows{suffix}")


def _fail(e: Exception, verbose: bool) -> None:
    if isinstance(e, DBDumpError):
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
    else:
        typer.secho(f"Unexpected error: {e}", fg=typer.colors.RED, err=True)
        if verbose:
            import traceback
            traceback.print_exc()
    raise typer.Exit(code=1)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """dbdump - Dump database data to YAML/CSV files and load it back."""
    pass


def _dump(
    target: str,
    to_dir: bool,
    url: Optional[str],
    format: Optional[str],
    include: Optional[str],
    exclude: Optional[str],
    page_size: Optional[int],
    config: Optional[Path],
    verbose: bool,
) -> None:
    try:
        settings = _build_settings(
            config,
            verbose,
            database_url=url,
            format=format,
            include=include,
            exclude=exclude,
            page_size=page_size,
        )
        with _connect(settings) as adapter:
            helper = _helper(adapter, settings)
            if _is_directory_target(target, to_dir):
                typer.echo(f"Dumping to directory: {target}")
                result = helper.dump_to_dir(target)
            else:
                typer.echo(f"Dumping to file: {target}")
                result = helper.dump(target)
        _display_result(result, verbose)
    except typer.Exit:
        raise
    except Exception as e:
        _fail(e, verbose)


@app.command()
def dump(
    target: Annotated[str, typer.Argument(help="Output file, or directory for one file per table")],
    to_dir: Annotated[
        bool,
        typer.Option("--dir", "-d", help="Write one file per table into TARGET"),
    ] = False,
    url: UrlOption = None,
    format: FormatOption = None,
    include: IncludeOption = None,
    exclude: ExcludeOption = None,
    page_size: PageSizeOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Dump table data to a file or a directory.

    TARGET is treated as a directory if it exists as one, ends with a path
    separator, or --dir is given.
    """
    _dump(target, to_dir, url, format, include, exclude, page_size, config, verbose)


@app.command("dump_data_only")
def dump_data_only(
    target: Annotated[str, typer.Argument(help="Output file, or directory for one file per table")],
    to_dir: Annotated[
        bool,
        typer.Option("--dir", "-d", help="Write one file per table into TARGET"),
    ] = False,
    url: UrlOption = None,
    format: FormatOption = None,
    include: IncludeOption = None,
    exclude: ExcludeOption = None,
    page_size: PageSizeOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Dump table data only (same as 'dump'; schemas are never dumped)."""
    _dump(target, to_dir, url, format, include, exclude, page_size, config, verbose)


@app.command()
def load(
    target: Annotated[
        Path,
        typer.Argument(
            help="File or directory to load",
            exists=True,
            file_okay=True,
            dir_okay=True,
            readable=True,
        ),
    ],
    truncate: Annotated[
        bool,
        typer.Option("--truncate/--no-truncate", help="Clear tables before loading"),
    ] = True,
    url: UrlOption = None,
    format: FormatOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Load table data from a file or a directory of per-table files."""
    try:
        settings = _build_settings(config, verbose, database_url=url, format=format)
        with _connect(settings) as adapter:
            helper = _helper(adapter, settings)
            if target.is_dir():
                typer.echo(f"Loading directory: {target}")
                result = helper.load_from_dir(target, truncate=truncate)
            else:
                typer.echo(f"Loading file: {target}")
                result = helper.load(target, truncate=truncate)
        _display_result(result, verbose)
    except typer.Exit:
        raise
    except Exception as e:
        _fail(e, verbose)


@app.command()
def tables(
    url: UrlOption = None,
    include: IncludeOption = None,
    exclude: ExcludeOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List the tables a dump would process."""
    try:
        settings = _build_settings(
            config, verbose, database_url=url, include=include, exclude=exclude
        )
        with _connect(settings) as adapter:
            selector = TableSelector(adapter, include=settings.include, exclude=settings.exclude)
            for name in selector.tables():
                typer.echo(name)
    except typer.Exit:
        raise
    except Exception as e:
        _fail(e, verbose)


if __name__ == "__main__":
    app()
