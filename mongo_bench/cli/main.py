r"""
Command-line interface for mongo-bench.

    mongo-bench run queries/sample_queries.json -d shop -n 20
    mongo-bench run queries.json --dry-run
    mongo-bench check -u mongodb://localhost:27017
"""

import logging
from pathlib import Path
from typing import Annotated

import typer

from mongo_bench.adapters import AdapterRegistry
from mongo_bench.config import DEFAULT_ADAPTER
from mongo_bench.exceptions import DatabaseConnectionError, LoadError
from mongo_bench.queries import load_definitions
from mongo_bench.reporting import CsvExporter, JsonExporter, ResultCollector, TextExporter, render_report
from mongo_bench.runner import BenchmarkRunner, RunnerConfig

__all__ = ["app", "main"]

EXPORTERS = {
    "text": TextExporter,
    "json": JsonExporter,
    "csv": CsvExporter,
}

app = typer.Typer(
    name="mongo-bench",
    help="Latency benchmark for predefined MongoDB queries.",
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _runner_config(**overrides) -> RunnerConfig:
    try:
        return RunnerConfig.from_env(**overrides)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def run(
    queries_file: Annotated[Path, typer.Argument(help="JSON file with query definitions")],
    uri: Annotated[str | None, typer.Option("-u", "--uri", help="MongoDB connection URI")] = None,
    database: Annotated[str | None, typer.Option("-d", "--database", help="Database name")] = None,
    iterations: Annotated[
        int | None, typer.Option("-n", "--iterations", min=1, help="Iterations per query")
    ] = None,
    connect_timeout: Annotated[
        float | None, typer.Option("--connect-timeout", help="Connect/ping deadline in seconds")
    ] = None,
    average_over_successful: Annotated[
        bool,
        typer.Option(
            "--average-over-successful",
            help="Average over successful iterations instead of the configured count",
        ),
    ] = False,
    adapter: Annotated[str, typer.Option("-a", "--adapter", help="Database adapter")] = DEFAULT_ADAPTER,
    format_: Annotated[
        str | None, typer.Option("-f", "--format", help="Also export files: text, json, csv, all")
    ] = None,
    output: Annotated[Path, typer.Option("-o", "--output", help="Output directory for exports")] = Path("./results"),
    dry_run: Annotated[bool, typer.Option("--dry-run", help="List queries without running them")] = False,
    verbose: Annotated[bool, typer.Option("-v", "--verbose", help="Verbose output")] = False,
) -> None:
    """Run query benchmarks and print the results."""
    _configure_logging(verbose)

    try:
        definitions = load_definitions(queries_file)
    except LoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if dry_run:
        typer.echo(f"[DRY RUN] {len(definitions)} queries in {queries_file}:")
        for definition in definitions:
            typer.echo(f"  {definition.name} ({definition.kind.name.lower()}) on {definition.collection}")
        return

    config = _runner_config(
        uri=uri,
        database=database,
        iterations=iterations,
        connect_timeout_seconds=connect_timeout,
        average_over_successful=average_over_successful,
        adapter=adapter,
    )

    try:
        runner = BenchmarkRunner.open(config)
    except (DatabaseConnectionError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if verbose:
        runner.set_progress_callback(lambda name, status: typer.echo(f"  [{name}] {status}", err=True))

    collector = ResultCollector()
    collector.start_session(
        database=config.database,
        iterations=config.iterations,
        definitions_path=str(queries_file),
    )

    close_error: DatabaseConnectionError | None = None
    try:
        collector.add_results(runner.run(definitions))
    finally:
        collector.end_session()
        try:
            runner.close()
        except DatabaseConnectionError as e:
            close_error = e

    typer.echo("")
    typer.echo(render_report(collector.results))

    if format_:
        formats = [f.strip() for f in format_.split(",")]
        if "all" in formats:
            formats = list(EXPORTERS)

        output.mkdir(parents=True, exist_ok=True)
        session_id = collector.session.session_id
        for fmt in formats:
            exporter_cls = EXPORTERS.get(fmt)
            if exporter_cls is None:
                typer.echo(f"Unknown format: {fmt}", err=True)
                continue
            exporter = exporter_cls()
            path = output / f"{session_id}{exporter.extension}"
            exporter.export(collector, path)
            typer.echo(f"Exported {fmt}: {path}", err=True)

    if close_error is not None:
        typer.echo(f"Error: {close_error}", err=True)
        raise typer.Exit(1)


@app.command()
def check(
    uri: Annotated[str | None, typer.Option("-u", "--uri", help="MongoDB connection URI")] = None,
    database: Annotated[str | None, typer.Option("-d", "--database", help="Database name")] = None,
    adapter: Annotated[str, typer.Option("-a", "--adapter", help="Database adapter")] = DEFAULT_ADAPTER,
) -> None:
    """Connect, ping and disconnect."""
    config = _runner_config(uri=uri, database=database, adapter=adapter)

    try:
        runner = BenchmarkRunner.open(config)
    except (DatabaseConnectionError, ValueError) as e:
        typer.echo(f"Failed to connect: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Successfully connected to {runner.adapter.name} (version: {runner.adapter.version})")

    try:
        runner.close()
    except DatabaseConnectionError as e:
        typer.echo(f"Failed to disconnect: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def adapters() -> None:
    """List registered database adapters."""
    typer.echo("Available adapters:")
    for adapter_name in AdapterRegistry.list():
        typer.echo(f"  - {adapter_name}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
