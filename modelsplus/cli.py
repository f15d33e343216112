"""Command line entry points: offline snapshot generation and serving."""

from __future__ import annotations

import click
import uvicorn

from modelsplus.catalog.loader import (
    SnapshotLoadError,
    load_source_snapshot,
    write_snapshot_files,
)


@click.group()
def main() -> None:
    """modelsplus: query the models.dev catalog over HTTP and MCP."""


@main.command()
@click.option(
    "--source",
    "source_dir",
    required=True,
    type=click.Path(exists=True, file_okay=False),
    help="models.dev checkout containing providers/<id>/provider.toml",
)
@click.option(
    "--out",
    "out_dir",
    default="./data",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Directory to write models.json and providers.json into",
)
def generate(source_dir: str, out_dir: str) -> None:
    """Build the JSON snapshot served by the API."""
    try:
        snapshot = load_source_snapshot(source_dir)
    except SnapshotLoadError as exc:
        raise click.ClickException(str(exc)) from exc
    write_snapshot_files(out_dir, snapshot)
    click.echo(
        f"Wrote {len(snapshot.models)} models and {len(snapshot.providers)} providers to {out_dir}"
    )


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8788, show_default=True, type=int)
@click.option("--reload", is_flag=True, help="Restart on code changes (development).")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the HTTP and MCP server."""
    uvicorn.run(
        "modelsplus.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    main()
