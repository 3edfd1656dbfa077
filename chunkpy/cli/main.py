"""chunkpy CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from chunkpy.core.upload.models import DEFAULT_CHUNK_SIZE

app = typer.Typer(
    name="chunkpy",
    help="Chunked batch upload CLI",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def format_size(size: int) -> str:
    """Human readable byte size."""
    for unit in ("B", "KB", "MB", "GB"):
        if size < 1024 or unit == "GB":
            return f"{size:.1f} {unit}" if unit != "B" else f"{size} B"
        size /= 1024


def build_transport_config(url: str, timeout: float, insecure: bool = False):
    """Transport config from CLI options. The timeout bounds the request and each socket read."""
    from chunkpy.core.api import TransportConfig, TimeoutConfig

    config_kwargs = {'base_url': url, 'timeout': TimeoutConfig(total=timeout, sock_read=timeout)}
    return TransportConfig.insecure(**config_kwargs) if insecure else TransportConfig(**config_kwargs)


@app.command()
def upload(
    files: List[Path] = typer.Argument(..., help="Local files to upload", exists=True, dir_okay=False),
    url: str = typer.Option("http://127.0.0.1:8000", "--url", "-u", help="Upload server base URL"),
    chunk_size: int = typer.Option(DEFAULT_CHUNK_SIZE, "--chunk-size", "-c", help="Chunk size in bytes"),
    timeout: float = typer.Option(300.0, "--timeout", "-t", help="Per-request timeout in seconds (total and socket read)"),
    insecure: bool = typer.Option(False, "--insecure", help="Disable SSL verification"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
):
    """Upload files in chunks and combine them on the server."""
    from chunkpy import UploadClient, setup_logging
    from chunkpy.core.exceptions import ChunkPyError, ChunkTransmissionError
    from chunkpy.core.upload import BatchStatus, UploadConfig

    if verbose:
        logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s %(message)s")
        setup_logging(logging.DEBUG)

    try:
        upload_config = UploadConfig(chunk_size=chunk_size)
    except ChunkPyError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    config = build_transport_config(url, timeout, insecure)

    async def do_upload():
        async with UploadClient(config, upload_config=upload_config) as client:
            client.add_files(*files)

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {len(files)} file(s)", total=100)

                def on_progress(p):
                    progress.update(
                        task,
                        completed=p.percentage,
                        description=f"{p.file_name} ({p.acknowledged}/{p.total_chunks})"
                    )

                try:
                    result = await client.upload(progress_callback=on_progress)
                except ChunkTransmissionError as e:
                    console.print(f"[red]Upload aborted:[/red] {e}")
                    console.print("[yellow]Remaining files were not attempted.[/yellow]")
                    raise typer.Exit(1)
                except ChunkPyError as e:
                    console.print(f"[red]Upload failed: {e}[/red]")
                    raise typer.Exit(1)

        for outcome in result.outcomes:
            if outcome.succeeded:
                console.print(f"[green]Uploaded:[/green] {outcome.name} -> {outcome.url}")
            else:
                console.print(f"[red]Combine failed:[/red] {outcome.name} ({outcome.error})")

        if result.status is BatchStatus.COMPLETED:
            console.print(f"[green]All {result.total_files} files uploaded and combined successfully![/green]")
        elif result.status is BatchStatus.PARTIAL:
            console.print(
                f"[yellow]{len(result.completed)} of {result.total_files} files combined; "
                f"{len(result.combine_failures)} failed.[/yellow]"
            )
            raise typer.Exit(1)

    run_async(do_upload())


@app.command()
def plan(
    files: List[Path] = typer.Argument(..., help="Local files to inspect", exists=True, dir_okay=False),
    chunk_size: int = typer.Option(DEFAULT_CHUNK_SIZE, "--chunk-size", "-c", help="Chunk size in bytes"),
):
    """Show how files would be split, without uploading."""
    from chunkpy.core.exceptions import SplitError
    from chunkpy.core.upload import split

    for file_path in files:
        size = file_path.stat().st_size
        try:
            chunks = split(size, chunk_size)
        except SplitError as e:
            console.print(f"[red]{e}[/red]")
            raise typer.Exit(2)

        console.print(f"[bold]{file_path.name}[/bold] ({format_size(size)}, {len(chunks)} chunks)")
        table = Table()
        table.add_column("Index", justify="right")
        table.add_column("Offset", justify="right")
        table.add_column("Length", justify="right")
        for chunk in chunks:
            table.add_row(str(chunk.index), str(chunk.offset), str(chunk.length))
        console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
