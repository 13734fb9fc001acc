"""
Main CLI application
"""
import typer
from pathlib import Path
from typing import Optional

from rich.markup import escape
from rich.progress import Progress, BarColumn, TextColumn, TransferSpeedColumn
from rich.table import Table

from ...backends import create_client
from ...core.config import BenchConfig
from ...core.constants import (
    EXIT_CONNECTION_ERROR,
    EXIT_INVALID_ARGUMENT,
    EXIT_TRANSFER_ERROR,
    EXIT_UNEXPECTED,
)
from ...core.exceptions import InvalidArgument, ConnectionError, TransferError
from ...core.logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from ...domain.benchmark import BenchmarkService
from ...domain.upload import RunSummary, TransferMetrics
from ..config import ConfigLoader

logger = get_logger(__name__)
stdout_console = get_stdout_console()
stderr_console = get_stderr_console()

app = typer.Typer(
    name="sftpbench",
    add_completion=False,
    help="Upload a directory over SFTP and report per-file throughput",
    rich_markup_mode="rich",
)


@app.command()
def main(
    host: Optional[str] = typer.Option(
        None, "--host", help="Hostname or IP address to connect to"
    ),
    port: Optional[int] = typer.Option(
        None, "--port", help="SSH port (default: 22)"
    ),
    user: Optional[str] = typer.Option(
        None, "--user", help="Username"
    ),
    password: Optional[str] = typer.Option(
        None, "--password", help="Password for the user"
    ),
    localdir: Optional[str] = typer.Option(
        None, "--localdir", help="Local directory whose files are uploaded"
    ),
    remotedir: Optional[str] = typer.Option(
        None, "--remotedir", help="Remote directory to upload into (default: login directory)"
    ),
    client: Optional[str] = typer.Option(
        None, "--client", help="Client library to use: paramiko or asyncssh"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Connect/auth timeout in seconds (default: 4)"
    ),
    chunk_size: Optional[int] = typer.Option(
        None, "--chunk-size", help="Write size in bytes for chunked clients (default: 32768)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help="TOML file with default option values"
    ),
    progress: bool = typer.Option(
        True, "--progress/--no-progress", help="Show a progress bar on terminals"
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level", "-l", help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Log file path"
    ),
):
    """
    Upload every file of a local directory to an SFTP server and time each upload.

    Examples:
        sftpbench --host example.org --user bob --password secret --localdir ./data --client paramiko
        sftpbench --config bench.toml --client asyncssh --remotedir /incoming
    """
    setup_logging(level=log_level, log_file=log_file)

    cli_values = {
        "host": host,
        "port": port,
        "user": user,
        "password": password,
        "localdir": localdir,
        "remotedir": remotedir,
        "client": client,
        "timeout": timeout,
        "chunk_size": chunk_size,
    }

    try:
        config = ConfigLoader().load(cli_values, config_file)
        _print_config(config)
        summary = _run(config, show_progress=progress and stdout_console.is_terminal)
    except InvalidArgument as e:
        stderr_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_INVALID_ARGUMENT)
    except ConnectionError as e:
        stderr_console.print(f"[red]Connection error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_CONNECTION_ERROR)
    except TransferError as e:
        stderr_console.print(f"[red]Transfer error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_TRANSFER_ERROR)
    except Exception as e:
        logger.exception("Benchmark failed")
        stderr_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(EXIT_UNEXPECTED)

    _print_summary(summary)


def _run(config: BenchConfig, show_progress: bool) -> RunSummary:
    service = BenchmarkService(client_factory=create_client)

    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        TransferSpeedColumn(),
        console=stdout_console,
        disable=not show_progress,
        transient=True,
    ) as bar:
        task = None

        def on_connecting(cfg: BenchConfig) -> None:
            stdout_console.print(f"Connecting to {escape(cfg.address)} with {cfg.backend.value}...")

        def on_connected(cfg: BenchConfig) -> None:
            stdout_console.print("[green]Logged in[/green]")

        def on_start(local_file: Path, remote_path: str) -> None:
            nonlocal task
            stdout_console.print(f"Creating [cyan]{escape(remote_path)}[/cyan] on SFTP server")
            if show_progress:
                task = bar.add_task(escape(local_file.name), total=local_file.stat().st_size)

        def on_progress(sent: int, total: int) -> None:
            if task is not None:
                bar.update(task, completed=sent, total=total)

        def on_complete(metrics: TransferMetrics) -> None:
            nonlocal task
            if task is not None:
                bar.remove_task(task)
                task = None
            stdout_console.print(
                f"Sent {metrics.bytes_transferred} bytes in "
                f"{metrics.elapsed_seconds:.3f} secs at {metrics.throughput_kbps:.2f} KB/sec"
            )

        return service.run(
            config,
            on_connecting=on_connecting,
            on_connected=on_connected,
            on_start=on_start,
            on_complete=on_complete,
            progress_callback=on_progress,
        )


def _print_config(config: BenchConfig) -> None:
    table = Table(title="Arguments", show_header=True, header_style="bold cyan")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="green")
    for key, value in config.describe().items():
        table.add_row(key, escape(str(value)))
    stdout_console.print(table)


def _print_summary(summary: RunSummary) -> None:
    if not summary.files:
        stdout_console.print("[yellow]No files to upload[/yellow]")
        return

    table = Table(title="Upload Summary", show_header=True, header_style="bold cyan")
    table.add_column("File", style="cyan")
    table.add_column("Remote Path", style="blue")
    table.add_column("Bytes", justify="right")
    table.add_column("Seconds", justify="right")
    table.add_column("KB/sec", justify="right", style="green")

    for m in summary.transfers:
        table.add_row(
            escape(m.name),
            escape(m.remote_path),
            str(m.bytes_transferred),
            f"{m.elapsed_seconds:.3f}",
            f"{m.throughput_kbps:.2f}",
        )
    table.add_row(
        "[bold]Total[/bold]",
        "",
        str(summary.total_bytes),
        f"{summary.total_seconds:.3f}",
        f"{summary.throughput_kbps:.2f}",
    )
    stdout_console.print(table)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
