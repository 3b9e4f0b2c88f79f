"""CLI entry point for Castpress."""

import asyncio
import sys
from pathlib import Path
from typing import Any

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TextColumn,
    TransferSpeedColumn,
)
from rich.table import Table

from castpress.catalog.store import EpisodeStore
from castpress.config.logging import setup_logging
from castpress.config.manager import episode_dir_for, load_channel_config
from castpress.pipeline import CreateEpisodeOptions, PublishingOrchestrator
from castpress.publish import ArtifactPublisher
from castpress.utils.datetime import parse_release_date
from castpress.utils.errors import CastpressError

app = typer.Typer(
    name="castpress",
    help="Publish podcast episodes and feeds to object storage",
    no_args_is_help=True,
)
console = Console()


def _orchestrator(ctx: typer.Context) -> PublishingOrchestrator:
    """Build the orchestrator for the channel file given to the callback."""
    channel_file: Path = ctx.obj["channel_file"]
    config = load_channel_config(channel_file)
    return PublishingOrchestrator(
        config,
        EpisodeStore(episode_dir_for(channel_file)),
        ArtifactPublisher.for_region(config.publishing.region),
    )


def _upload_progress() -> Progress:
    return Progress(
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
        console=console,
        transient=True,
    )


def _fail(error: Exception) -> None:
    console.print(f"[red]✗[/red] Error: {error}")
    sys.exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    channel_file: Path = typer.Option(
        Path("channel.yaml"),
        "--channel-file",
        "-c",
        envvar="CASTPRESS_CHANNEL_FILE",
        help="Path to channel.yaml; episode records live in episodes/ beside it",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose (DEBUG) logging"
    ),
    log_file: Path | None = typer.Option(
        None, "--log-file", help="Write logs to file"
    ),
) -> None:
    """Castpress - publish podcast episodes and feeds."""
    load_dotenv()
    setup_logging(verbose=verbose, log_file=log_file)
    ctx.obj = {"channel_file": channel_file}


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from castpress import __version__

    console.print(f"[bold cyan]Castpress[/bold cyan] v{__version__}")


@app.command("upload-episode-recording")
def upload_episode_recording(
    ctx: typer.Context,
    file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="mp3 file for the episode"
    ),
    name: str = typer.Option(..., "--name", "-n", help="Publish name of the recording"),
) -> None:
    """Upload an mp3 to object storage.

    Examples:
        castpress -c show/channel.yaml upload-episode-recording ep1.mp3 --name 2024-05-01
    """

    async def run_upload() -> None:
        try:
            orchestrator = _orchestrator(ctx)

            with _upload_progress() as progress:
                task = progress.add_task(file.name, total=file.stat().st_size)
                result = await orchestrator.upload_recording(
                    file,
                    name,
                    progress_callback=lambda sent: progress.update(task, completed=sent),
                )

            console.print(f"[green]✓[/green] Uploaded file {result.url}")

        except KeyboardInterrupt:
            console.print("\n[yellow]Cancelled by user[/yellow]")
            sys.exit(130)
        except CastpressError as e:
            _fail(e)

    asyncio.run(run_upload())


@app.command("create-episode")
def create_episode(
    ctx: typer.Context,
    file: Path = typer.Argument(
        ..., exists=True, dir_okay=False, help="mp3 file for the episode"
    ),
    name: str = typer.Option(..., "--name", "-n", help="Episode title"),
    release_date: str | None = typer.Option(
        None,
        "--release-date",
        "-r",
        help="ISO 8601 release date, e.g. 2024-05-01 (default: now)",
    ),
    publish_name: str | None = typer.Option(
        None,
        "--publish-name",
        "-p",
        help="Name for the artifact and record file (default: slug of the title)",
    ),
) -> None:
    """Upload a recording and add it to the catalog as a new episode.

    Examples:
        castpress -c show/channel.yaml create-episode ep1.mp3 --name "Pilot"

        castpress create-episode ep2.mp3 -n "Second" -r 2024-05-08 -p 2024-05-08
    """

    async def run_create() -> None:
        try:
            released_at = parse_release_date(release_date) if release_date else None
            orchestrator = _orchestrator(ctx)
            options = CreateEpisodeOptions(
                file=file,
                title=name,
                released_at=released_at,
                publish_name=publish_name,
            )

            with _upload_progress() as progress:
                task = progress.add_task(file.name, total=None)

                def handle_step(step: str, data: dict[str, Any]) -> None:
                    if step == "probe_complete":
                        progress.console.print(
                            f"[green]✓[/green] Probed audio: {data['duration_seconds']}s, "
                            f"{data['size_bytes']} bytes"
                        )
                    elif step == "upload_start":
                        progress.update(task, total=data["size_bytes"])
                    elif step == "upload_complete":
                        progress.console.print(f"[green]✓[/green] Uploaded {data['url']}")

                result = await orchestrator.create_episode(
                    options,
                    progress_callback=lambda sent: progress.update(task, completed=sent),
                    step_callback=handle_step,
                )

            episode = result.episode
            table = Table(show_header=False, box=None, padding=(0, 2))
            table.add_column("Key", style="dim")
            table.add_column("Value", style="white")
            table.add_row("Episode:", episode.title)
            table.add_row("Season:", str(episode.season))
            table.add_row("Number:", str(episode.episode_number))
            table.add_row("Duration:", f"{episode.media.duration}s")
            table.add_row("Media:", episode.media.url)
            table.add_row("Record:", str(result.record_path))

            console.print("\n[bold green]✓ Episode created[/bold green]")
            console.print(table)
            console.print("[dim]Edit the record to fill in description, summary and link.[/dim]")

        except KeyboardInterrupt:
            console.print("\n[yellow]Cancelled by user[/yellow]")
            sys.exit(130)
        except CastpressError as e:
            _fail(e)

    asyncio.run(run_create())


@app.command("render-channel-xml")
def render_channel_xml(
    ctx: typer.Context,
    upload: bool = typer.Option(
        False, "--upload", "-u", help="Upload the feed instead of printing it"
    ),
) -> None:
    """Render the podcast feed, or publish it with --upload.

    Examples:
        castpress -c show/channel.yaml render-channel-xml

        castpress -c show/channel.yaml render-channel-xml --upload
    """

    async def run_render() -> None:
        try:
            orchestrator = _orchestrator(ctx)

            if not upload:
                result = await orchestrator.render_feed()
                # Plain stdout so the document can be piped
                typer.echo(result.document)
                return

            with _upload_progress() as progress:
                task = progress.add_task("podcast.xml", total=None)
                result = await orchestrator.render_feed(
                    upload=True,
                    progress_callback=lambda sent: progress.update(task, completed=sent),
                )

            if result.upload is None:
                raise CastpressError("Feed was rendered but not uploaded")
            console.print(
                f"[green]✓[/green] Published feed with {result.episode_count} episode(s)"
            )
            console.print(f"Podcast URL: {result.upload.url}")

        except KeyboardInterrupt:
            console.print("\n[yellow]Cancelled by user[/yellow]")
            sys.exit(130)
        except CastpressError as e:
            _fail(e)

    asyncio.run(run_render())


if __name__ == "__main__":
    app()
