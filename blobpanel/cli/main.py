"""BlobPanel CLI - Main commands."""
import asyncio
import os
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

app = typer.Typer(
    name="blobpanel",
    help="Validated uploads and file management for blob storage",
    add_completion=False
)
console = Console()

SIGNING_SECRET_ENV = "BLOBPANEL_SIGNING_SECRET"


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def create_panel(signing_secret: Optional[str] = None):
    """Build a client from the environment."""
    from blobpanel import BlobPanel, BlobStoreConfig
    
    config = BlobStoreConfig.from_env()
    if not config.token:
        console.print(f"[red]Set {BlobStoreConfig.TOKEN_ENV} to use the blob store.[/red]")
        raise typer.Exit(1)
    return BlobPanel(config=config, signing_secret=signing_secret)


@app.command()
def upload(
    files: List[Path] = typer.Argument(..., help="Local files to upload", exists=True, dir_okay=False),
    folder: str = typer.Option(None, "--folder", "-f", help="Destination folder"),
    kind: str = typer.Option("auto", "--kind", "-k", help="auto, image or document"),
    target: str = typer.Option(None, "--target", "-t", help="Image target: profiles, platforms, receipts, blog"),
):
    """Upload one or more files."""
    from blobpanel import UploadRequest, ProgressTracker, BlobPanelError
    
    if kind not in ("auto", "image", "document"):
        console.print(f"[red]Unknown kind: {kind}[/red]")
        raise typer.Exit(1)
    
    async def do_upload():
        failures = 0
        async with create_panel() as panel:
            for file_path in files:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    BarColumn(),
                    TaskProgressColumn(),
                    console=console
                ) as progress:
                    task = progress.add_task(f"Uploading {file_path.name}", total=100)
                    tracker = ProgressTracker().on(
                        lambda value: progress.update(task, completed=value)
                    )
                    try:
                        request = await UploadRequest.from_path(file_path)
                        if kind == "image" or (kind == "auto" and target):
                            result = await panel.uploads.upload_image(
                                request, target=target, folder=folder, progress=tracker
                            )
                        elif kind == "document":
                            result = await panel.uploads.upload_document(
                                request, folder=folder, progress=tracker
                            )
                        else:
                            result = await panel.upload(request, folder=folder, progress=tracker)
                    except (BlobPanelError, OSError) as e:
                        failures += 1
                        console.print(f"[red]{file_path.name}: {e}[/red]")
                        continue
                    finally:
                        tracker.cancel_scheduled_reset()
                
                console.print(f"[green]Uploaded:[/green] {result.original_file_name}")
                console.print(f"URL: {result.remote_url}")
                console.print(f"Path: {result.stored_path}")
        if failures:
            raise typer.Exit(1)
    
    run_async(do_upload())


@app.command()
def ls(
    prefix: str = typer.Option(None, "--prefix", "-p", help="Only paths starting with this prefix"),
    long: bool = typer.Option(False, "-l", "--long", help="Long format with details"),
    search: str = typer.Option(None, "--search", "-s", help="Case-insensitive path filter"),
    category: str = typer.Option("all", "--category", "-c", help="image, video, audio, pdf, document, other or all"),
    limit: int = typer.Option(100, "--limit", "-n", help="Maximum number of blobs"),
):
    """List stored files."""
    from blobpanel import BlobPanelError
    from blobpanel.core.utils import filter_entries, format_file_size, content_category
    
    async def list_files():
        async with create_panel() as panel:
            try:
                entries = await panel.list_files(prefix=prefix, limit=limit)
                entries = filter_entries(entries, search=search, category=category)
            except (BlobPanelError, ValueError) as e:
                console.print(f"[red]{e}[/red]")
                raise typer.Exit(1)
            
            if not entries:
                console.print("[yellow]No files found[/yellow]")
                return
            
            if long:
                table = Table()
                table.add_column("Type", style="cyan")
                table.add_column("Size", justify="right")
                table.add_column("Uploaded")
                table.add_column("Path")
                table.add_column("URL", style="dim")
                
                for entry in entries:
                    table.add_row(
                        content_category(entry.content_type),
                        format_file_size(entry.size_bytes),
                        entry.uploaded_at.strftime("%Y-%m-%d %H:%M"),
                        entry.path,
                        entry.url
                    )
                
                console.print(table)
            else:
                for entry in entries:
                    console.print(entry.path)
    
    run_async(list_files())


@app.command()
def rm(
    urls: List[str] = typer.Argument(..., help="URLs of the blobs to delete"),
    force: bool = typer.Option(False, "-f", "--force", help="Force delete without confirmation"),
):
    """Delete one or more files."""
    from blobpanel import BlobPanelError
    
    if not force:
        confirm = typer.confirm(f"Delete {len(urls)} file(s)?")
        if not confirm:
            raise typer.Abort()
    
    async def do_rm():
        async with create_panel() as panel:
            try:
                count = await panel.delete_many(urls)
            except BlobPanelError as e:
                console.print(f"[red]Delete failed: {e}[/red]")
                raise typer.Exit(1)
            console.print(f"[green]Deleted {count} file(s)[/green]")
    
    run_async(do_rm())


@app.command()
def info(
    url: str = typer.Argument(..., help="Blob URL"),
):
    """Show file metadata."""
    from blobpanel import BlobNotFoundError, BlobPanelError
    from blobpanel.core.utils import format_file_size
    
    async def show_info():
        async with create_panel() as panel:
            try:
                entry = await panel.info(url)
            except BlobNotFoundError:
                console.print(f"[red]Not found: {url}[/red]")
                raise typer.Exit(1)
            except BlobPanelError as e:
                console.print(f"[red]{e}[/red]")
                raise typer.Exit(1)
            
            console.print(f"[bold]Name:[/bold] {entry.name}")
            console.print(f"[bold]Path:[/bold] {entry.path}")
            console.print(f"[bold]URL:[/bold] {entry.url}")
            console.print(f"[bold]Size:[/bold] {format_file_size(entry.size_bytes)} ({entry.size_bytes:,} bytes)")
            console.print(f"[bold]Type:[/bold] {entry.content_type or 'unknown'}")
            console.print(f"[bold]Uploaded:[/bold] {entry.uploaded_at.isoformat()}")
    
    run_async(show_info())


@app.command()
def sign(
    path: str = typer.Argument(..., help="Blob path or URL to sign"),
    expires: int = typer.Option(3600, "--expires", "-e", help="Lifetime in seconds"),
    secret: str = typer.Option(None, "--secret", help=f"Signing secret (default: ${SIGNING_SECRET_ENV})"),
):
    """Print an expiring signed URL."""
    from blobpanel import UrlSigner
    
    secret = secret or os.environ.get(SIGNING_SECRET_ENV)
    if not secret:
        console.print(f"[red]Pass --secret or set {SIGNING_SECRET_ENV}.[/red]")
        raise typer.Exit(1)
    try:
        console.print(UrlSigner(secret).sign(path, expires_in=expires), soft_wrap=True)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
