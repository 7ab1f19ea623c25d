import os
from pathlib import Path

import click

from photoalbum import consistency
from photoalbum.db import JsonFileStore
from photoalbum.errors import StoreUnavailable
from photoalbum.utils.config import settings


@click.group()
@click.option("--db", "db_path", type=click.Path(path_type=Path, dir_okay=False),
              default=None, help="Store document (defaults to DB_PATH).")
@click.pass_context
def cli(ctx: click.Context, db_path: Path | None) -> None:
    ctx.obj = JsonFileStore(db_path or settings.DB_PATH)


@cli.command(name="init-db")
@click.pass_obj
def init_db(store: JsonFileStore) -> None:
    """Create an empty store document if none exists."""
    if store.initialize():
        click.echo(f"created {store.path}")
    else:
        click.echo(f"{store.path} already exists")


@cli.command(name="check")
@click.option("--repair", is_flag=True, help="Rewrite one-sided album/photo links.")
@click.pass_obj
def check(store: JsonFileStore, repair: bool) -> None:
    """Report album/photo links that are missing their reverse side."""
    try:
        if repair:
            with store.transaction() as document:
                fixed = consistency.repair(document)
            click.echo(f"repaired {fixed} link(s)")
            return
        violations = consistency.find_violations(store.read())
    except StoreUnavailable as exc:
        raise click.ClickException(exc.message) from exc

    for kind, album_id, photo_id in violations:
        if kind == "album":
            click.echo(f"album {album_id} lists photo {photo_id} without a back-reference")
        else:
            click.echo(f"photo {photo_id} lists album {album_id} without a forward reference")
    if violations:
        click.get_current_context().exit(1)
    click.echo("ok")


@cli.command(name="serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8000, show_default=True)
@click.option("--reload", is_flag=True)
@click.pass_obj
def serve(store: JsonFileStore, host: str, port: int, reload: bool) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    # reload workers re-read the environment, this process reads settings
    os.environ["DB_PATH"] = str(store.path)
    settings.DB_PATH = str(store.path)

    uvicorn.run("photoalbum.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
