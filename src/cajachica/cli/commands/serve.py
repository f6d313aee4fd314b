"""Run the HTTP API."""

import click
import uvicorn

from cajachica.cli.context import get_db


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8000, show_default=True)
@click.pass_context
def serve(ctx, host: str, port: int):
    """Serve the HTTP API with uvicorn.

    Requests are authenticated by the signed session cookie; the database is
    the one selected with --db-path / CAJACHICA_DATABASE_URL.
    """
    from cajachica.web.app import create_app

    app = create_app(db=get_db(ctx), settings=ctx.obj["settings"])
    uvicorn.run(app, host=host, port=port, log_config=None)


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
