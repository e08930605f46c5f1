"""Command line entry point: `devserve serve`."""

import click

from devserve import __version__
from devserve.config import APP_DIR, DEFAULT_DEBOUNCE_MS, DEFAULT_HOST
from devserve.errors import DevServeError
from devserve.log import configure_logging
from devserve.serve import DevTask


@click.group()
@click.version_option(version=__version__, prog_name="devserve")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging, including every file change.")
@click.pass_context
def cli(ctx, verbose):
    """devserve - static dev server with browser live reload."""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


@cli.command()
@click.option("--root", default=APP_DIR, show_default=True, help="Application folder to serve and watch.")
@click.option("--host", default=DEFAULT_HOST, show_default=True, help="Bind address.")
@click.option("--port", default=None, type=int, help="Listen port. [default: first free from 3000]")
@click.option(
    "--debounce",
    default=DEFAULT_DEBOUNCE_MS,
    show_default=True,
    type=click.IntRange(min=0),
    help="Milliseconds to group rapid file changes.",
)
@click.pass_obj
def serve(obj, root, host, port, debounce):
    """Serve the app folder and reload browsers when *.html, styles/**/*.css or scripts/**/*.js change."""
    configure_logging(verbose=obj.get('verbose', False))
    task = DevTask.for_app(root=root, host=host, port=port, debounce=debounce)
    try:
        task.run()
    except DevServeError as e:
        click.echo("Error: %s" % e, err=True)
        raise SystemExit(1)
