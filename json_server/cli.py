import click
from flask import current_app

from .extensions import get_store


def resource_urls(names, port: int) -> list[str]:
    base_url = f"http://localhost:{port}"
    return [f"{base_url}/{name}" for name in names]


def register_commands(app):
    @app.cli.command("resources")
    @click.option("--port", type=int, default=None, help="Port shown in the URLs (defaults to PORT).")
    def resources_command(port):
        """List the resources served from the backing document."""
        if port is None:
            port = current_app.config["PORT"]
        click.echo("Resources available")
        click.echo("-" * 71)
        for url in resource_urls(get_store().names(), port):
            click.echo(url)
