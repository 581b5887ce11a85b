import click

from nbprovider.sdk.core.version import PACKAGE_NAME, PACKAGE_VERSION
from nbprovider.server.interfaces.cli.check import check
from nbprovider.server.interfaces.cli.schema import schema


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """NetBox provider CLI"""
    if ctx.invoked_subcommand is None:
        # Show help when no subcommand is provided
        click.echo(ctx.get_help())


@cli.command(name="version")
def version() -> None:
    """Show the package version."""
    click.echo(f"{PACKAGE_NAME} {PACKAGE_VERSION}")


cli.add_command(check)
cli.add_command(schema)


if __name__ == "__main__":
    cli()
