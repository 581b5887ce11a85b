import sys
from pathlib import Path

import click

from nbprovider.sdk.config import EnvironmentOverrides, load_raw_config
from nbprovider.sdk.errors import ConfigFileError
from nbprovider.server.interfaces.cli.utils import (
    configure_logging,
    format_diagnostics,
    output_error,
    output_result,
)
from nbprovider.server.provider import NetboxProvider


@click.command(name="check")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="YAML file with a `netbox:` provider block",
)
@click.option("--json-output", is_flag=True, help="Output in JSON format")
@click.option("--debug", is_flag=True, help="Show detailed debug information")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write logs to this file (rotated at 10MB)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Log level (default: WARNING; --debug forces DEBUG)",
)
def check(
    config_path: Path,
    json_output: bool,
    debug: bool,
    log_file: Path | None,
    log_level: str | None,
) -> None:
    """Resolve the provider configuration and bootstrap the API client.

    Reports every configuration problem at once. No request is sent to the
    NetBox server. Exits with status 1 when any error is reported.

    \b
    Examples:
        nbprovider check --config provider.yml
        NETBOX_API_TOKEN=... nbprovider check --config provider.yml --json-output
        nbprovider check --config provider.yml --log-file logs/nbprovider.log --log-level INFO
    """
    configure_logging(debug=debug, log_file=log_file, log_level=log_level)
    env = EnvironmentOverrides.from_environ()

    try:
        raw, diagnostics = load_raw_config(config_path, env)
    except ConfigFileError as e:
        output_error(e, json_output, debug)
        return

    client = None
    if raw is not None:
        response = NetboxProvider().configure(raw, env)
        diagnostics.extend(response.diagnostics)
        client = response.resource_data

    try:
        if json_output:
            output_result(
                {
                    "valid": not diagnostics.has_error(),
                    "base_url": client.base_url if client else None,
                    "diagnostics": diagnostics.to_list(),
                },
                json_output,
                debug,
            )
        else:
            if diagnostics:
                click.echo(format_diagnostics(diagnostics))
            if client is not None:
                click.echo(
                    f"{click.style('✅ Configuration is valid', fg='green', bold=True)} "
                    f"({client.base_url})"
                )
            else:
                click.echo(click.style("❌ Configuration is invalid", fg="red", bold=True))
    finally:
        if client is not None:
            client.close()

    if diagnostics.has_error():
        sys.exit(1)
