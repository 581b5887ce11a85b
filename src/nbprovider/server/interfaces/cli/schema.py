import click

from nbprovider.server.interfaces.cli.utils import output_result
from nbprovider.server.provider import NetboxProvider


@click.command(name="schema")
@click.option("--json-output", is_flag=True, help="Output in JSON format")
def schema(json_output: bool) -> None:
    """Show the attributes of the provider configuration block."""
    provider = NetboxProvider()
    provider_schema = provider.schema()

    if json_output:
        output_result(
            {"type_name": provider.metadata(), **provider_schema.model_dump(mode="json")},
            json_output,
        )
        return

    lines = [click.style(f'provider "{provider.metadata()}"', fg="cyan", bold=True)]
    for attribute in provider_schema.attributes:
        flags = ["optional" if attribute.optional else "required"]
        if attribute.sensitive:
            flags.append("sensitive")
        line = f"  {click.style(attribute.name, bold=True)} ({attribute.type}, {', '.join(flags)})"
        if attribute.env_var:
            line += f" [env: {attribute.env_var}]"
        lines.append(line)
        lines.append(f"      {attribute.description}")
    output_result(lines)
