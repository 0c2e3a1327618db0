"""CLI entry point for the string table code generator."""

from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config import DEFAULT_CONFIG_FILE, GeneratorConfig, load_config
from .core import GenerationResult, GenerationService, write_outputs
from .emit import get_profile, list_profiles
from .emit.profiles import PROFILES
from .errors import StringsGenError
from .naming import derive_signatures
from .strings import available_formats, load_table
from .utils.logging import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option('--log-level', default=None, help='Logging level (DEBUG, INFO, WARNING, ERROR)')
def cli(log_level: Optional[str]):
    """Generate typed accessors for localization string tables."""
    setup_logging(log_level)


@cli.command()
@click.argument('inputs', nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--profile', '-p', required=True, type=click.Choice(list(PROFILES)),
              help='Target language emission profile')
@click.option('--output', '-o', type=click.Path(path_type=Path),
              help='Output file, or directory for several tables (default: stdout)')
@click.option('--param', 'params', multiple=True, metavar='KEY=VALUE',
              help='Template parameter, may be repeated')
@click.option('--template-path', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Custom Jinja2 template replacing the profile template')
@click.option('--string-as-object', is_flag=True,
              help='Type string placeholders like object placeholders')
@click.option('--separator', default='.', help='Key segment separator')
@click.option('--format', 'input_format', type=click.Choice(available_formats()),
              help='Table format (default: from file extension)')
@click.option('--jobs', '-j', default=1, type=click.IntRange(min=1),
              help='Number of tables generated in parallel')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def generate(
    inputs: tuple[Path, ...],
    profile: str,
    output: Optional[Path],
    params: tuple[str, ...],
    template_path: Optional[Path],
    string_as_object: bool,
    separator: str,
    input_format: Optional[str],
    jobs: int,
    verbose: bool
):
    """Generate accessors for one or more string tables.

    INPUTS are table files (.strings, .json, .yml, .yaml, .properties).
    """
    try:
        config = GeneratorConfig(
            separator=separator,
            jobs=jobs,
            string_as_object=string_as_object,
            input_format=input_format
        )
        emission_profile = get_profile(profile).with_options(
            params=_parse_params(params),
            template_path=template_path
        )
    except StringsGenError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        raise SystemExit(1)

    result = _run(inputs, emission_profile, config, output, verbose)
    if not result.ok:
        raise SystemExit(1)


@cli.command()
@click.option('--config', '-c', 'config_path', default=DEFAULT_CONFIG_FILE,
              type=click.Path(path_type=Path), help='Configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
def run(config_path: Path, verbose: bool):
    """Run every output listed in a configuration file."""
    try:
        run_config = load_config(config_path)
        if run_config.generator.log_level:
            setup_logging(run_config.generator.log_level)
        profiles = [(out, out.build_profile()) for out in run_config.outputs]
    except StringsGenError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        raise SystemExit(1)

    failed = False
    for output_config, emission_profile in profiles:
        click.echo(f"{emission_profile.name} -> {output_config.output}")
        result = _run(
            run_config.inputs,
            emission_profile,
            run_config.generator,
            output_config.output,
            verbose
        )
        failed = failed or not result.ok

    if failed:
        raise SystemExit(1)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--separator', default='.', help='Key segment separator')
@click.option('--format', 'input_format', type=click.Choice(available_formats()),
              help='Table format (default: from file extension)')
def parse(file: Path, separator: str, input_format: Optional[str]):
    """Parse a table and display its entries and accessor signatures.

    FILE is the path to the table to parse.
    """
    try:
        table = load_table(file, input_format, separator)
        signatures = derive_signatures(table, separator)
    except StringsGenError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        raise SystemExit(1)

    if not signatures:
        click.secho("No entries found.", fg='yellow')
        return

    click.echo(f"Entries ({len(signatures)} total):\n")

    for signature in signatures:
        click.echo(signature.entry.to_strings_format())
        parameters = ", ".join(
            f"p{p.index}: {p.kind.value}" for p in signature.parameters
        )
        click.secho(f"  -> {signature.identifier}({parameters})", fg='cyan')
        click.echo()


@cli.command()
def profiles():
    """List the built-in emission profiles."""
    for profile in list_profiles():
        click.secho(profile.name, fg='green', bold=True)
        click.echo(f"  {profile.description}")
        click.echo(f"  File: {profile.filename}")
        if profile.params:
            defaults = ", ".join(f"{k}={v}" for k, v in profile.params.items())
            click.echo(f"  Parameters: {defaults}")


def _run(
    inputs,
    emission_profile,
    config: GeneratorConfig,
    output: Optional[Path],
    verbose: bool
) -> GenerationResult:
    """Generate, report, and write or print the outputs."""
    def table_done(name: str, error: Optional[StringsGenError]):
        if verbose and error is None:
            click.echo(f"  Generated: {name}")

    service = GenerationService(emission_profile, config)
    result = service.generate(list(inputs), on_table_done=table_done)

    for error in result.errors:
        if error.fatal:
            click.secho(f"Error: {error}", fg='red', err=True)
        else:
            click.secho(f"Warning: {error}", fg='yellow', err=True)

    if output is None:
        for generated in result.outputs:
            click.echo(generated.text, nl=False)
        return result

    try:
        written = write_outputs(result, output)
    except StringsGenError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        result.errors.append(e)
        return result

    for path in written:
        click.secho(f"  {path}", fg='green')
    if verbose and len(written) < len(result.outputs):
        click.echo(f"  {len(result.outputs) - len(written)} file(s) unchanged")

    return result


def _parse_params(values: tuple[str, ...]) -> dict[str, str]:
    params = {}
    for value in values:
        key, sep, param_value = value.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{value}'", param_hint='--param')
        params[key.strip()] = param_value
    return params


if __name__ == '__main__':
    cli()
