"""Command-line interface for exporting data requests."""

import json
import sys
from pathlib import Path
from typing import List, Optional

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dataprivacy import __version__
from dataprivacy.core.interfaces import RequestStatus
from dataprivacy.core.validation import NotFoundError, ValidationError
from dataprivacy.exporters import DataRequestExporter, create_exporter
from dataprivacy.models.request import DataRequest, RenderContext, User
from dataprivacy.models.view_model import DataRequestViewModel
from dataprivacy.utils.config_loader import ConfigLoader, load_records
from dataprivacy.utils.error_handler import ExportErrorHandler
from dataprivacy.utils.logging_config import get_logger, setup_logging


console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def _fail(message: str) -> None:
    err_console.print(f"[bold red]❌ {escape(message)}[/bold red]", soft_wrap=True)
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--config-dir', type=click.Path(file_okay=False),
              help='Configuration directory (overrides DATAPRIVACY_CONFIG_DIR)')
@click.option('--language', '-l', help='Language for labels (overrides configuration)')
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_dir: Optional[str], language: Optional[str]):
    """Export data privacy requests as presentation-ready view models."""
    loader = ConfigLoader(Path(config_dir) if config_dir else None)

    try:
        config = loader.load_exporter_config(language=language)
    except (ValueError, TypeError, yaml.YAMLError) as e:
        _fail(f"Invalid configuration: {e}")

    setup_logging({"log_level": "DEBUG" if verbose else config.log_level})
    logger.debug(f"Using configuration from {loader.config_file}")

    ctx.obj = {"loader": loader, "config": config}


@cli.command()
@click.argument('requests_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--users', '-u', 'users_file', required=True,
              type=click.Path(exists=True, dir_okay=False), help='JSON or YAML file of user records')
@click.option('--format', '-f', 'output_format', type=click.Choice(['json', 'table']),
              default='json', help='Output format')
@click.option('--skip-errors', is_flag=True,
              help='Skip requests that reference missing users instead of failing')
@click.pass_context
def export(ctx: click.Context, requests_file: str, users_file: str, output_format: str, skip_errors: bool):
    """Export every request in REQUESTS_FILE."""
    config = ctx.obj["config"]

    try:
        users = [User.from_dict(record) for record in load_records(Path(users_file))]
        requests = [DataRequest.from_dict(record) for record in load_records(Path(requests_file))]
    except (ValueError, TypeError, KeyError, ValidationError, yaml.YAMLError) as e:
        _fail(f"Could not read input: {e}")

    exporter = create_exporter(users, config)
    render_context = RenderContext(context=None, language=config.language)
    error_handler = ExportErrorHandler() if skip_errors else None

    try:
        view_models = exporter.export_many(requests, render_context, error_handler=error_handler)
    except (NotFoundError, ValidationError) as e:
        _fail(f"Export failed: {e}")

    if output_format == 'json':
        click.echo(json.dumps([vm.to_dict() for vm in view_models], indent=2, default=str))
    else:
        console.print(_requests_table(view_models))

    if error_handler is not None and error_handler.has_errors:
        summary = error_handler.get_error_summary()
        err_console.print(
            f"[yellow]⚠️  Skipped {summary['total_errors']} request(s): "
            f"{', '.join(str(i) for i in summary['failed_request_ids'])}[/yellow]",
            soft_wrap=True,
        )


@cli.command()
@click.pass_context
def statuses(ctx: click.Context):
    """Show the label and class used for each request status."""
    config = ctx.obj["config"]
    exporter = create_exporter([], config)

    table = Table(title=f"Request statuses ({config.language})")
    table.add_column("Status", style="cyan")
    table.add_column("Label")
    table.add_column("Class", style="magenta")
    table.add_column("Can review", justify="center")

    for status in RequestStatus:
        label, label_class = exporter.status_label(status)
        table.add_row(status.value, label, label_class, "✅" if exporter.can_review(status) else "")

    console.print(table)


@cli.command()
def schema():
    """Print the view model field definitions as JSON."""
    click.echo(json.dumps(DataRequestExporter.read_properties_definition(), indent=2))


@cli.group(name='config')
def config_group():
    """Configuration management commands."""
    pass


@config_group.command(name='show')
@click.option('--format', '-f', 'output_format', type=click.Choice(['yaml', 'json']),
              default='yaml', help='Output format')
@click.pass_context
def config_show(ctx: click.Context, output_format: str):
    """Show the effective configuration."""
    config_dict = ctx.obj["config"].to_dict()

    if output_format == 'json':
        click.echo(json.dumps(config_dict, indent=2))
    else:
        click.echo(yaml.dump(config_dict, default_flow_style=False, indent=2))


@config_group.command(name='init')
@click.option('--force', is_flag=True, help='Overwrite an existing configuration file')
@click.pass_context
def config_init(ctx: click.Context, force: bool):
    """Write the effective configuration to the configuration directory."""
    loader = ctx.obj["loader"]

    if loader.config_file.exists() and not force:
        _fail(f"{loader.config_file} already exists (use --force to overwrite)")

    path = loader.save_exporter_config(ctx.obj["config"])
    console.print(f"[bold green]✅ Configuration saved to {path}[/bold green]", soft_wrap=True)


@config_group.command(name='validate')
@click.pass_context
def config_validate(ctx: click.Context):
    """Validate the configuration file."""
    results = ctx.obj["loader"].validate_configuration()

    for warning in results["warnings"]:
        console.print(f"[yellow]⚠️  {warning}[/yellow]")

    if not results["valid"]:
        for error in results["errors"]:
            err_console.print(f"[red]  • {error}[/red]")
        _fail("Configuration validation failed")

    console.print("[bold green]✅ Configuration is valid[/bold green]")


def _requests_table(view_models: List[DataRequestViewModel]) -> Table:
    table = Table(title="Data requests")
    table.add_column("ID", justify="right")
    table.add_column("Type")
    table.add_column("For user")
    table.add_column("Requested by")
    table.add_column("DPO")
    table.add_column("Status")

    for vm in view_models:
        table.add_row(
            str(vm.record.get('id')),
            vm.typenameshort,
            vm.foruser.fullname,
            vm.requestedbyuser.fullname if vm.requestedbyuser else "",
            vm.dpouser.fullname if vm.dpouser else "",
            vm.statuslabel,
        )

    return table


def main():
    """Console script entry point."""
    cli()


if __name__ == '__main__':
    main()
