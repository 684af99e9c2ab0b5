"""
AWS Describer CLI

Main entry point for the command-line interface.
"""

import json
import sys
from typing import List, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from aws_describer import __version__
from aws_describer.core.aws_client import AWSClient
from aws_describer.core.config import AccountConfig
from aws_describer.core.context import DescribeContext
from aws_describer.core.exceptions import (
    AWSClientError,
    ConfigurationError,
    DescriberError,
)
from aws_describer.core.logging import setup_logging
from aws_describer.core.region_manager import RegionManager
from aws_describer.registry import (
    RESOURCE_TYPES,
    extract_table_name,
    get_describer,
)
from aws_describer.reporters.cli_reporter import CLIReporter
from aws_describer.reporters.json_reporter import JSONLinesSink, JSONReporter


console = Console()
err_console = Console(stderr=True)


def validate_regions(ctx, param, value: Optional[str]) -> Optional[List[str]]:
    """Validate and parse comma-separated region list."""
    if value is None:
        return None
    regions = [r.strip() for r in value.split(",") if r.strip()]
    if not regions:
        raise click.BadParameter("No valid regions specified")
    return regions


def load_account_config(path: Optional[str]) -> Optional[AccountConfig]:
    """Read an account configuration JSON file."""
    if path is None:
        return None
    try:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Account config {path} is not valid JSON: {e}",
            details={"path": path},
        ) from e
    return AccountConfig.from_mapping(data)


@click.group()
@click.version_option(version=__version__, prog_name="aws-describer")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level (default: WARNING)",
)
@click.option(
    "--log-file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Also write logs to this file",
)
def cli(log_level: str, log_file: Optional[str]):
    """
    AWS Describer: uniform AWS resource enumeration

    Lists every resource of a given type in an account, across regions,
    and prints one normalised record (region, ARN, name, description)
    per resource.
    """
    setup_logging(level=log_level, log_file=log_file)


@cli.command("describe")
@click.argument("resource_type")
@click.option(
    "--account-config",
    "-c",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON account configuration (accountId, regions, accessKey, assumeRoleName, ...)",
)
@click.option(
    "--region",
    "-r",
    default=None,
    help="AWS region to describe",
)
@click.option(
    "--regions",
    callback=validate_regions,
    help="Comma-separated list of regions (e.g., us-east-1,us-west-2)",
)
@click.option(
    "--all-regions",
    is_flag=True,
    help="Describe all regions enabled for the account",
)
@click.option(
    "--profile",
    "-p",
    default=None,
    help="AWS profile name from ~/.aws/credentials",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["cli", "json", "jsonl"]),
    default="cli",
    help="Output format (default: cli)",
)
@click.option(
    "--output",
    "-o",
    default=None,
    help="Output file path (json and jsonl formats)",
)
@click.option(
    "--max-workers",
    default=10,
    type=int,
    help="Maximum parallel region describes (default: 10)",
)
@click.option(
    "--max-pages",
    default=None,
    type=click.IntRange(min=1),
    help="Abort a region after this many pages",
)
@click.option(
    "--timeout",
    default=None,
    type=float,
    help="Overall deadline in seconds",
)
def describe_command(
    resource_type: str,
    account_config: Optional[str],
    region: Optional[str],
    regions: Optional[List[str]],
    all_regions: bool,
    profile: Optional[str],
    output_format: str,
    output: Optional[str],
    max_workers: int,
    max_pages: Optional[int],
    timeout: Optional[float],
):
    """
    Describe every resource of RESOURCE_TYPE.

    RESOURCE_TYPE is a resource type (AWS::Events::Rule) or a table
    name (aws_eventbridge_rule).

    Examples:

        # Event buses in one region
        aws-describer describe AWS::Events::EventBus --region eu-west-1

        # Queues in every configured region, streamed as JSON lines
        aws-describer describe aws_sqs_queue -c account.json --format jsonl

        # Rules across all enabled regions, saved as one JSON document
        aws-describer describe AWS::Events::Rule --all-regions -f json -o rules.json
    """
    reporter = CLIReporter(err_console if output_format == "jsonl" else console)

    try:
        describer = get_describer(resource_type)
        config = load_account_config(account_config)

        if config is not None:
            client = AWSClient.from_account_config(config, region=region, profile=profile)
        else:
            client = AWSClient(region=region, profile=profile)

        manager = RegionManager(
            account_config=config,
            aws_client=client,
            max_workers=max_workers,
            max_pages=max_pages,
        )

        if describer.global_resource:
            target_regions = None
        elif all_regions:
            target_regions = manager.get_all_regions()
        elif regions:
            target_regions = regions
        elif region:
            target_regions = [region]
        elif config is not None and config.regions:
            target_regions = list(config.regions)
        else:
            target_regions = [client.region]

        reporter.print_describing_message(
            describer.resource_type, target_regions or ["global"]
        )

        context = DescribeContext(
            region="",
            account_id=manager.account_id,
            timeout=timeout,
        )

        def progress_callback(done_region: str, status: str):
            if status == "error":
                err_console.print(f"  [yellow]Error describing: {done_region}[/yellow]")

        output_file = None
        if output_format == "jsonl":
            if output:
                with open(output, "w", encoding="utf-8") as fh:
                    result = manager.describe_regions(
                        describer,
                        regions=target_regions,
                        stream=JSONLinesSink(fh, describer.resource_type),
                        context=context,
                        progress_callback=progress_callback,
                    )
                output_file = output
            else:
                result = manager.describe_regions(
                    describer,
                    regions=target_regions,
                    stream=JSONLinesSink(sys.stdout, describer.resource_type),
                    context=context,
                    progress_callback=progress_callback,
                )
            err_console.print(
                f"[dim]{result.total_resources} resources written[/dim]"
            )
            reporter.print_errors(result.errors)
        else:
            result = manager.describe_regions(
                describer,
                regions=target_regions,
                context=context,
                progress_callback=progress_callback,
            )
            if output_format == "json":
                json_reporter = JSONReporter(output_path=output)
                if output:
                    output_file = json_reporter.report(result)
                else:
                    click.echo(json_reporter.to_string(result))
            else:
                reporter.report(result)

        reporter.print_completion_message(output_file)
        if result.has_errors:
            sys.exit(2)

    except ConfigurationError as e:
        reporter.print_error(str(e))
        sys.exit(1)
    except AWSClientError as e:
        err_console.print(f"\n[red bold]Authentication Error:[/red bold] {escape(str(e))}")
        sys.exit(1)
    except DescriberError as e:
        reporter.print_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]Describe cancelled by user.[/yellow]")
        sys.exit(130)


@cli.command("list-types")
def list_types():
    """List the supported resource types and their table names."""
    table = Table(title="Supported resource types")
    table.add_column("Resource Type", style="cyan")
    table.add_column("Table", style="white")
    table.add_column("Scope", style="dim")

    for resource_type in sorted(RESOURCE_TYPES):
        describer = RESOURCE_TYPES[resource_type]
        table.add_row(
            resource_type,
            extract_table_name(resource_type),
            "global" if describer.global_resource else "regional",
        )

    console.print(table)


@cli.command("regions")
@click.option(
    "--profile",
    "-p",
    default=None,
    help="AWS profile name from ~/.aws/credentials",
)
def list_regions(profile: Optional[str]):
    """List the regions enabled for the account."""
    try:
        region_manager = RegionManager(aws_client=AWSClient(profile=profile))
        regions = region_manager.get_all_regions()

        console.print(f"\n[bold]Enabled AWS Regions ({len(regions)} total):[/bold]\n")
        for region in regions:
            console.print(f"  • {region}")
        console.print()

    except AWSClientError as e:
        console.print(f"\n[red bold]Error:[/red bold] {escape(str(e))}")
        sys.exit(1)


@cli.command("validate")
@click.option(
    "--account-config",
    "-c",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON account configuration",
)
@click.option(
    "--profile",
    "-p",
    default=None,
    help="AWS profile name from ~/.aws/credentials",
)
@click.option(
    "--region",
    "-r",
    default=None,
    help="AWS region to use for validation",
)
def validate_credentials(
    account_config: Optional[str],
    profile: Optional[str],
    region: Optional[str],
):
    """Validate credentials (and role assumption) and show account info."""
    try:
        config = load_account_config(account_config)
        if config is not None:
            client = AWSClient.from_account_config(config, region=region, profile=profile)
        else:
            client = AWSClient(region=region, profile=profile)
        identity = client.get_caller_identity()

        console.print("\n[green bold]AWS credentials are valid![/green bold]")
        console.print(f"\n  Account ID: {identity['Account']}")
        console.print(f"  Identity: {identity['Arn']}")
        console.print(f"  Region: {client.region}")
        if client.assume_role_arn:
            console.print(f"  Assumed role: {client.assume_role_arn}")
        console.print()

    except DescriberError as e:
        console.print(f"\n[red bold]Validation Failed:[/red bold] {escape(str(e))}")
        sys.exit(1)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
