"""
CLI Reporter Module
===================

Rich terminal output for describe results: a resource table per
resource type, a per-region summary, and highlighted errors.

Example
-------
>>> reporter = CLIReporter()
>>> reporter.report(result)

See Also
--------
rich : Python library for rich text and formatting.
JSONReporter : For programmatic access.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from aws_describer.core.models import Resource
from aws_describer.core.region_manager import MultiRegionDescribeResult
from aws_describer.registry import extract_tags_and_name

logger = logging.getLogger(__name__)


class CLIReporter:
    """
    Reporter displaying describe results in the terminal.

    Parameters
    ----------
    console : Console, optional
        Rich Console instance. If not provided, creates a new one.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def report(self, result: MultiRegionDescribeResult) -> None:
        """Print the summary, the resource table and any errors."""
        self._print_summary(result)
        resources = result.get_all_resources()
        if resources:
            self._print_resources_table(result.resource_type, resources)
        self.print_errors(result.errors)

    def _print_summary(self, result: MultiRegionDescribeResult) -> None:
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("Region", style="yellow")
        table.add_column("Resources", justify="right", style="cyan")
        table.add_column("Status")

        for region in sorted(result.regions_described):
            status = (
                "[red]error[/red]" if region in result.errors else "[green]ok[/green]"
            )
            table.add_row(
                region or "global",
                str(result.resource_counts.get(region, 0)),
                status,
            )

        self.console.print(
            Panel(
                table,
                title=f"[bold]{result.resource_type}[/bold]",
                subtitle=f"{result.total_resources} resources",
            )
        )

    def _print_resources_table(
        self,
        resource_type: str,
        resources: List[Resource],
    ) -> None:
        table = Table(title=f"\n{resource_type}", title_style="bold")
        table.add_column("Region", style="yellow", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("ARN", style="cyan", overflow="fold")
        table.add_column("Tags", style="dim", max_width=40)

        for resource in resources:
            tags, name = extract_tags_and_name(resource_type, resource)
            table.add_row(
                resource.region or "global",
                name,
                resource.arn,
                self._truncate(self._format_tags(tags), 40),
            )

        self.console.print(table)

    def print_errors(self, errors: Dict[str, List[str]]) -> None:
        if not errors:
            return

        self.console.print("\n[yellow bold]Errors encountered:[/yellow bold]")
        for region, error_list in errors.items():
            self.console.print(f"\n[yellow]{region}:[/yellow]")
            for error in error_list:
                self.console.print(f"  [red]• {escape(error)}[/red]", highlight=False)

    @staticmethod
    def _format_tags(tags: Dict[str, str]) -> str:
        return ", ".join(f"{k}={v}" for k, v in sorted(tags.items()))

    @staticmethod
    def _truncate(text: str, max_length: int) -> str:
        if len(text) <= max_length:
            return text
        return text[:max_length - 3] + "..."

    # =========================================================================
    # Messages
    # =========================================================================

    def print_describing_message(self, resource_type: str, regions: List[str]) -> None:
        if len(regions) == 1:
            self.console.print(f"\n[bold]Describing {resource_type} in {regions[0]}...[/bold]")
            return
        preview = ", ".join(regions[:5])
        if len(regions) > 5:
            preview += f"... ({len(regions)} total)"
        self.console.print(
            f"\n[bold]Describing {resource_type} across {len(regions)} regions...[/bold]"
        )
        self.console.print(f"[dim]Regions: {preview}[/dim]")

    def print_completion_message(self, output_file: Optional[str] = None) -> None:
        self.console.print("\n[green bold]Describe complete![/green bold]")
        if output_file:
            self.console.print(f"[dim]Results saved to: {output_file}[/dim]")

    def print_error(self, message: str) -> None:
        self.console.print(f"\n[red bold]Error:[/red bold] {escape(message)}")

    def print_warning(self, message: str) -> None:
        self.console.print(f"\n[yellow bold]Warning:[/yellow bold] {escape(message)}")

    def __repr__(self) -> str:
        return "CLIReporter()"
