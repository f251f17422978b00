"""
Console reporter for import sessions.

Formats mappings, previews and validation results using Rich.
"""

from collections.abc import Sequence

import pandas as pd
from rich.console import Console
from rich.table import Table

from workload_import.mapping.columns import FieldMapping
from workload_import.schemas.entities import EntitySchema
from workload_import.validation.core import ValidationReport


class ConsoleReporter:
    """Formats and displays import state to the console."""

    def __init__(self, console: Console, max_violations: int = 50) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
            max_violations: Violations listed before the list is truncated.
        """
        self.console = console
        self.max_violations = max_violations

    def print_mapping(
        self,
        headers: Sequence[str],
        mapping: FieldMapping,
        schema: EntitySchema,
    ) -> None:
        """
        Print the column -> field mapping, marking required targets.

        Args:
            headers: Upload headers in file order.
            mapping: Current mapping.
            schema: Entity definition.
        """
        required = set(schema.required_fields)
        table = Table(title=f"Field Mapping ({schema.title})", show_header=True)
        table.add_column("CSV Column", style="cyan", no_wrap=True)
        table.add_column("Field", style="blue")

        for header in dict.fromkeys(headers):
            target = mapping.get(header)
            if target is None:
                table.add_row(header, "[dim]not mapped[/dim]")
            else:
                marker = " *" if target in required else ""
                table.add_row(header, f"{target}{marker}")

        self.console.print(table)

    def print_preview(self, frame: pd.DataFrame, total_rows: int) -> None:
        """
        Print the first rows of an upload.

        Args:
            frame: Leading rows as a string DataFrame.
            total_rows: Total number of data rows in the upload.
        """
        table = Table(title="Preview", show_header=True)
        for column in frame.columns:
            table.add_column(str(column))
        for values in frame.itertuples(index=False):
            table.add_row(*("" if pd.isna(v) else str(v) for v in values))

        self.console.print(table)
        if total_rows > len(frame):
            self.console.print(f"[dim]... and {total_rows - len(frame)} more rows[/dim]")

    def print_report(self, report: ValidationReport) -> None:
        """
        Print validation results: summary, then every violation.

        Args:
            report: Validation report to display.
        """
        self._print_summary(report)

        if report.is_valid:
            return

        table = Table(
            title=f"Validation Errors ({len(report.violations)})",
            show_header=True,
        )
        table.add_column("Row", justify="right")
        table.add_column("Field", style="cyan")
        table.add_column("Message", style="red")

        for violation in report.violations[: self.max_violations]:
            table.add_row(str(violation.row), violation.field, violation.message)

        self.console.print(table)

        hidden = len(report.violations) - self.max_violations
        if hidden > 0:
            self.console.print(f"[dim]... {hidden} more violations not shown[/dim]")

    def _print_summary(self, report: ValidationReport) -> None:
        """
        Print summary statistics.

        Args:
            report: Validation report.
        """
        self.console.print()
        self.console.print("[bold]Summary:[/bold]")
        self.console.print(f"  Entity: {report.entity}")
        self.console.print(f"  Rows: {report.row_count}")
        if report.unmapped_required:
            self.console.print(
                f"  [yellow]Unmapped required fields: "
                f"{', '.join(report.unmapped_required)}[/yellow]"
            )
        if report.is_valid:
            self.console.print("  [green]Status: ready to import[/green]")
        else:
            self.console.print(
                f"  [red]Status: {len(report.violations)} violation(s) "
                f"in {len(report.invalid_rows)} row(s)[/red]"
            )
            per_field = ", ".join(f"{field} ({n})" for field, n in report.by_field().items())
            self.console.print(f"  By field: {per_field}")
