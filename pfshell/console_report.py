"""
Console report for pfShell
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from pfshell.classifier import criteria_for
from pfshell.models import Severity
from pfshell.utils import tabulate_findings

SEVERITY_STYLES = {
    Severity.HIGH: "bold red",
    Severity.MEDIUM: "bold yellow",
    Severity.LOW: "bold cyan",
}
DIVIDER = "-" * 80


class ConsoleReport:
    """Renders finding groups as tables, one section per severity"""

    def __init__(self, console=None):
        self.console = console or Console()

    def render(self, hostname, findings):
        """
        Print every non-empty finding group.

        A severity section is omitted when none of its criteria has findings.

        Returns:
            int: number of findings printed
        """
        self.console.print(f"\n[bold]pfShell analysis for {escape(hostname)}[/bold]\n")
        printed = 0
        for severity in Severity:
            groups = [(criterion, findings.get(criterion.id, [])) for criterion in criteria_for(severity)]
            if not any(group for _, group in groups):
                continue

            style = SEVERITY_STYLES[severity]
            self.console.print(Panel(f"{severity.value.upper()} SEVERITY FINDINGS", style=style, expand=False))
            for criterion, group in groups:
                if not group:
                    continue
                self.render_group(criterion, group, style)
                printed += len(group)

        if not printed:
            self.console.print("[bold green]✓ No findings[/bold green]\n")
        return printed

    def render_group(self, criterion, group, style):
        self.console.print(f"[{style}]{criterion.severity.value.upper()} | {escape(criterion.label)} ({len(group)})[/{style}]")
        self.console.print(DIVIDER)
        columns, rows = tabulate_findings(group)
        table = Table(show_header=True, header_style="bold magenta")
        for column in columns:
            table.add_column(column)
        for row in rows:
            table.add_row(*(Text(cell) for cell in row))
        self.console.print(table)
        self.console.print()
