"""Rich table rendering for check results."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from kcheck.kernel import KernelSource
from kcheck.verify import CheckResult, CheckStatus, summarize

STATUS_LABELS = {
    CheckStatus.PASS: "[green]Pass[/green]",
    CheckStatus.FAIL: "[red]Fail[/red]",
}


def build_results_table(results: list[CheckResult]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("Config Option", style="cyan", min_width=20)
    table.add_column("Desired State", min_width=14)
    table.add_column("Kernel State", min_width=14)
    table.add_column("Result", justify="center", width=6)

    for result in results:
        table.add_row(
            escape(result.name),
            escape(str(result.desired)),
            escape(str(result.observed)),
            STATUS_LABELS[result.status],
        )
    return table


def build_summary_panel(results: list[CheckResult]) -> Panel:
    passed, failed = summarize(results)

    if failed == 0:
        summary = "[green bold]ALL CHECKS PASSED[/green bold]"
        border_style = "green"
    else:
        summary = f"[red bold]{failed} CHECKS FAILED[/red bold]"
        border_style = "red"

    stats = f"Passed: {passed} | Failed: {failed}"
    return Panel(f"{summary}\n{stats}", title="Summary", border_style=border_style)


def render_report(
    results: list[CheckResult],
    source: KernelSource | None = None,
    console: Console | None = None,
) -> None:
    console = console or Console()
    if source is not None:
        console.print(Panel(f"Kernel config: {escape(str(source))}", title="Source"))
        console.print()

    console.print(build_results_table(results))
    console.print()
    console.print(build_summary_panel(results))
