# component_tool/cli/utils/output.py
"""Output formatting utilities"""

from typing import List

from rich import box
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ...constants import EMOJI_ERROR, EMOJI_SUCCESS
from ...core.diagnostics import DiagnosticResult
from ...models import Component, DeployResult, RedeployResult, TryUpdateAllWorkersResult, WorkerMetadata
from ...templates import ComponentTemplate
from ...utils.file_utils import format_size
from ...utils.output import console


def format_component_list(components: List[Component]) -> None:
    """Display components in a table"""
    table = Table(title="Components", box=box.ROUNDED)
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Version", style="green", justify="right")
    table.add_column("Type")
    table.add_column("Size", justify="right", style="yellow")
    table.add_column("Created", style="dim")
    table.add_column("Id", style="dim")

    for component in components:
        table.add_row(
            component.name,
            str(component.version),
            component.component_type.value,
            format_size(component.component_size),
            component.created_at.strftime("%Y-%m-%d %H:%M") if component.created_at else "-",
            str(component.component_id),
        )

    console.print(table)


def format_component_details(component: Component) -> None:
    """Display one component in a panel"""
    lines = [
        f"[bold]Name:[/bold] {component.name}",
        f"[bold]Id:[/bold] {component.component_id}",
        f"[bold]Version:[/bold] {component.version}",
        f"[bold]Type:[/bold] {component.component_type.value}",
        f"[bold]Size:[/bold] {format_size(component.component_size)}",
    ]

    if component.created_at:
        lines.append(f"[bold]Created:[/bold] {component.created_at.strftime('%Y-%m-%d %H:%M:%S')}")
    if component.project_id:
        lines.append(f"[bold]Project:[/bold] {component.project_id}")

    if component.exports:
        lines.append("")
        lines.append("[bold]Exports:[/bold]")
        for export in component.exports:
            lines.append(f"  • {export}")

    console.print(Panel("\n".join(lines), title="Component", border_style="cyan"))


def format_deploy_result(result: DeployResult) -> None:
    """Format and display deploy operation result"""
    border_style = "green" if result.is_success else "yellow"
    lines = [f"[{border_style}]{result.message}[/{border_style}]"]

    if result.created:
        lines.append(f"[bold]Created:[/bold] {', '.join(result.created)}")
    if result.updated:
        lines.append(f"[bold]Updated:[/bold] {', '.join(result.updated)}")
    if result.skipped:
        lines.append(f"[bold]Skipped:[/bold] {', '.join(result.skipped)} (not deployable)")
    if result.duration is not None:
        lines.append(f"[bold]Duration:[/bold] {result.duration:.1f}s")

    for warning in result.warnings:
        lines.append(f"[yellow]⚠ {warning}[/yellow]")

    console.print(Panel("\n".join(lines), title="Deploy Result", border_style=border_style))

    if result.update_results is not None:
        format_update_result(result.update_results)
    if result.redeploy_results:
        format_redeploy_results(result.redeploy_results)


def format_update_result(result: TryUpdateAllWorkersResult) -> None:
    """Display triggered and failed worker updates"""
    if not result.triggered and not result.failed:
        console.print("[dim]No worker updates were needed[/dim]")
        return

    table = Table(title="Worker Updates", box=box.ROUNDED)
    table.add_column("Component", style="cyan")
    table.add_column("Worker")
    table.add_column("Target Version", justify="right", style="green")
    table.add_column("Status", style="bold")

    for attempt in result.triggered:
        table.add_row(attempt.component_name, attempt.worker_name, str(attempt.target_version),
                      "[green]✓ triggered[/green]")
    for attempt in result.failed:
        table.add_row(attempt.component_name, attempt.worker_name or "-", str(attempt.target_version),
                      f"[red]✗ {attempt.error}[/red]")

    console.print(table)


def format_redeploy_results(results: List[RedeployResult]) -> None:
    """Display redeployed workers per component"""
    table = Table(title="Redeployed Workers", box=box.ROUNDED)
    table.add_column("Component", style="cyan")
    table.add_column("Workers", justify="right", style="green")

    for result in results:
        table.add_row(result.component_name, str(len(result.redeployed_workers)))

    console.print(table)


def format_worker_metadata(metadata: WorkerMetadata) -> None:
    """Display worker metadata in a panel"""
    lines = [
        f"[bold]Worker:[/bold] {metadata.worker_name}",
        f"[bold]Component:[/bold] {metadata.component_id}",
        f"[bold]Component version:[/bold] {metadata.component_version}",
        f"[bold]Status:[/bold] {metadata.status or '-'}",
    ]
    if metadata.args:
        lines.append(f"[bold]Args:[/bold] {' '.join(metadata.args)}")
    if metadata.env:
        lines.append("[bold]Env:[/bold]")
        for key, value in sorted(metadata.env.items()):
            lines.append(f"  {key}={value}")

    console.print(Panel("\n".join(lines), title="Worker", border_style="cyan"))


def format_templates(templates: List[ComponentTemplate]) -> None:
    """Display component templates in a table"""
    if not templates:
        console.print("[yellow]No matching templates[/yellow]")
        return

    table = Table(title="Component Templates", box=box.ROUNDED)
    table.add_column("Template", style="cyan", no_wrap=True)
    table.add_column("Language")
    table.add_column("Description")

    for template in templates:
        table.add_row(template.name, template.language, template.description)

    console.print(table)


def format_diagnostics(results: List[DiagnosticResult]) -> None:
    """Display diagnostic check results in a table"""
    table = Table(title="Diagnostic Results", box=box.ROUNDED)
    table.add_column("Component", style="cyan")
    table.add_column("Check")
    table.add_column("Status", justify="center")
    table.add_column("Details")

    for result in results:
        status = f"[green]{EMOJI_SUCCESS} PASS[/green]" if result.passed else f"[red]{EMOJI_ERROR} FAIL[/red]"
        table.add_row(result.component_name, result.check, status, escape(result.message))

    console.print(table)
