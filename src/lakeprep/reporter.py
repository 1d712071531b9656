import json

from rich.console import Console
from rich.table import Table

from .schemas.results import ProvisionResult, ProvisionStatus

STATUS_STYLES = {
    ProvisionStatus.EXISTS: "yellow",
    ProvisionStatus.CREATED: "green",
    ProvisionStatus.CREATED_FALLBACK: "green",
    ProvisionStatus.ENABLED: "green",
    ProvisionStatus.ATTACHED: "green",
    ProvisionStatus.MISSING: "red",
}


def render_results(
    results: list[ProvisionResult], console: Console, title: str = "Lab Resources"
) -> None:
    table = Table(title=title)
    table.add_column("Kind", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Status")
    table.add_column("Detail", style="dim")

    for r in results:
        style = STATUS_STYLES.get(r.status, "white")
        table.add_row(
            r.kind, r.name, f"[{style}]{r.status.value}[/{style}]", r.detail or ""
        )

    console.print(table)


def results_to_json(results: list[ProvisionResult]) -> str:
    return json.dumps([r.model_dump(mode="json") for r in results], indent=2)
