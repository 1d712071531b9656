from rich.console import Console
from rich.markup import escape

from ..provisioners import aspects, dataplex, services, storage
from ..schemas.lab import LabConfig
from ..schemas.results import ProvisionResult, ProvisionStatus

TOTAL_STEPS = 7


def _report(console: Console, result: ProvisionResult) -> None:
    style = "yellow" if result.status == ProvisionStatus.EXISTS else "green"
    line = f"  [{style}]{result.kind} {result.name}: {result.status.value}[/{style}]"
    if result.detail:
        line += f" ({result.detail})"
    console.print(line)


def run_setup(config: LabConfig, console: Console) -> list[ProvisionResult]:
    """
    Provisions the lab in order. Any ProvisionError propagates immediately,
    so later steps never run after an unrecoverable failure.
    """
    steps = [
        ("Enabling required APIs", services.enable_apis),
        ("Creating Dataplex lake", dataplex.ensure_lake),
        ("Creating RAW zone", dataplex.ensure_zone),
        ("Creating Cloud Storage bucket", storage.ensure_bucket),
        ("Attaching bucket to zone as asset", dataplex.ensure_asset),
        ("Creating aspect type", aspects.ensure_aspect_type),
        ("Attaching aspect to zone", aspects.attach_aspect),
    ]

    console.print(f"Project: [bold]{config.project_id}[/bold]")
    console.print(f"Region:  [bold]{config.region}[/bold]")

    results = []
    for i, (label, step) in enumerate(steps, start=1):
        step_no = escape(f"[{i}/{TOTAL_STEPS}]")
        console.print(f"[bold cyan]{step_no}[/bold cyan] {label}...")
        result = step(config)
        _report(console, result)
        results.append(result)

    console.print("[bold green]All tasks completed successfully.[/bold green]")
    return results
