import argparse
import logging

from rich.console import Console

from . import __version__
from .config import load_config
from .core import DEFAULT_REGION
from .errors import LakePrepError
from .logger import logger, setup_logger
from .modes import setup, status
from .reporter import render_results, results_to_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="lakeprep: Dataplex Lab Provisioner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Provision the lab in the active gcloud project
  lakeprep

  # Provision into an explicit project and region
  lakeprep --project-id my-project --region us-east1

  # Only report which lab resources already exist
  lakeprep --check --json
""",
    )
    parser.add_argument(
        "--version", action="version", version=f"lakeprep v{__version__}"
    )

    parser.add_argument(
        "--project-id",
        help="GCP Project ID (default: $DEVSHELL_PROJECT_ID or gcloud config)",
    )
    parser.add_argument(
        "--region", help=f"Dataplex region (default: gcloud config or {DEFAULT_REGION})"
    )

    parser.add_argument("--lake-id", help="Override the lake identifier")
    parser.add_argument("--zone-id", help="Override the zone identifier")
    parser.add_argument("--asset-id", help="Override the asset identifier")
    parser.add_argument("--aspect-type-id", help="Override the aspect type identifier")
    parser.add_argument(
        "--bucket", dest="bucket_name", help="Bucket name (default: the project id)"
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="Report which lab resources exist without creating anything",
    )
    parser.add_argument("--json", action="store_true", help="Output results as JSON")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def main() -> None:
    args = build_parser().parse_args()

    if args.verbose:
        setup_logger(level=logging.DEBUG)

    # Use stderr for progress if stdout is piped for JSON
    log_console = Console(stderr=True, quiet=args.json)
    out_console = Console()

    log_console.print("[bold green]lakeprep[/bold green] Dataplex lab provisioner.")

    try:
        config = load_config(
            project_id=args.project_id,
            region=args.region,
            lake_id=args.lake_id,
            zone_id=args.zone_id,
            asset_id=args.asset_id,
            aspect_type_id=args.aspect_type_id,
            bucket_name=args.bucket_name,
        )

        if args.check:
            results = status.run_status(config)
        else:
            results = setup.run_setup(config, log_console)
    except LakePrepError as e:
        logger.error(f"Setup Failed: {e}")
        exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        exit(1)

    if args.json:
        out_console.print_json(results_to_json(results))
    else:
        render_results(results, out_console)


def run() -> None:
    """Console-script entry point."""
    try:
        main()
    except KeyboardInterrupt:
        console = Console(stderr=True)
        console.print("\n[bold red]Operation cancelled by user.[/bold red]")
        exit(130)


if __name__ == "__main__":
    run()
