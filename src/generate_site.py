"""Command-line entrypoint: generate the electrolysis directory website.

Reads the zipped CSV dataset, resolves and cross-links businesses, cities,
states and categories, and writes the static site (pages, sitemaps, JSON
snapshots) to the output directory. A summary table is printed on success;
on failure the error is logged and the process exits with status 1.

Usage
-----
python -m src.generate_site --zip data/data.zip --output public [--base-url ...] [--log-level ...]
"""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from src.exceptions import AppError
from src.pipeline.website_generator.runner import (
    GenerationSummary,
    configure_logging,
    run_pipeline,
)
from src.pipeline.website_generator.settings import SiteSettings

logger = logging.getLogger(__name__)


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Parameters
    ----------
    argv : list[str] | None
        Optional argv to parse. When ``None`` the real CLI args are used.

    Returns
    -------
    argparse.Namespace
        Fields ``zip``, ``output``, ``base_url`` and ``log_level``; path and
        URL fields are ``None`` when not given so settings defaults apply.
    """
    parser = argparse.ArgumentParser(
        description="Generate the static electrolysis directory website."
    )
    parser.add_argument("--zip", type=Path, default=None, help="Dataset archive")
    parser.add_argument("--output", type=Path, default=None, help="Output directory")
    parser.add_argument("--base-url", type=str, default=None)
    parser.add_argument("--log-level", type=str, default="INFO")
    return parser.parse_args(argv)


def build_summary_table(summary: GenerationSummary) -> Table:
    """Tabulate the artifacts produced by a run."""
    table = Table(title="Site generation", show_header=True, header_style="bold blue")
    table.add_column("Output", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("Businesses", str(summary.businesses))
    table.add_row("Company pages", str(summary.company_pages))
    table.add_row("City pages", str(summary.city_pages))
    table.add_row("State pages", str(summary.state_pages))
    table.add_row("Category pages", str(summary.category_pages))
    table.add_row("Sitemap files", str(summary.sitemap_files))
    return table


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint for site generation.

    Returns
    -------
    int
        Process exit code: ``0`` on success, ``1`` on any failure.
    """
    args = parse_cli_args(argv)
    configure_logging(args.log_level)
    try:
        settings = SiteSettings(
            zip_path=args.zip, output_dir=args.output, base_url=args.base_url
        )
        summary = run_pipeline(settings)
    except AppError as exc:
        logger.exception("Error generating HTML: %s", exc.to_dict())
        return 1
    except Exception:
        logger.exception("Error generating HTML")
        return 1
    console = Console()
    console.print(build_summary_table(summary))
    console.print(f"Site written to [bold]{summary.output_dir}[/bold]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
