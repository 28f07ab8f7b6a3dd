#!/usr/bin/env python3
"""
Fact Series Plotter - SEC EDGAR XBRL concept history as a gnuplot script.

Looks up a company (ticker, name fragment, or CIK), picks one us-gaap concept
by regular expression, and reduces its reported values to one observation per
reporting period:
- Restated values replace earlier filings for the same period
- Observations are grouped by period length (quarter, half, three quarters, year)
- Each observation is plotted at its period end with an error bar over the period

Ambiguous company or concept queries print the candidates and stop.

Usage:
    python -m factplot AAPL '^Revenues$'                 # gnuplot script on stdout
    python -m factplot AAPL '^Revenues$' --rank 4        # annual figures only
    python -m factplot 'apple' 'EarningsPerShareDiluted' --format csv
    python -m factplot 320193 Revenues --png revenue.png | gnuplot
"""
from __future__ import annotations

import argparse
import logging
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import requests
import yaml

from secfacts.sec_client import SECClient, SECConfig, SECQueryError, format_cik
from secfacts.company_directory import (
    AMBIGUOUS,
    NOT_FOUND,
    is_cik,
    parse_company_directory,
    resolve_company,
)

from .render import gnuplot_script, plot_title
from .utils import (
    NoConceptsFound,
    canonicalize,
    concept_disclosures,
    format_series,
    records_to_frame,
    select_concepts,
    taxonomy_concepts,
)

DEFAULT_CONFIG = Path(__file__).parent / "config.yml"
PNG_TERMINAL = "pngcairo size 1200,600"
FORMATS = ("gnuplot", "data", "csv")


# ============================================================================
# Configuration
# ============================================================================

@dataclass
class Config:
    sec: SECConfig
    terminal: str
    plot_output: str

    @staticmethod
    def from_yaml(path: str) -> "Config":
        with open(path, "r") as f:
            raw = yaml.safe_load(f) or {}

        plot = raw.get("plot", {}) or {}

        return Config(
            sec=SECConfig.from_dict(raw),
            terminal=plot.get("terminal") or "",
            plot_output=plot.get("output") or "",
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="factplot",
        description="Plot the reported history of an SEC XBRL concept for one company.",
    )
    parser.add_argument("company", help="Ticker (exact), company name regex, or numeric CIK")
    parser.add_argument("concept", help="Case-insensitive regex matched against us-gaap concept names")
    parser.add_argument("--rank", type=int, choices=[1, 2, 3, 4], default=None,
                        help="Only periods of this length: 1=quarter, 2=half, 3=three quarters, 4=year")
    parser.add_argument("--format", "-f", choices=FORMATS, default="gnuplot", help="Output format")
    parser.add_argument("--output", "-o", default=None, help="Write output to this file instead of stdout")
    parser.add_argument("--png", default=None, help="Make the gnuplot script render to this PNG file")
    parser.add_argument("--config", "-c", default=None, help="Path to config.yml")
    parser.add_argument("--cache-dir", type=str, default=None, help="Cache directory for SEC responses")
    parser.add_argument("--max-age-hours", type=float, default=None, help="Refetch cached responses older than this")
    parser.add_argument("--refresh", action="store_true", help="Ignore the cache and download again")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging on stderr")
    return parser


# ============================================================================
# Steps
# ============================================================================

def lookup_cik(client: SECClient, query: str) -> Optional[str]:
    """
    Resolve the company argument to a CIK.

    Returns None after printing the candidates when the query is ambiguous.

    Raises:
        LookupError: If no company matches
    """
    if is_cik(query):
        return format_cik(query)

    directory = parse_company_directory(client.get_company_tickers())
    resolution = resolve_company(query, directory)

    if resolution.status == AMBIGUOUS:
        print(f"[info] {len(resolution.matches)} companies match {query!r}:", file=sys.stderr)
        for entry in resolution.matches:
            print(f"{entry.ticker}\t{entry.cik}\t{entry.title}")
        return None
    if resolution.status == NOT_FOUND:
        raise LookupError(f"No companies found matching {query!r}")

    logging.debug("resolved %r to CIK %s", query, resolution.cik)
    return resolution.cik


def render(records, fmt: str, title: str, ylabel: str, terminal: str = "", output: str = "") -> str:
    """Format canonical records for output."""
    if fmt == "data":
        text = format_series(records)
        return text + "\n" if text else ""
    if fmt == "csv":
        return records_to_frame(records).to_csv(index=False)
    return gnuplot_script(records, title, ylabel=ylabel, terminal=terminal or None, output=output or None)


def write_output(text: str, path: Optional[str]):
    """Write text to a file, or to stdout when no path is given."""
    if path is None:
        sys.stdout.write(text)
        return
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text)
    print(f"[ok] Wrote output to {out}", file=sys.stderr)


def run(client: SECClient, args: argparse.Namespace, config: Config, concept_pattern: re.Pattern) -> int:
    cik = lookup_cik(client, args.company)
    if cik is None:
        return 0

    facts = client.get_company_facts(cik)
    entity_name = facts.get("entityName") or f"CIK {cik}"
    concepts = taxonomy_concepts(facts)

    names = select_concepts(concepts, concept_pattern)
    if not names:
        raise NoConceptsFound(f"No concepts found matching {args.concept!r} for {entity_name}")
    if len(names) > 1:
        print(f"[info] {len(names)} concepts match {args.concept!r}:", file=sys.stderr)
        for name in names:
            print(f"{name}\t{concepts[name].get('label') or ''}")
        return 0

    name = names[0]
    unit, disclosures = concept_disclosures(concepts[name])
    records = canonicalize(disclosures, rank=args.rank)
    logging.debug(
        "concept %s (%s): %d disclosures -> %d records",
        name, unit, len(disclosures), len(records),
    )
    if not records:
        print(f"[warn] No observations of {name} for {entity_name}", file=sys.stderr)

    terminal, plot_output = config.terminal, config.plot_output
    if args.png:
        terminal, plot_output = PNG_TERMINAL, args.png

    text = render(
        records,
        args.format,
        title=plot_title(entity_name, name, concepts[name].get("label"), unit),
        ylabel=unit or "",
        terminal=terminal,
        output=plot_output,
    )
    write_output(text, args.output)
    return 0


# ============================================================================
# Main
# ============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        concept_pattern = re.compile(args.concept, re.IGNORECASE)
    except re.error as e:
        parser.error(f"invalid concept pattern {args.concept!r}: {e}")

    config_path = Path(args.config) if args.config else DEFAULT_CONFIG
    if not config_path.exists():
        raise SystemExit(f"Config not found: {config_path}")
    config = Config.from_yaml(str(config_path))

    if args.cache_dir:
        config.sec.cache_dir = Path(args.cache_dir)
    if args.max_age_hours is not None:
        config.sec.max_age_hours = args.max_age_hours

    try:
        client = SECClient(config.sec, refresh=args.refresh)
        return run(client, args, config, concept_pattern)
    except re.error as e:
        parser.error(f"invalid company pattern {args.company!r}: {e}")
    except (ValueError, LookupError, OSError) as e:
        print(f"[error] {e}", file=sys.stderr)
        return 1
    except (SECQueryError, requests.RequestException) as e:
        print(f"[error] SEC request failed: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
