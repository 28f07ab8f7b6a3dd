"""
SEC Company Directory Lookup

Resolves a user query to a company CIK using the SEC company_tickers.json
directory:
1. Purely numeric query (used directly as the CIK)
2. Exact ticker symbol (case-sensitive, first match wins)
3. Case-insensitive regular expression search over company titles

Lookups never exit the process; the caller decides what an ambiguous or
empty result means.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .sec_client import format_cik

RESOLVED = "resolved"
AMBIGUOUS = "ambiguous"
NOT_FOUND = "not_found"


@dataclass(frozen=True)
class CompanyEntry:
    """One row of the SEC ticker directory."""
    cik: str
    ticker: str
    title: str


@dataclass
class Resolution:
    """Outcome of resolving a company query."""
    status: str  # "resolved", "ambiguous", "not_found"
    cik: Optional[str] = None
    matches: List[CompanyEntry] = field(default_factory=list)


def parse_company_directory(raw: Dict[str, dict]) -> List[CompanyEntry]:
    """
    Convert the raw company_tickers.json document to directory entries.

    Rows keep the source order, which is how ticker ties are broken.
    """
    rows = list(raw.values()) if isinstance(raw, dict) else list(raw)
    return [
        CompanyEntry(
            cik=format_cik(row["cik_str"]),
            ticker=str(row.get("ticker", "")),
            title=str(row.get("title", "")),
        )
        for row in rows
    ]


def is_cik(query: str) -> bool:
    return re.fullmatch(r"[0-9]+", query) is not None


def resolve_company(query: str, directory: List[CompanyEntry]) -> Resolution:
    """
    Map a ticker, company name fragment, or CIK to a CIK.

    Args:
        query: Ticker ("AAPL"), name regex ("apple"), or CIK ("320193")
        directory: Entries from parse_company_directory

    Returns:
        Resolution with status "resolved", "ambiguous", or "not_found"

    Raises:
        re.error: If the query is not a valid regular expression
    """
    if is_cik(query):
        return Resolution(status=RESOLVED, cik=format_cik(query))

    for entry in directory:
        if entry.ticker == query:
            return Resolution(status=RESOLVED, cik=entry.cik, matches=[entry])

    pattern = re.compile(query, re.IGNORECASE)
    matches = [entry for entry in directory if pattern.search(entry.title)]

    if len(matches) == 1:
        return Resolution(status=RESOLVED, cik=matches[0].cik, matches=matches)
    if matches:
        return Resolution(status=AMBIGUOUS, matches=matches)
    return Resolution(status=NOT_FOUND)
