"""
Utility functions for turning SEC XBRL company facts into a plottable series.

Provides:
- Period classification: period length in days -> rank 1..4
- Canonicalization: deduplicate restated filings, rank and sort observations
- Concept selection: pick concepts by name pattern and unit
- Data formatting: "<val> <start> <end>" lines and DataFrame export
"""

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

TAXONOMY = "us-gaap"

# Priority order: the first unit a concept reports under is the one plotted
ALLOWED_UNITS = ("USD", "USD/shares")

# Upper bounds (exclusive) of the period-length ranks, in days
QUARTER_DAYS = 93
HALF_YEAR_DAYS = 186
THREE_QUARTER_DAYS = 279

logger = logging.getLogger(__name__)


class NoConceptsFound(LookupError):
    """No concept matched the requested pattern and units."""


# ==============================================================================
# DATA CLASSES
# ==============================================================================

def parse_date(value: str) -> date:
    return datetime.strptime(value, "%Y-%m-%d").date()


@dataclass(frozen=True)
class RawDisclosure:
    """One reported observation of a concept, as filed."""
    end: date
    filed: date
    val: Union[int, float]
    start: Optional[date] = None
    fp: Optional[str] = None
    form: Optional[str] = None
    accn: Optional[str] = None

    @classmethod
    def from_dict(cls, row: dict) -> "RawDisclosure":
        start = row.get("start")
        return cls(
            end=parse_date(row["end"]),
            filed=parse_date(row["filed"]),
            val=row["val"],
            start=parse_date(start) if start else None,
            fp=row.get("fp") or None,
            form=row.get("form"),
            accn=row.get("accn"),
        )


@dataclass(frozen=True)
class CanonicalRecord:
    """A deduplicated observation with a known period and rank."""
    start: date
    end: date
    val: Union[int, float]
    rank: int
    filed: date

    def to_line(self) -> str:
        return f"{self.val} {self.start.isoformat()} {self.end.isoformat()}"


# ==============================================================================
# PERIOD CLASSIFICATION
# ==============================================================================

def classify_period(duration_days: float) -> int:
    """
    Bucket a period length into a rank.

    Args:
        duration_days: Length of the reporting period in days

    Returns:
        1 (quarter), 2 (half year), 3 (three quarters) or 4 (year or longer)
    """
    if duration_days < QUARTER_DAYS:
        return 1
    if duration_days < HALF_YEAR_DAYS:
        return 2
    if duration_days < THREE_QUARTER_DAYS:
        return 3
    return 4


def period_days(end: date, start: Optional[date]) -> int:
    """Days between start and end; 0 when there is no start."""
    if start is None:
        return 0
    return (end - start).days


def subtract_months(day: date, months: int) -> date:
    """First day of the month `months` before the month of `day`."""
    index = day.year * 12 + (day.month - 1) - months
    return date(index // 12, index % 12 + 1, 1)


def synthesize_start(disclosure: RawDisclosure) -> date:
    """
    Estimate a period start for a disclosure that does not report one.

    Annual figures (fp "FY" or missing) are assumed to start 11 months before
    the first of the end month, everything else 2 months before it.
    """
    if disclosure.start is not None:
        return disclosure.start
    months = 11 if disclosure.fp in (None, "FY") else 2
    return subtract_months(disclosure.end, months)


# ==============================================================================
# CANONICALIZATION
# ==============================================================================

def _period_key(end: date, start: date) -> str:
    return end.isoformat() + start.isoformat()


def _keyed(disclosure: RawDisclosure) -> Tuple[str, date, RawDisclosure]:
    start = synthesize_start(disclosure)
    return _period_key(disclosure.end, start), start, disclosure


def canonicalize(disclosures, rank: Optional[int] = None) -> List[CanonicalRecord]:
    """
    Reduce raw disclosures of one concept to a canonical, ordered series.

    Disclosures sharing an (end, start) period collapse to the latest filed
    one; on equal filing dates the one seen last wins. Records are ranked by
    period length, optionally filtered to a single rank, and sorted by rank
    and then end date.

    Args:
        disclosures: Iterable of RawDisclosure
        rank: Keep only records of this rank (1-4)

    Returns:
        List of CanonicalRecord
    """
    # Stable sort by filing date: later entries overwrite earlier ones per key,
    # so the latest filed wins and equal dates keep input order
    keyed = sorted(map(_keyed, disclosures), key=lambda item: item[2].filed)
    winners = {key: (start, disclosure) for key, start, disclosure in keyed}

    records = [
        CanonicalRecord(
            start=start,
            end=disclosure.end,
            val=disclosure.val,
            rank=classify_period(period_days(disclosure.end, start)),
            filed=disclosure.filed,
        )
        for start, disclosure in winners.values()
    ]

    if rank is not None:
        records = [r for r in records if r.rank == rank]

    return sorted(records, key=lambda r: (r.rank, r.end))


# ==============================================================================
# CONCEPT SELECTION
# ==============================================================================

def taxonomy_concepts(companyfacts: dict) -> Dict[str, dict]:
    """Concepts of the us-gaap namespace of a companyfacts document."""
    facts = companyfacts.get("facts", {}) or {}
    return facts.get(TAXONOMY, {}) or {}


def concept_unit(concept: dict, units=ALLOWED_UNITS) -> Tuple[Optional[str], List[dict]]:
    """
    First allowed unit (in priority order) under which a concept has data.

    Returns:
        (unit name, raw rows), or (None, []) if no allowed unit has data
    """
    available = concept.get("units", {}) or {}
    for unit in units:
        rows = available.get(unit) or []
        if rows:
            return unit, rows
    return None, []


def select_concepts(concepts: Dict[str, dict], pattern, units=ALLOWED_UNITS) -> List[str]:
    """
    Names of concepts matching a pattern that have data in an allowed unit.

    Args:
        concepts: Concept name -> {'label', 'units'} mapping
        pattern: Regular expression (str or compiled); strings match case-insensitively
        units: Allowed unit names

    Returns:
        Sorted list of concept names
    """
    if isinstance(pattern, str):
        pattern = re.compile(pattern, re.IGNORECASE)

    selected = sorted(
        name for name, concept in concepts.items()
        if concept_unit(concept, units)[0] is not None and pattern.search(name)
    )
    logger.debug("pattern %r matched %d concept(s)", pattern.pattern, len(selected))
    return selected


def concept_disclosures(concept: dict, units=ALLOWED_UNITS) -> Tuple[Optional[str], List[RawDisclosure]]:
    """Parse the rows of a concept's preferred unit into RawDisclosure objects."""
    unit, rows = concept_unit(concept, units)
    return unit, [RawDisclosure.from_dict(row) for row in rows]


# ==============================================================================
# DATA FORMATTING
# ==============================================================================

def format_series(records: List[CanonicalRecord]) -> str:
    """Newline-joined "<val> <start> <end>" lines; empty string for no records."""
    return "\n".join(r.to_line() for r in records)


def records_to_frame(records: List[CanonicalRecord]) -> pd.DataFrame:
    """Convert canonical records to a DataFrame (val, start, end, rank, filed)."""
    columns = ["val", "start", "end", "rank", "filed"]
    if not records:
        return pd.DataFrame(columns=columns)
    return pd.DataFrame(
        [
            {
                "val": r.val,
                "start": r.start.isoformat(),
                "end": r.end.isoformat(),
                "rank": r.rank,
                "filed": r.filed.isoformat(),
            }
            for r in records
        ],
        columns=columns,
    )
