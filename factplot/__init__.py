"""
factplot: SEC XBRL concept history as a gnuplot time series.

Usage:
    from factplot import canonicalize, select_concepts
"""

__version__ = "1.0.0"

from .utils import (
    ALLOWED_UNITS,
    CanonicalRecord,
    NoConceptsFound,
    RawDisclosure,
    canonicalize,
    classify_period,
    format_series,
    select_concepts,
)

__all__ = [
    'ALLOWED_UNITS',
    'CanonicalRecord',
    'NoConceptsFound',
    'RawDisclosure',
    'canonicalize',
    'classify_period',
    'format_series',
    'select_concepts',
]
