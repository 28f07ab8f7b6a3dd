"""
Shared SEC EDGAR utilities for factplot

This package provides the data access layer used by the collectors:
- sec_client: SEC EDGAR XBRL API client (company facts, ticker directory)
- cache_manager: Staleness-keyed JSON response cache
- company_directory: Ticker / name / CIK resolution

Usage:
    from secfacts import SECClient, SECConfig, resolve_company
"""

__version__ = "1.0.0"

# Export commonly used names
from .sec_client import SECClient, SECConfig, SECQueryError, format_cik
from .cache_manager import ResponseCache
from .company_directory import CompanyEntry, Resolution, parse_company_directory, resolve_company

__all__ = [
    'SECClient',
    'SECConfig',
    'SECQueryError',
    'format_cik',
    'ResponseCache',
    'CompanyEntry',
    'Resolution',
    'parse_company_directory',
    'resolve_company',
]
