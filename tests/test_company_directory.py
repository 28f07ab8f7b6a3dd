import re

import pytest

from secfacts.company_directory import (
    AMBIGUOUS,
    NOT_FOUND,
    RESOLVED,
    CompanyEntry,
    is_cik,
    parse_company_directory,
    resolve_company,
)


@pytest.fixture
def directory(company_tickers):
    return parse_company_directory(company_tickers)


def test_parse_company_directory_pads_cik(directory):
    assert directory[0] == CompanyEntry(cik="0000320193", ticker="AAPL", title="Apple Inc.")
    assert len(directory) == 4


def test_numeric_query_skips_lookup():
    resolution = resolve_company("320193", [])
    assert resolution.status == RESOLVED
    assert resolution.cik == "0000320193"


def test_exact_ticker_match(directory):
    resolution = resolve_company("GOOG", directory)
    assert resolution.status == RESOLVED
    assert resolution.cik == "0001652044"
    assert resolution.matches[0].ticker == "GOOG"


def test_ticker_match_is_case_sensitive(directory):
    # "msft" is not a ticker, but it does not match any title either
    assert resolve_company("msft", directory).status == NOT_FOUND


def test_title_match_is_case_insensitive(directory):
    resolution = resolve_company("microsoft", directory)
    assert resolution.status == RESOLVED
    assert resolution.cik == "0000789019"


def test_title_match_accepts_regex(directory):
    assert resolve_company("^app", directory).cik == "0000320193"


def test_ambiguous_title_lists_all_matches(directory):
    resolution = resolve_company("alphabet", directory)
    assert resolution.status == AMBIGUOUS
    assert resolution.cik is None
    assert [e.ticker for e in resolution.matches] == ["GOOGL", "GOOG"]


def test_not_found(directory):
    resolution = resolve_company("no such company", directory)
    assert resolution.status == NOT_FOUND
    assert resolution.matches == []


def test_invalid_regex_raises(directory):
    with pytest.raises(re.error):
        resolve_company("(unclosed", directory)


def test_non_ascii_digits_are_not_a_cik(directory):
    assert not is_cik("²")
    assert is_cik("0000320193")
    assert resolve_company("²", directory).status == NOT_FOUND
