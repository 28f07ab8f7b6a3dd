import copy

import pytest

COMPANY_TICKERS = {
    "0": {"cik_str": 320193, "ticker": "AAPL", "title": "Apple Inc."},
    "1": {"cik_str": 789019, "ticker": "MSFT", "title": "MICROSOFT CORP"},
    "2": {"cik_str": 1652044, "ticker": "GOOGL", "title": "Alphabet Inc."},
    "3": {"cik_str": 1652044, "ticker": "GOOG", "title": "Alphabet Inc."},
}

COMPANY_FACTS = {
    "cik": 320193,
    "entityName": "Apple Inc.",
    "facts": {
        "dei": {
            "EntityCommonStockSharesOutstanding": {
                "label": "Entity Common Stock, Shares Outstanding",
                "units": {"shares": [
                    {"end": "2021-10-15", "val": 16406397000, "fp": "FY", "form": "10-K", "filed": "2021-10-29"},
                ]},
            },
        },
        "us-gaap": {
            "Revenues": {
                "label": "Revenues",
                "units": {"USD": [
                    {"start": "2020-09-27", "end": "2021-09-25", "val": 365000000000,
                     "fp": "FY", "form": "10-K", "filed": "2021-10-01"},
                    {"start": "2020-09-27", "end": "2021-09-25", "val": 365817000000,
                     "fp": "FY", "form": "10-K", "filed": "2021-10-29"},
                    {"start": "2021-06-27", "end": "2021-09-25", "val": 83360000000,
                     "fp": "FY", "form": "10-K", "filed": "2021-10-29"},
                    {"start": "2021-09-26", "end": "2021-12-25", "val": 123945000000,
                     "fp": "Q1", "form": "10-Q", "filed": "2022-01-28"},
                ]},
            },
            "RevenueFromContractWithCustomerExcludingAssessedTax": {
                "label": "Revenue from Contract with Customer, Excluding Assessed Tax",
                "units": {"USD": [
                    {"start": "2020-09-27", "end": "2021-09-25", "val": 365817000000,
                     "fp": "FY", "form": "10-K", "filed": "2021-10-29"},
                ]},
            },
            "EarningsPerShareDiluted": {
                "label": "Earnings Per Share, Diluted",
                "units": {"USD/shares": [
                    {"start": "2020-09-27", "end": "2021-09-25", "val": 5.61,
                     "fp": "FY", "form": "10-K", "filed": "2021-10-29"},
                ]},
            },
            "CommonStockSharesOutstanding": {
                "label": "Common Stock, Shares, Outstanding",
                "units": {"shares": [
                    {"end": "2021-09-25", "val": 16426786000, "fp": "FY", "form": "10-K", "filed": "2021-10-29"},
                ]},
            },
        },
    },
}


@pytest.fixture
def company_tickers():
    return copy.deepcopy(COMPANY_TICKERS)


@pytest.fixture
def company_facts():
    return copy.deepcopy(COMPANY_FACTS)
