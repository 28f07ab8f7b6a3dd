#!/usr/bin/env python3
"""
SEC EDGAR API Client
Handles retrieval of XBRL company facts and the company ticker directory,
with a local JSON cache in front of every request.
"""
import os
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import requests
import yaml
from dotenv import load_dotenv

from .cache_manager import DEFAULT_MAX_AGE_HOURS, ResponseCache

# Load environment variables
load_dotenv()

COMPANY_FACTS_URL = "https://data.sec.gov/api/xbrl/companyfacts/CIK{cik}.json"
COMPANY_TICKERS_URL = "https://www.sec.gov/files/company_tickers.json"


class SECQueryError(Exception):
    """Raised when the SEC API answers with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def format_cik(cik) -> str:
    """Zero-pad a CIK to the 10 digits EDGAR uses in URLs."""
    return str(int(cik)).zfill(10)


@dataclass
class SECConfig:
    """Settings for SECClient."""
    user_agent: str
    cache_dir: Path = Path("cache")
    max_age_hours: float = DEFAULT_MAX_AGE_HOURS
    rate_limit: float = 0.1
    timeout: int = 30

    @staticmethod
    def from_yaml(path: str) -> "SECConfig":
        with open(path, "r") as f:
            raw = yaml.safe_load(f) or {}
        return SECConfig.from_dict(raw)

    @staticmethod
    def from_dict(raw: dict) -> "SECConfig":
        """
        Build a config from parsed YAML and the environment.

        SEC_USER_AGENT and FACTPLOT_CACHE_DIR take precedence over the file.
        """
        sec = raw.get("sec", {}) or {}
        cache = raw.get("cache", {}) or {}

        return SECConfig(
            user_agent=os.environ.get("SEC_USER_AGENT") or sec.get("user_agent", ""),
            cache_dir=Path(os.environ.get("FACTPLOT_CACHE_DIR") or cache.get("directory", "cache")),
            max_age_hours=cache.get("max_age_hours", DEFAULT_MAX_AGE_HOURS),
            rate_limit=sec.get("rate_limit_seconds", 0.1),
            timeout=sec.get("timeout_seconds", 30),
        )


class SECClient:
    """Client for the SEC EDGAR XBRL API."""

    def __init__(self, config: SECConfig, refresh: bool = False):
        """
        Initialize SEC client.

        Args:
            config: Client settings (user agent, cache location, staleness)
            refresh: Ignore cached responses and always download
        """
        if not config.user_agent:
            raise ValueError(
                "SEC requires a User-Agent identifying the caller. Set SEC_USER_AGENT "
                "environment variable or sec.user_agent in config.yml."
            )

        self.config = config
        self.refresh = refresh
        self.cache = ResponseCache(cache_dir=config.cache_dir)
        self._last_request_time = 0
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": config.user_agent,
            "Accept": "application/json",
        })

    def _rate_limit_wait(self):
        """Enforce rate limiting between requests."""
        elapsed = time.time() - self._last_request_time
        if elapsed < self.config.rate_limit:
            time.sleep(self.config.rate_limit - elapsed)
        self._last_request_time = time.time()

    def _make_request(self, url: str, retry_on_429: bool = True) -> Dict[str, Any]:
        """
        Make a GET request to the SEC with rate limiting.

        Args:
            url: Absolute URL
            retry_on_429: Wait once and retry when rate limited

        Returns:
            JSON response as dictionary

        Raises:
            SECQueryError: On API errors
        """
        self._rate_limit_wait()

        response = self.session.get(url, timeout=self.config.timeout)
        if response.status_code == 429 and retry_on_429:
            print("[warn] SEC rate limit exceeded. Waiting 1 second...", file=sys.stderr)
            time.sleep(1)
            return self._make_request(url, retry_on_429=False)
        if response.status_code >= 400:
            raise SECQueryError(
                f"SEC API error {response.status_code} for {url}: {response.text[:200]}",
                status_code=response.status_code,
            )

        return response.json()

    def _cached_get(self, cache_name: str, url: str) -> Dict[str, Any]:
        """Serve a fresh cached response or download and cache it."""
        if not self.refresh:
            data = self.cache.load(cache_name, max_age_hours=self.config.max_age_hours)
            if data is not None:
                return data

        print(f"[info] Downloading {url}", file=sys.stderr)
        data = self._make_request(url)
        self.cache.save(cache_name, data, source=url)
        return data

    def get_company_facts(self, cik) -> Dict[str, Any]:
        """
        Get all XBRL facts reported by a company.

        Args:
            cik: Central Index Key, padded or not

        Returns:
            companyfacts document with 'entityName' and 'facts'
        """
        cik10 = format_cik(cik)
        return self._cached_get(f"CIK{cik10}", COMPANY_FACTS_URL.format(cik=cik10))

    def get_company_tickers(self) -> Dict[str, Any]:
        """
        Get the SEC ticker directory.

        Returns:
            Mapping of row index to {'cik_str', 'ticker', 'title'}
        """
        return self._cached_get("company_tickers", COMPANY_TICKERS_URL)
