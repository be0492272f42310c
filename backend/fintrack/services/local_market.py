from __future__ import annotations

from fintrack.providers.html_scraper import bizportal_scraper, funder_scraper
from fintrack.providers.http import FetchJson, FetchText
from fintrack.providers.tase_provider import TaseSecurityProvider
from fintrack.services.resolver import Provider, first_success


def build_local_market_chain(*, fetch_text: FetchText, fetch_json: FetchJson) -> Provider:
    """TASE endpoint, then Funder page, then Bizportal page."""
    return first_success(
        [
            TaseSecurityProvider(fetch_json=fetch_json),
            funder_scraper(fetch_text),
            bizportal_scraper(fetch_text),
        ]
    )
