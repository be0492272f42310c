from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from fintrack.domain.quote import LOCAL_CURRENCY, PriceQuote, utc_now
from fintrack.providers.http import DEFAULT_HEADERS, FetchJson


log = logging.getLogger(__name__)


class TaseSecurityProvider:
    """Structured security-data endpoint of the Tel Aviv Stock Exchange."""

    URL = "https://api.tase.co.il/api/security/{security_number}/data"
    SOURCE = "tase"

    def __init__(self, *, fetch_json: FetchJson) -> None:
        self._fetch_json = fetch_json
        self._headers = DEFAULT_HEADERS | {"Accept": "application/json"}

    def __call__(self, security_number: str) -> PriceQuote | None:
        return self.fetch(security_number)

    def fetch(self, security_number: str) -> PriceQuote | None:
        url = self.URL.format(security_number=security_number)
        try:
            data = self._fetch_json(url, self._headers)
        except Exception as e:
            log.warning("TASE failed for %s: %s", security_number, e)
            return None

        if not isinstance(data, dict) or data.get("LastRate") is None:
            log.info("TASE returned no LastRate for %s", security_number)
            return None

        try:
            price = Decimal(str(data["LastRate"]).replace(",", ""))
        except InvalidOperation:
            price = None
        if price is None or not price.is_finite():
            log.warning("TASE returned a non-numeric LastRate for %s: %r", security_number, data["LastRate"])
            return None

        name = data.get("SecurityName")
        if not isinstance(name, str) or not name.strip():
            name = security_number

        return PriceQuote(
            symbol=security_number,
            price=price,
            currency=LOCAL_CURRENCY,
            name=name.strip(),
            fetched_at=utc_now(),
            source=self.SOURCE,
        )
