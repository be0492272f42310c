from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Callable, Sequence

from fintrack.domain.quote import LOCAL_CURRENCY, PriceQuote, utc_now
from fintrack.providers.http import DEFAULT_HEADERS, FetchText


log = logging.getLogger(__name__)

_NUM = r"([0-9][0-9,]*(?:\.[0-9]+)?)"

# Pages above this raw value are assumed to quote agorot (1/100 ILS).
MINOR_UNIT_THRESHOLD = Decimal("100")

# Most specific first.
FUNDER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r'"(?:lastRate|LastRate|last_rate)"\s*:\s*"?' + _NUM),
    re.compile(r"שער\s*אחרון[^0-9]{0,40}" + _NUM),
    re.compile(r"Last\s*Rate[^0-9]{0,40}" + _NUM, re.I),
    re.compile(r"מחיר[^0-9]{0,20}" + _NUM),
)

BIZPORTAL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r'class="num"[^>]*>\s*' + _NUM),
    re.compile(r"שער\s*(?:אחרון|נוכחי)[^0-9]{0,40}" + _NUM),
    re.compile(r"Last\s*Rate[^0-9]{0,40}" + _NUM, re.I),
    re.compile(r"שער[^0-9]{0,12}" + _NUM),
)


def _parse_number(raw: str) -> Decimal | None:
    try:
        value = Decimal(raw.replace(",", ""))
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def extract_price(
    text: str,
    patterns: Sequence[re.Pattern[str]],
    *,
    accept: Callable[[Decimal], bool] | None = None,
) -> Decimal | None:
    """
    Return the first numeric group matched by `patterns` (tried in order).

    A match whose group does not parse, or that `accept` rejects, counts as
    no match and the next pattern is tried. No I/O here.
    """
    for pattern in patterns:
        m = pattern.search(text)
        if m is None:
            continue
        value = _parse_number(m.group(1))
        if value is None:
            continue
        if accept is not None and not accept(value):
            log.debug("pattern %s matched out-of-bound value %s", pattern.pattern, value)
            continue
        return value
    return None


def normalize_minor_unit(value: Decimal) -> Decimal:
    # heuristique: au-dessus de 100 la page affiche des agorot
    if value > MINOR_UNIT_THRESHOLD:
        return value / 100
    return value


class HtmlPriceScraper:
    def __init__(
        self,
        *,
        name: str,
        url_template: str,
        patterns: Sequence[re.Pattern[str]],
        fetch_text: FetchText,
        upper_bound: Decimal | None = None,
    ) -> None:
        self.name = name
        self._url_template = url_template
        self._patterns = tuple(patterns)
        self._fetch_text = fetch_text
        self._upper_bound = upper_bound

    def __call__(self, security_number: str) -> PriceQuote | None:
        return self.fetch(security_number)

    def _in_bounds(self, value: Decimal) -> bool:
        if self._upper_bound is None:
            return True
        return Decimal(0) < value < self._upper_bound

    def fetch(self, security_number: str) -> PriceQuote | None:
        url = self._url_template.format(security_number=security_number)
        try:
            page = self._fetch_text(url, DEFAULT_HEADERS)
        except Exception as e:
            log.warning("%s failed for %s: %s", self.name, security_number, e)
            return None

        raw = extract_price(page, self._patterns, accept=self._in_bounds)
        if raw is None:
            log.info("%s: no price found on page for %s", self.name, security_number)
            return None

        return PriceQuote(
            symbol=security_number,
            price=normalize_minor_unit(raw),
            currency=LOCAL_CURRENCY,
            name=security_number,
            fetched_at=utc_now(),
            source=self.name,
        )


def funder_scraper(fetch_text: FetchText) -> HtmlPriceScraper:
    return HtmlPriceScraper(
        name="funder",
        url_template="https://www.funder.co.il/fund/{security_number}",
        patterns=FUNDER_PATTERNS,
        fetch_text=fetch_text,
    )


def bizportal_scraper(fetch_text: FetchText) -> HtmlPriceScraper:
    return HtmlPriceScraper(
        name="bizportal",
        url_template="https://www.bizportal.co.il/tradedfund/quote/generalview/{security_number}",
        patterns=BIZPORTAL_PATTERNS,
        fetch_text=fetch_text,
        upper_bound=Decimal("10000"),
    )
