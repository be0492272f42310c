from __future__ import annotations

import logging
from typing import Callable, Sequence

from fintrack.domain.quote import PriceQuote
from fintrack.domain.symbol import SymbolKind, classify_symbol, suffix_candidates


log = logging.getLogger(__name__)

# Every price source shares this shape: identifier -> quote, or None when unresolved.
Provider = Callable[[str], PriceQuote | None]


def first_success(providers: Sequence[Provider]) -> Provider:
    """
    Compose providers into one: try them in order, first non-None quote wins.
    A provider that raises counts as a failure and the next one is tried.
    """
    chain = tuple(providers)

    def resolve(identifier: str) -> PriceQuote | None:
        for provider in chain:
            try:
                quote = provider(identifier)
            except Exception:
                log.warning("provider %r raised for %s", provider, identifier, exc_info=True)
                continue
            if quote is not None:
                return quote
        return None

    return resolve


class PriceResolver:
    def __init__(self, *, local_chain: Provider, market_data: Provider) -> None:
        self._local_chain = first_success([local_chain])
        self._market_data = first_success([market_data])

    def resolve(self, identifier: str) -> PriceQuote | None:
        try:
            kind = classify_symbol(identifier)
        except ValueError:
            log.warning("skipping invalid identifier %r", identifier)
            return None

        if kind is SymbolKind.LOCAL:
            return self._local_chain(identifier)

        if kind is SymbolKind.QUALIFIED:
            return self._market_data(identifier)

        for candidate in suffix_candidates(identifier):
            quote = self._market_data(candidate)
            if quote is not None:
                if candidate != identifier:
                    log.info("%s resolved as %s", identifier, candidate)
                return quote
        return None

    __call__ = resolve
