from __future__ import annotations

import re
from enum import Enum


_LOCAL_RE = re.compile(r"^\d+$")

# Tried in this order after the bare symbol fails.
FALLBACK_SUFFIXES: tuple[str, ...] = (".L", ".DE", ".TA")


class SymbolKind(str, Enum):
    LOCAL = "LOCAL"          # numéro de valeur TASE, ex: "1159250"
    QUALIFIED = "QUALIFIED"  # ticker avec suffixe de place, ex: "AAPL.L"
    BARE = "BARE"            # ticker nu, ex: "AAPL"


def classify_symbol(identifier: str) -> SymbolKind:
    """
    Purely lexical classification of a security identifier.
    All digits -> LOCAL, contains a dot -> QUALIFIED, otherwise BARE.
    """
    if not isinstance(identifier, str) or not identifier.strip():
        raise ValueError("identifier must be a non-empty string")

    if _LOCAL_RE.match(identifier):
        return SymbolKind.LOCAL
    if "." in identifier:
        return SymbolKind.QUALIFIED
    return SymbolKind.BARE


def suffix_candidates(identifier: str) -> list[str]:
    return [identifier] + [identifier + suffix for suffix in FALLBACK_SUFFIXES]
