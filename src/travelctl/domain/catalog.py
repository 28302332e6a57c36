"""Country catalog: display metadata keyed by ISO 3166-1 alpha-2 code.

The catalog is static reference data bundled with the package. Lookups
never fail: an unknown code yields a placeholder entry so derived views
(history, statistics, visas) can always render.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from functools import cache
from importlib import resources

from pydantic import BaseModel, ConfigDict

UNKNOWN_REGION = "Unknown"
_REGIONAL_INDICATOR_A = 0x1F1E6


def flag_for(code: str) -> str:
    """Emoji flag for a two-letter country code (regional indicator pair).

    Returns a white flag for codes that are not two ASCII letters.
    """
    letters = code.upper()
    if len(letters) != 2 or not all("A" <= ch <= "Z" for ch in letters):
        return "\N{WAVING WHITE FLAG}"
    return "".join(chr(_REGIONAL_INDICATOR_A + ord(ch) - ord("A")) for ch in letters)


class Country(BaseModel):
    """Static country metadata."""

    model_config = ConfigDict(frozen=True)

    code: str
    name: str
    region: str

    @property
    def flag(self) -> str:
        return flag_for(self.code)


def placeholder_country(code: str) -> Country:
    """Fallback metadata for a code the catalog does not know."""
    return Country(code=code, name=code, region=UNKNOWN_REGION)


class CountryCatalog:
    """Ordered, read-only collection of :class:`Country` entries."""

    def __init__(self, countries: Iterable[Country]) -> None:
        self._countries: dict[str, Country] = {}
        for country in countries:
            self._countries[country.code.upper()] = country

    def __iter__(self) -> Iterator[Country]:
        return iter(self._countries.values())

    def __len__(self) -> int:
        return len(self._countries)

    def __contains__(self, code: object) -> bool:
        return isinstance(code, str) and code.upper() in self._countries

    def get(self, code: str) -> Country:
        """Return metadata for *code*, or a placeholder if unknown."""
        return self._countries.get(code.upper()) or placeholder_country(code)

    def regions(self) -> list[str]:
        """Region names in first-seen order."""
        seen: dict[str, None] = {}
        for country in self._countries.values():
            seen.setdefault(country.region, None)
        return list(seen)


@cache
def load_catalog() -> CountryCatalog:
    """Load the bundled country catalog (cached for the process lifetime)."""
    source = resources.files("travelctl") / "data" / "countries.json"
    raw = source.read_text(encoding="utf-8")
    return CountryCatalog(Country.model_validate(entry) for entry in json.loads(raw))
