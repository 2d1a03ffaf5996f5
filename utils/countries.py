"""Country name matching across naming variants.

Map boundary data rarely uses the same country names as the equipment
catalog ("Russian Federation" vs "Russia"), so a selection matches an origin
when it equals, contains, or is contained in any alias of that origin.
Matching is case-insensitive but otherwise literal: diacritics must agree.
"""

from collections.abc import Mapping, Sequence
from typing import Optional

COUNTRY_ALIASES: dict[str, tuple[str, ...]] = {
    "United States": ("United States of America", "USA", "United States", "US"),
    "United Kingdom": ("United Kingdom", "Great Britain", "UK", "Britain"),
    "Russia": ("Russian Federation", "Russia"),
    "Turkey": ("Turkey", "Türkiye", "Republic of Turkey"),
    "Israel": ("Israel", "State of Israel"),
    "France": ("France", "French Republic"),
    "Germany": ("Germany", "Federal Republic of Germany"),
    "Sweden": ("Sweden", "Kingdom of Sweden"),
    "China": ("China", "People's Republic of China"),
    "India": ("India", "Republic of India"),
}


class CountryMatcher:
    """Resolves whether a selected country label names a canonical origin."""

    def __init__(self, aliases: Mapping[str, Sequence[str]] | None = None):
        self.aliases = dict(COUNTRY_ALIASES if aliases is None else aliases)

    def aliases_for(self, canonical_origin: str) -> Sequence[str]:
        """Return the alias set for an origin, or the origin itself if unregistered."""
        return self.aliases.get(canonical_origin) or (canonical_origin,)

    def is_match(self, selected_label: Optional[str], canonical_origin: str) -> bool:
        if not selected_label:
            return False

        selected = selected_label.lower()
        for alias in self.aliases_for(canonical_origin):
            alias = alias.lower()
            if selected == alias or alias in selected or selected in alias:
                return True
        return False


default_matcher = CountryMatcher()


def is_country_match(selected_label: Optional[str], canonical_origin: str) -> bool:
    """Check a selection against an origin using the built-in alias table."""
    return default_matcher.is_match(selected_label, canonical_origin)
