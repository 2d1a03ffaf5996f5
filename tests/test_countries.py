"""Tests for country name matching."""

from utils.countries import COUNTRY_ALIASES, CountryMatcher, is_country_match


class TestIsCountryMatch:
    def test_alias_matches_canonical(self):
        assert is_country_match("USA", "United States") is True
        assert is_country_match("United States of America", "United States") is True
        assert is_country_match("Great Britain", "United Kingdom") is True

    def test_canonical_name_matches_itself(self):
        for canonical in COUNTRY_ALIASES:
            assert is_country_match(canonical, canonical) is True

    def test_case_insensitive(self):
        assert is_country_match("france", "France") is True
        assert is_country_match("PEOPLE'S REPUBLIC OF CHINA", "China") is True

    def test_boundary_label_containing_alias(self):
        assert is_country_match("Russian Federation", "Russia") is True

    def test_alias_containing_label(self):
        # "Israel" is contained in the alias "State of Israel"
        assert is_country_match("Israel", "Israel") is True
        assert is_country_match("Republic of", "India") is True

    def test_diacritics_must_match(self):
        assert is_country_match("Türkiye", "Turkey") is True
        assert is_country_match("Turkiye", "Turkey") is False

    def test_empty_or_missing_label(self):
        assert is_country_match("", "Russia") is False
        assert is_country_match(None, "Russia") is False

    def test_different_country(self):
        assert is_country_match("Germany", "France") is False
        assert is_country_match("Sweden", "Russia") is False

    def test_unregistered_origin_uses_its_own_name(self):
        assert is_country_match("Poland", "Poland") is True
        assert is_country_match("Republic of Poland", "Poland") is True
        assert is_country_match("Hungary", "Poland") is False

    def test_short_alias_matches_inside_longer_names(self):
        # "US" is an alias of the United States and appears inside "Australia"
        assert is_country_match("Australia", "United States") is True


class TestCountryMatcher:
    def test_custom_aliases(self):
        matcher = CountryMatcher({"Czechia": ["Czechia", "Czech Republic"]})
        assert matcher.is_match("Czech Republic", "Czechia") is True
        # The default table is not consulted
        assert matcher.is_match("USA", "United States") is False

    def test_aliases_for_unregistered_origin(self):
        matcher = CountryMatcher()
        assert matcher.aliases_for("Brazil") == ("Brazil",)
        assert "Russian Federation" in matcher.aliases_for("Russia")
