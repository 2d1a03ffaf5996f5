"""Country lookup for map locations.

A lookup answers "which country is at this point?" for a player's map
selection. It returns None over open water or unmapped territory, which
the game treats as no country claim.

Two lookups are available:

- ``BoundaryCountryLookup`` tests the point against country polygons from a
  GeoJSON FeatureCollection (for example a Natural Earth or world.geo.json
  export with the country name in ``properties.name``).
- ``ReverseGeocoderLookup`` finds the nearest populated place in the GeoNames
  data shipped with ``reverse_geocoder`` and names its country with
  ``pycountry``. Points far from any populated place count as open water.
"""

import json
import logging
from collections.abc import Callable, Sequence
from functools import partial
from pathlib import Path
from typing import Any, Optional, Protocol

import pycountry
from shapely.errors import ShapelyError
from shapely.geometry import Point, shape
from shapely.prepared import prep

from config import Config
from models import Coordinates
from utils.exceptions import BoundaryDataUnavailableError
from utils.geo import distance_km

logger = logging.getLogger(__name__)


class CountryLookup(Protocol):
    def country_at(self, location: Coordinates) -> Optional[str]:
        ...


def country_name(code: str) -> Optional[str]:
    """Display name for an ISO 3166 alpha-2 code, or None if unknown."""
    country = pycountry.countries.get(alpha_2=code.upper())
    if country is None:
        return None
    return getattr(country, "common_name", None) or country.name


class BoundaryCountryLookup:
    """Point-in-polygon lookup over GeoJSON country features."""

    def __init__(self, features: Sequence[dict[str, Any]], name_property: str = "name"):
        self._countries = [
            (feature["properties"][name_property], prep(shape(feature["geometry"])))
            for feature in features
        ]

    @classmethod
    def from_file(cls, path: str | Path, name_property: str = "name") -> "BoundaryCountryLookup":
        """Load country boundaries from a GeoJSON FeatureCollection file."""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            lookup = cls(data["features"], name_property=name_property)
        except OSError as e:
            raise BoundaryDataUnavailableError(f"can't read {path}: {e}") from e
        except (ValueError, KeyError, TypeError, ShapelyError) as e:
            raise BoundaryDataUnavailableError(f"invalid boundary data in {path}: {e!r}") from e

        logger.info(f"Loaded {len(lookup)} country boundaries from {path}")
        return lookup

    def __len__(self) -> int:
        return len(self._countries)

    def country_at(self, location: Coordinates) -> Optional[str]:
        # GeoJSON positions are (lng, lat)
        point = Point(location.lng, location.lat)
        for name, boundary in self._countries:
            if boundary.covers(point):
                return name
        return None


class ReverseGeocoderLookup:
    """Country of the nearest populated place, within a search radius."""

    def __init__(
        self,
        max_distance_km: Optional[float] = None,
        search: Optional[Callable[[list[tuple[float, float]]], list[dict[str, Any]]]] = None,
    ):
        self.max_distance_km = (
            max_distance_km if max_distance_km is not None else Config.COUNTRY_LOOKUP_RADIUS_KM
        )
        self._search = search

    def _nearest_place(self, location: Coordinates) -> dict[str, Any]:
        if self._search is None:
            # Building the GeoNames index takes a few seconds, so it waits for the first guess
            import reverse_geocoder

            self._search = partial(reverse_geocoder.search, mode=1, verbose=False)
        return self._search([(location.lat, location.lng)])[0]

    def country_at(self, location: Coordinates) -> Optional[str]:
        place = self._nearest_place(location)
        distance = distance_km(location, (float(place["lat"]), float(place["lon"])))
        if distance > self.max_distance_km:
            logger.debug(f"Nearest place to {location.lat},{location.lng} is {distance:.0f} km away")
            return None
        return country_name(place["cc"])


def build_country_lookup(boundaries_path: Optional[str | Path] = None) -> CountryLookup:
    """Use boundary polygons when a file is configured, the reverse geocoder otherwise."""
    boundaries_path = boundaries_path or Config.BOUNDARIES_PATH
    if boundaries_path:
        return BoundaryCountryLookup.from_file(boundaries_path)
    logger.info("No boundary file configured; using reverse geocoding for country lookup")
    return ReverseGeocoderLookup()
