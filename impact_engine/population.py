"""
Impact Engine - Offline Population Estimates

Coarse population-density estimates for callers that have no population
provider. Two sources are supported:

- a nearest populated place (name, population, distance), as returned by a
  reverse-geocoding service, mapped to a density by distance band
- bare coordinates, using a small table of major urban centres and
  continental minimum densities

Both return a PopulationContext ready to pass to calculate_impact. Neither
performs any network I/O.
"""

import logging
from collections import namedtuple

from impact_engine.schemas import NearestCity, PopulationContext
from impact_engine.utils import haversine_distance, round_half_up

logger = logging.getLogger(__name__)


# =============================================================================
# NEAREST PLACE BANDS
# =============================================================================

# (max distance km, population divisor, minimum density people/km²)
NEAREST_PLACE_BANDS = [
    (5, 10, 5000),      # urban core
    (20, 50, 1500),     # suburban
    (50, 200, 500),     # suburban/rural transition
    (100, 1000, 100),   # rural area near a city
    (200, 5000, 20),    # far from any city
]
REMOTE_DENSITY = 5


def density_near_place(population, distance_km):
    """People per km² at distance_km from a place of the given population."""
    for max_distance, divisor, minimum in NEAREST_PLACE_BANDS:
        if distance_km < max_distance:
            return max(population / divisor, minimum)
    return REMOTE_DENSITY


def estimate_from_nearest_place(name, population, distance_km):
    """
    Build a PopulationContext from the nearest populated place.

    Args:
        name (str): Place name
        population (int): Place population
        distance_km (float): Distance from the impact point to the place

    Returns:
        PopulationContext: rounded density with the place attached
    """
    density = round_half_up(density_near_place(population, distance_km))
    city = NearestCity(name=name, population=int(population),
                       distance=round_half_up(distance_km))
    logger.debug("Density %d/km2 from %s (%d people, %.1f km)",
                 density, name, population, distance_km)
    return PopulationContext(density=density, nearest_city=city)


# =============================================================================
# COORDINATE FALLBACK
# =============================================================================

UrbanCenter = namedtuple('UrbanCenter', ['name', 'lat', 'lng', 'density'])

URBAN_CENTERS = [
    UrbanCenter("Tokyo", 35.6762, 139.6503, 6000),
    UrbanCenter("Delhi", 28.7041, 77.1025, 11000),
    UrbanCenter("Shanghai", 31.2304, 121.4737, 3800),
    UrbanCenter("São Paulo", -23.5505, -46.6333, 7400),
    UrbanCenter("Mumbai", 19.076, 72.8777, 20000),
    UrbanCenter("Cairo", 30.0444, 31.2357, 19000),
    UrbanCenter("Beijing", 39.9042, 116.4074, 1300),
    UrbanCenter("New York", 40.7128, -74.006, 10700),
    UrbanCenter("Los Angeles", 34.0522, -118.2437, 3200),
    UrbanCenter("London", 51.5074, -0.1278, 5700),
    UrbanCenter("Paris", 48.8566, 2.3522, 21000),
]

DEFAULT_DENSITY = 50
GLOBAL_MIN_DENSITY = 20
POLAR_DENSITY = 1
POLAR_LATITUDE = 70

# (name, lat_min, lat_max, lng_min, lng_max, minimum density); bounds exclusive
REGIONAL_FLOORS = [
    ("North America", 20, 50, -130, -60, 35),
    ("Europe", 35, 70, -10, 40, 100),
    ("Asia", 0, 40, 60, 150, 150),
    ("Africa", -35, 40, -20, 55, 40),
    ("South America", -55, -10, -80, -30, 30),
    ("Australia", -45, -10, 110, 180, 10),
]


def _in_box(lat, lng, lat_min, lat_max, lng_min, lng_max):
    return lat_min < lat < lat_max and lng_min < lng < lng_max


def is_open_ocean(lat, lng):
    """
    Ocean test used by the density fallback.

    Stricter than the impact classifier: coastal shelves next to Asia, the
    Americas, Europe, Africa, India and Australia count as land here so that
    a coastal impact is never given an empty population.
    """
    if (120 < lng < 180) or (-180 < lng < -100):
        # Asia and the western Pacific islands
        return not _in_box(lat, lng, -10, 60, 100, 180)

    if _in_box(lat, lng, -60, 70, -70, -10):
        # The Atlantic is narrow enough that every point counts as coastal
        return False

    if _in_box(lat, lng, -60, 30, 40, 120):
        if lng < 60 and lat > -35:
            return False
        if 65 < lng < 95 and lat > 5:
            return False
        if lng > 110 and -45 < lat < -10:
            return False
        return True

    return False


def nearest_urban_density(lat, lng):
    """Density contributed by the closest urban centre, decaying with distance."""
    center = min(URBAN_CENTERS,
                 key=lambda c: haversine_distance(lat, lng, c.lat, c.lng))
    distance = haversine_distance(lat, lng, center.lat, center.lng)

    if distance < 50:
        return center.density
    elif distance < 200:
        return center.density / 2
    elif distance < 500:
        return center.density / 5
    return DEFAULT_DENSITY


def estimate_density_from_coordinates(lat, lng):
    """
    Coarse people-per-km² estimate for a coordinate pair.

    Open ocean is 0 and polar latitudes are 1. Elsewhere the nearest urban
    centre's decayed density is raised to the continental floor of the region
    containing the point.
    """
    if is_open_ocean(lat, lng):
        return 0

    if abs(lat) > POLAR_LATITUDE:
        return POLAR_DENSITY

    density = nearest_urban_density(lat, lng)
    for name, lat_min, lat_max, lng_min, lng_max, floor in REGIONAL_FLOORS:
        if _in_box(lat, lng, lat_min, lat_max, lng_min, lng_max):
            logger.debug("Density floor for %s: %d", name, floor)
            return max(density, floor)

    return max(density, GLOBAL_MIN_DENSITY)


def estimate_population(lat, lng):
    """PopulationContext from the coordinate fallback."""
    return PopulationContext(density=estimate_density_from_coordinates(lat, lng))
