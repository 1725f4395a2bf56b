"""
Impact Engine - Coarse Location Classifier

Decides whether an impact lands in one of the three major ocean basins and
gives a rough distance to the nearest coast. This is an approximation layer
built from latitude/longitude boxes; it does no network or raster lookups.
Hosts that have real bathymetry can pass their own LocationContext to
calculate_impact instead.
"""

import logging
import math
from collections import namedtuple

from impact_engine.schemas import LocationContext

logger = logging.getLogger(__name__)

# Open bounds are strict: a point exactly on a box edge is outside the box.
OceanBox = namedtuple("OceanBox", ["lng_min", "lng_max", "lat_min", "lat_max"])

# Coast distance (km) = base_km + |lat - reference_lat| * km_per_degree
CoastEstimate = namedtuple("CoastEstimate", ["base_km", "reference_lat", "km_per_degree"])

OceanRegion = namedtuple("OceanRegion", ["name", "boxes", "coast"])

OCEAN_REGIONS = [
    OceanRegion(
        "pacific",
        (OceanBox(120.0, 180.0, -math.inf, math.inf),
         OceanBox(-180.0, -100.0, -math.inf, math.inf)),
        CoastEstimate(800.0, 0.0, 10.0),
    ),
    OceanRegion(
        "atlantic",
        (OceanBox(-70.0, -10.0, -60.0, 70.0),),
        CoastEstimate(400.0, 30.0, 5.0),
    ),
    OceanRegion(
        "indian",
        (OceanBox(40.0, 120.0, -60.0, 30.0),),
        CoastEstimate(500.0, -20.0, 8.0),
    ),
]

# Near-coast or landlocked default
DEFAULT_COAST_ESTIMATE = CoastEstimate(100.0, 0.0, 3.0)


def _in_box(box, lat, lng):
    return box.lng_min < lng < box.lng_max and box.lat_min < lat < box.lat_max


def find_ocean_region(lat, lng):
    """Return the first OceanRegion containing the point, or None on land."""
    for region in OCEAN_REGIONS:
        if any(_in_box(box, lat, lng) for box in region.boxes):
            return region
    return None


def is_ocean_impact(lat, lng):
    """True when the coordinates fall inside the Pacific, Atlantic or Indian Ocean boxes."""
    return find_ocean_region(lat, lng) is not None


def estimate_distance_to_coast(lat, lng):
    """
    Rough distance (km) from the impact point to the nearest coastline.

    Each basin has its own linear estimate in latitude; outside the basins a
    short near-coast distance is assumed. Only used to bound tsunami arrival
    time, never as a geographic measurement.
    """
    region = find_ocean_region(lat, lng)
    coast = region.coast if region is not None else DEFAULT_COAST_ESTIMATE
    return coast.base_km + abs(lat - coast.reference_lat) * coast.km_per_degree


def classify_location(lat, lng):
    """Built-in LocationContext for a point."""
    region = find_ocean_region(lat, lng)
    distance = estimate_distance_to_coast(lat, lng)
    logger.debug("Location (%.4f, %.4f) classified as %s, coast ~%.0f km",
                 lat, lng, region.name if region else "land", distance)
    return LocationContext(is_ocean=region is not None, distance_to_coast_km=distance)
