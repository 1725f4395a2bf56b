"""
Impact Engine - Map Utility Functions

Geodesic coordinates for circular hazard zones around an impact point,
accounting for Earth's curvature, antimeridian crossings and polar regions.
Coordinates are [longitude, latitude] pairs, the GeoJSON order.
"""

import logging
from math import sin, cos, asin, radians, degrees, atan2

from impact_engine.utils import R_EARTH_KM

logger = logging.getLogger(__name__)

POLAR_LATITUDE = 85
MAX_POLAR_RADIUS_FRACTION = 0.95


def normalize_longitude(lon):
    """Wrap a longitude into [-180, 180]."""
    while lon > 180:
        lon -= 360
    while lon < -180:
        lon += 360
    return lon


def destination_point(center_lat, center_lon, angular_distance, bearing_deg):
    """
    Point reached from the center along a great circle.

    lat2 = asin(sin(lat1) * cos(d/R) + cos(lat1) * sin(d/R) * cos(bearing))
    lon2 = lon1 + atan2(sin(bearing) * sin(d/R) * cos(lat1), cos(d/R) - sin(lat1) * sin(lat2))

    Args:
        center_lat (float): Start latitude in degrees
        center_lon (float): Start longitude in degrees
        angular_distance (float): Distance divided by Earth's radius, in radians
        bearing_deg (float): Azimuth in degrees clockwise from north

    Returns:
        tuple: (lon, lat) in degrees, longitude not yet normalized
    """
    bearing = radians(bearing_deg)
    lat1 = radians(center_lat)
    lon1 = radians(center_lon)

    lat2 = asin(sin(lat1) * cos(angular_distance) +
                cos(lat1) * sin(angular_distance) * cos(bearing))

    if abs(cos(lat2)) < 1e-10:
        lon2 = lon1  # longitude is undefined at the pole
    else:
        lon2 = lon1 + atan2(sin(bearing) * sin(angular_distance) * cos(lat1),
                            cos(angular_distance) - sin(lat1) * sin(lat2))

    return degrees(lon2), degrees(lat2)


def _close_ring(ring):
    if ring and ring[0] != ring[-1]:
        ring.append(list(ring[0]))
    # A valid linear ring needs at least 4 points including the closure
    return ring if len(ring) >= 4 else []


def _as_multi(*rings):
    return [ring for ring in (_close_ring(r) for r in rings) if ring]


def create_circle_coordinates(center_lat, center_lon, radius_km, points=72):
    """
    Coordinates of a circle of radius_km around the center on Earth's surface.

    Args:
        center_lat (float): Latitude of the center (-90 to 90)
        center_lon (float): Longitude of the center (-180 to 180)
        radius_km (float): Circle radius in kilometers
        points (int): Perimeter points; 72 gives one every 5 degrees of bearing

    Returns:
        list: A single closed ring of [lon, lat] pairs for ordinary circles,
        a list of two rings when the circle crosses the antimeridian, or []
        when no circle can be drawn (radius <= 0).
    """
    if radius_km <= 0:
        return []

    center_lat = max(-90, min(90, center_lat))

    if abs(center_lat) > POLAR_LATITUDE or contains_pole(center_lat, radius_km):
        logger.debug("Using pole-aware circle generation for latitude %s", center_lat)
        return create_polar_circle_coordinates(center_lat, center_lon, radius_km, points)

    return _great_circle_rings(center_lat, center_lon, radius_km, points)


def contains_pole(center_lat, radius_km):
    """True when the circle reaches over the nearer pole."""
    return degrees(radius_km / R_EARTH_KM) >= 90 - abs(center_lat)


def antimeridian_crossing_latitude(prev_lon, prev_lat, lon, lat):
    """Latitude where the segment from (prev_lon, prev_lat) to (lon, lat) meets +/-180."""
    if prev_lon > 0:
        # Eastward: prev_lon -> 180 == -180 -> lon
        before, after = 180 - prev_lon, 180 + lon
    else:
        before, after = 180 + prev_lon, 180 - lon
    t = before / (before + after) if before + after else 0.0
    return prev_lat + t * (lat - prev_lat)


def _great_circle_rings(center_lat, center_lon, radius_km, points):
    angular_distance = radius_km / R_EARTH_KM

    perimeter = []
    for i in range(points + 1):
        lon, lat = destination_point(center_lat, center_lon, angular_distance, i * 360 / points)
        perimeter.append([normalize_longitude(lon), lat])

    east = []
    west = []
    crossings = 0
    previous = None
    for lon, lat in perimeter:
        if previous is not None and abs(previous[0] - lon) > 180:
            crossings += 1
            # Both halves run along the antimeridian between their crossings
            crossing_lat = antimeridian_crossing_latitude(previous[0], previous[1], lon, lat)
            east.append([180, crossing_lat])
            west.append([-180, crossing_lat])
        (east if lon >= 0 else west).append([lon, lat])
        previous = (lon, lat)

    if crossings:
        logger.debug("Circle at (%s, %s) crosses the antimeridian %d times",
                     center_lat, center_lon, crossings)
        return _as_multi(east, west)

    return _close_ring(perimeter)


def create_polar_circle_coordinates(center_lat, center_lon, radius_km, points=72):
    """
    Circle coordinates for centers near a pole.

    A circle that stays clear of the pole is drawn the ordinary way. One that
    covers the pole becomes a polar cap: its perimeter sorted by longitude and
    closed along the pole, which is how such a zone looks on a flat map.
    Circles too large to draw meaningfully return [].
    """
    if radius_km > MAX_POLAR_RADIUS_FRACTION * R_EARTH_KM:
        logger.warning("Polar circle radius %s km exceeds %d%% of Earth's radius, skipping",
                       radius_km, int(MAX_POLAR_RADIUS_FRACTION * 100))
        return []

    is_north = center_lat > 0

    # Stay clear of the singularity at the exact pole
    if abs(abs(center_lat) - 90) < 0.1:
        center_lat = 89.9 if is_north else -89.9

    if not contains_pole(center_lat, radius_km):
        return _great_circle_rings(center_lat, center_lon, radius_km, points)

    logger.debug("Polar cap: center=%s, radius=%skm", center_lat, radius_km)

    angular_distance = radius_km / R_EARTH_KM
    perimeter = []
    for i in range(points):
        lon, lat = destination_point(center_lat, center_lon, angular_distance, i * 360 / points)
        perimeter.append([normalize_longitude(lon), lat])
    perimeter.sort(key=lambda point: point[0])

    pole_lat = 90 if is_north else -90
    # Pin the perimeter to both map edges so the cap spans every longitude
    west_edge = [-180, perimeter[0][1]]
    east_edge = [180, perimeter[-1][1]]
    ring = [west_edge] + perimeter + [east_edge, [180, pole_lat], [-180, pole_lat]]
    return _close_ring(ring)


def is_multi_ring(coordinates):
    """True when create_circle_coordinates returned several rings."""
    return bool(coordinates) and isinstance(coordinates[0][0], list)
