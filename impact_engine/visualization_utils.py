"""
Impact Engine - Visualization Utilities

Prepares map-ready geometry for every hazard radius of an impact result.
Nothing here computes a radius: each zone is drawn from a value already held
by ComprehensiveImpactResults, so a renderer and the numeric report always
agree.
"""

import logging

from shapely.geometry import MultiPolygon, Polygon, mapping
from shapely.validation import make_valid

from impact_engine.map_utils import create_circle_coordinates, is_multi_ring

logger = logging.getLogger(__name__)

ZONE_TYPES = ['crater', 'thermal', 'airblast', 'wind', 'seismic']


def zone_radii(results):
    """
    (zone type, zone key, radius in km, description) for every drawable radius.

    Ordered from the largest effect to the smallest within each type so that
    renderers can paint them in sequence.
    """
    crater = results.crater
    fireball = results.fireball
    shock_wave = results.shock_wave
    wind_blast = results.wind_blast

    return [
        ('crater', 'crater', crater.diameter_km / 2.0, "Crater rim"),

        ('thermal', 'trees_ignite', fireball.trees_ignite_radius.km, "Trees ignite"),
        ('thermal', 'clothes_ignite', fireball.clothes_ignite_radius.km, "Clothes ignite"),
        ('thermal', 'second_degree_burns', fireball.second_degree_burn_radius.km,
         "Second degree burns"),
        ('thermal', 'third_degree_burns', fireball.third_degree_burn_radius.km,
         "Third degree burns"),
        ('thermal', 'fireball', fireball.radius.km, "Fireball"),

        ('airblast', 'eardrum_rupture', shock_wave.eardrum_rupture_radius.km, "Eardrum rupture"),
        ('airblast', 'lung_damage', shock_wave.lung_damage_radius.km, "Lung damage"),
        ('airblast', 'homes_collapse', shock_wave.homes_collapse_radius.km, "Homes collapse"),
        ('airblast', 'buildings_collapse', shock_wave.buildings_collapse_radius.km,
         "Buildings collapse"),

        ('wind', 'trees_knocked_down', wind_blast.trees_knocked_down_radius.km,
         "Trees knocked down"),
        ('wind', 'ef5_tornado', wind_blast.ef5_tornado_radius.km, "EF5 tornado winds"),
        ('wind', 'completely_leveled', wind_blast.completely_leveled_radius.km,
         "Homes completely leveled"),
        ('wind', 'jupiter_storm', wind_blast.jupiter_storm_radius.km,
         "Winds faster than Jupiter storms"),

        ('seismic', 'felt', results.earthquake.felt_radius.km, "Earthquake felt"),
    ]


def circle_geometry(coordinates):
    """Shapely geometry for the output of create_circle_coordinates."""
    if is_multi_ring(coordinates):
        geometry = MultiPolygon([Polygon(ring) for ring in coordinates])
    else:
        geometry = Polygon(coordinates)

    if not geometry.is_valid:
        geometry = make_valid(geometry)
    return geometry


def create_zone_feature(lat, lon, zone_type, key, radius_km, description, points=72):
    """
    GeoJSON Feature for a single hazard circle, or None when nothing can be drawn.

    Args:
        lat, lon (float): Impact point
        zone_type (str): One of ZONE_TYPES
        key (str): Zone identifier within its type
        radius_km (float): Zone radius
        description (str): Human-readable label
        points (int): Perimeter resolution

    Returns:
        dict: Feature with the geometry and zone properties
    """
    coordinates = create_circle_coordinates(lat, lon, radius_km, points)
    if not coordinates:
        return None

    geometry = circle_geometry(coordinates)
    if geometry.is_empty:
        logger.warning("Empty geometry for %s zone '%s' (%.3f km)", zone_type, key, radius_km)
        return None

    return {
        'type': 'Feature',
        'geometry': mapping(geometry),
        'properties': {
            'zone_type': zone_type,
            'zone': key,
            'description': description,
            'radius_km': radius_km,
        },
    }


def generate_visualization_data(lat, lon, results, points=72):
    """
    Map-ready hazard zones for one impact.

    Args:
        lat, lon (float): Impact point
        results (ComprehensiveImpactResults): Computed impact
        points (int): Perimeter resolution for every circle

    Returns:
        dict: One list of features per zone type plus a 'feature_collection'
        holding every feature, ready to hand to a GeoJSON layer
    """
    visualization = {zone_type: [] for zone_type in ZONE_TYPES}

    for zone_type, key, radius_km, description in zone_radii(results):
        feature = create_zone_feature(lat, lon, zone_type, key, radius_km, description, points)
        if feature is not None:
            visualization[zone_type].append(feature)

    features = [feature for zone_type in ZONE_TYPES for feature in visualization[zone_type]]
    visualization['feature_collection'] = {'type': 'FeatureCollection', 'features': features}

    logger.debug("Generated %d zone features around (%s, %s)", len(features), lat, lon)
    return visualization
