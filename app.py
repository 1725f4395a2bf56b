"""
Impact Engine Web Application

This Flask application exposes the impact engine over HTTP JSON. It parses
the request, supplies an offline population estimate when the caller gives
none, runs the complete impact calculation and returns the numeric report,
the display sentences and map-ready hazard zones.

The HTTP layer adds no physics of its own.
"""

import logging
import math

from flask import Flask, request, jsonify

from impact_engine import (
    ImpactEngineError, ImpactParameters, InvalidParameter, LocationContext, PopulationContext,
    calculate_impact, classify_location, estimate_from_nearest_place, estimate_population,
)
from impact_engine.translation_utils import get_available_languages
from impact_engine.visualization_utils import generate_visualization_data

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(message)s')
logger = logging.getLogger(__name__)

app = Flask(__name__)


def _to_float(key, value):
    # JSON true/false would otherwise pass as 1.0/0.0
    if isinstance(value, bool):
        raise InvalidParameter(key, value, "must be a number")
    number = float(value)
    if not math.isfinite(number):
        raise InvalidParameter(key, value, "must be a finite number")
    return number


def _required_float(data, key):
    return _to_float(key, data[key])


def _optional_float(data, key, default=None):
    value = data.get(key)
    if value is None:
        return default
    return _to_float(key, value)


def _parse_population(data, lat, lon):
    """Population from the request, a nearest place, or the coordinate fallback."""
    density = _optional_float(data, 'population_density')
    if density is not None:
        return PopulationContext(density=density)

    nearest_city = data.get('nearest_city')
    if nearest_city:
        return estimate_from_nearest_place(
            str(nearest_city['name']),
            int(_to_float('population', nearest_city['population'])),
            _to_float('distance', nearest_city['distance']),
        )

    return estimate_population(lat, lon)


def _parse_location(data):
    """LocationContext override when the caller knows whether the site is ocean."""
    is_ocean = data.get('is_ocean')
    if is_ocean is None:
        return None
    if not isinstance(is_ocean, bool):
        raise InvalidParameter('is_ocean', is_ocean, "must be true or false")
    return LocationContext(
        is_ocean=is_ocean,
        distance_to_coast_km=_optional_float(data, 'distance_to_coast_km'),
    )


def _parse_language(data):
    language = data.get('language')
    if language is not None and language not in get_available_languages():
        raise InvalidParameter('language', language,
                               f"must be one of {', '.join(get_available_languages())}")
    return language


def _invalid_parameter_response(error):
    logger.info("Rejected request: %s", error)
    return jsonify({"success": False, "error": str(error), "field": error.field}), 400


@app.route('/comprehensive-impact', methods=['POST'])
def comprehensive_impact():
    """
    Runs the complete impact calculation for one event.

    Expected JSON Input:
        diameter (float): Impactor diameter in meters (> 0).
        velocity (float): Impact velocity in km/s (> 0).
        angle (float, optional): Impact angle in degrees, 0-90 (defaults to 45).
        latitude, longitude (float, optional): Impact point (defaults to 0, 0).
        asteroid_density (float, optional): kg/m³ (defaults to 3000).
        population_density (float, optional): People per km² at the site.
        nearest_city (object, optional): {name, population, distance} of the
            nearest populated place, used when population_density is absent.
        is_ocean (bool, optional): Overrides the built-in ocean classifier.
        distance_to_coast_km (float, optional): Used with is_ocean.
        language (str, optional): 'en' or 'el'.

    Returns:
        JSON: success, display_results, technical_details, location, visualization

    Raises:
        HTTP 400: If a parameter is missing, malformed or out of range.
        HTTP 500: If an internal error occurs during the calculation.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"success": False, "error": "Request body must be a JSON object."}), 400

    try:
        params = ImpactParameters(
            diameter=_required_float(data, 'diameter'),
            velocity=_required_float(data, 'velocity'),
            angle=_optional_float(data, 'angle', 45.0),
            latitude=_optional_float(data, 'latitude', 0.0),
            longitude=_optional_float(data, 'longitude', 0.0),
            asteroid_density=_optional_float(data, 'asteroid_density'),
        )
        language = _parse_language(data)
        location = _parse_location(data)
        population = _parse_population(data, params.latitude, params.longitude)
    except InvalidParameter as e:
        return _invalid_parameter_response(e)
    except KeyError as e:
        return jsonify({"success": False, "error": f"Missing required parameter: {e.args[0]}",
                        "field": e.args[0]}), 400
    except (TypeError, ValueError):
        return jsonify({"success": False,
                        "error": "Invalid input. Please provide numeric values for all parameters."}), 400

    logger.info("Impact request - Coordinates: %.6f, %.6f", params.latitude, params.longitude)
    logger.info("Parameters: D=%sm, rho=%skg/m3, v=%skm/s, angle=%s deg, density=%s/km2",
                params.diameter, params.density, params.velocity, params.angle, population.density)

    try:
        results = calculate_impact(params, population, location, language)
        visualization = generate_visualization_data(params.latitude, params.longitude, results)
    except InvalidParameter as e:
        return _invalid_parameter_response(e)
    except ImpactEngineError as e:
        logger.error("Impact calculation failed: %s", e)
        return jsonify({"success": False, "error": str(e)}), 500
    except Exception:
        logger.exception("Unexpected error in /comprehensive-impact")
        return jsonify({"success": False, "error": "An internal error occurred."}), 500

    technical_details = results.to_dict()
    technical_details.pop('display_results')

    logger.info("Impact calculation completed: %.4g MT, %d deaths, ocean=%s",
                results.energy.energy_megatons, results.total_casualties.deaths,
                results.location.is_ocean)

    nearest_city = population.nearest_city
    return jsonify({
        "success": True,
        "display_results": results.display_results,
        "technical_details": technical_details,
        "location": {
            "latitude": params.latitude,
            "longitude": params.longitude,
            "is_ocean": results.location.is_ocean,
            "distance_to_coast_km": results.location.distance_to_coast_km,
            "population_density": results.population_density,
            "nearest_city": {
                "name": nearest_city.name,
                "population": nearest_city.population,
                "distance": nearest_city.distance,
            } if nearest_city else None,
        },
        "visualization": visualization,
    })


@app.route('/classify-location', methods=['POST'])
def classify():
    """
    Ocean/land classification for a coordinate pair.

    Expected JSON Input:
        {
            "latitude": float,    // -90 to 90
            "longitude": float    // -180 to 180
        }

    Returns:
        JSON: {"is_ocean": bool, "distance_to_coast_km": float or null}

    Possible Error Responses:
        HTTP 400: If 'latitude' or 'longitude' are missing or invalid.
    """
    try:
        data = request.get_json(silent=True)
        lat = _required_float(data, 'latitude')
        lon = _required_float(data, 'longitude')
        # Reuse the parameter checks for the coordinate ranges
        ImpactParameters(diameter=1.0, velocity=1.0, latitude=lat, longitude=lon)
    except InvalidParameter as e:
        return _invalid_parameter_response(e)
    except (KeyError, TypeError):
        return jsonify({"success": False, "error": "Missing latitude or longitude."}), 400
    except ValueError:
        return jsonify({"success": False, "error": "Invalid latitude or longitude."}), 400

    location = classify_location(lat, lon)
    return jsonify({
        "is_ocean": location.is_ocean,
        "distance_to_coast_km": location.distance_to_coast_km,
    })


if __name__ == '__main__':
    app.run(host='0.0.0.0', port=5000, debug=False)
