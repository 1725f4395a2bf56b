"""
Impact Engine - asteroid impact effects from a handful of physical inputs.

    from impact_engine import ImpactParameters, PopulationContext, calculate_impact

    results = calculate_impact(ImpactParameters(diameter=20, velocity=19, angle=18),
                               PopulationContext(density=100))
    print(results.display_results["energy_comparison"])
"""

from impact_engine.exceptions import DegenerateGeometry, ImpactEngineError, InvalidParameter
from impact_engine.location import classify_location
from impact_engine.population import estimate_from_nearest_place, estimate_population
from impact_engine.results import calculate_impact
from impact_engine.schemas import (
    ComprehensiveImpactResults, ImpactParameters, LocationContext, NearestCity, PopulationContext,
)
from impact_engine.translation_utils import get_available_languages, set_language

__version__ = "1.0.0"

__all__ = [
    'ComprehensiveImpactResults',
    'DegenerateGeometry',
    'ImpactEngineError',
    'ImpactParameters',
    'InvalidParameter',
    'LocationContext',
    'NearestCity',
    'PopulationContext',
    'calculate_impact',
    'classify_location',
    'estimate_from_nearest_place',
    'estimate_population',
    'get_available_languages',
    'set_language',
]
