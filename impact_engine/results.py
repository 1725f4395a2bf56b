"""
Impact Engine - Results Processing Module

This module orchestrates the complete impact calculation pipeline. It derives
the shared energy scalars once, classifies the impact site, runs every zone
calculator, aggregates casualties and finally renders the display projection.

Key Functions:
- calculate_impact(): Executes the complete impact calculation for one event
- build_total_casualties(): Sums deaths and injuries across the blast zones
- calculate_vaporized_population(): People inside the crater footprint

Zone calculators only see the shared scalars (energy, velocity, angle, ocean
flag, population density), never each other's results, so each can be tested
on its own.
"""

import logging
from dataclasses import replace

from impact_engine.display_utils import render_display_results
from impact_engine.location import classify_location, estimate_distance_to_coast
from impact_engine.models import (
    calculate_crater, calculate_earthquake, calculate_fireball, calculate_shock_wave,
    calculate_tsunami, calculate_wind_blast, derive_energy,
)
from impact_engine.schemas import ComprehensiveImpactResults, LocationContext, TotalCasualties
from impact_engine.thresholds import get_energy_comparison, get_impact_frequency
from impact_engine.utils import circle_area, km_s_to_mph, round_half_up

logger = logging.getLogger(__name__)


def resolve_location(params, location=None):
    """
    Use the caller's LocationContext when given, otherwise the built-in classifier.

    An override without a coast distance keeps its ocean flag and borrows the
    coarse built-in distance estimate.
    """
    if location is None:
        return classify_location(params.latitude, params.longitude)
    if location.distance_to_coast_km is None:
        return LocationContext(
            is_ocean=location.is_ocean,
            distance_to_coast_km=estimate_distance_to_coast(params.latitude, params.longitude),
        )
    return location


def build_total_casualties(fireball, shock_wave, wind_blast):
    """
    Deaths from fireball, shock wave and wind blast; injuries from burns and blast trauma.

    Zones are summed as-is. People covered by several hazards are counted once
    per hazard, and earthquake deaths and the vaporized population are reported
    in their own fields rather than added here.
    """
    deaths = (fireball.casualties.deaths +
              shock_wave.casualties.deaths +
              wind_blast.casualties.deaths)
    injuries = (fireball.casualties.third_degree_burns +
                fireball.casualties.second_degree_burns +
                shock_wave.casualties.lung_damage +
                shock_wave.casualties.eardrum_rupture)
    return TotalCasualties(deaths=deaths, injuries=injuries)


def calculate_vaporized_population(crater, population_density):
    """People inside the final crater footprint."""
    return round_half_up(circle_area(crater.diameter_km / 2.0) * population_density)


def calculate_impact(params, population=None, location=None, language=None):
    """
    Execute the complete impact calculation for one event.

    Args:
        params (ImpactParameters): Validated impactor and site description
        population (PopulationContext): Optional population around the site;
            without it every casualty figure is 0
        location (LocationContext): Optional ocean/land override from a richer
            terrain provider
        language (str): Optional language for descriptive strings

    Returns:
        ComprehensiveImpactResults: numeric zone results plus display sentences
    """
    energy = derive_energy(params.diameter, params.velocity, params.density)
    site = resolve_location(params, location)
    density = population.density if population is not None else 0.0

    logger.debug("Impact D=%sm v=%skm/s angle=%s deg: %.3e J (%.4g MT), ocean=%s, density=%s/km2",
                 params.diameter, params.velocity, params.angle,
                 energy.energy_joules, energy.energy_megatons, site.is_ocean, density)

    crater = calculate_crater(energy.energy_joules, params.angle, site.is_ocean)
    tsunami = (calculate_tsunami(energy.energy_megatons, site.distance_to_coast_km)
               if site.is_ocean else None)
    fireball = calculate_fireball(energy.energy_megatons, density)
    shock_wave = calculate_shock_wave(energy.energy_megatons, density)
    wind_blast = calculate_wind_blast(energy.energy_megatons, params.velocity, density)
    earthquake = calculate_earthquake(energy.energy_joules, density, language)
    frequency = get_impact_frequency(params.diameter, language)

    results = ComprehensiveImpactResults(
        parameters=params,
        impact_speed_mph=km_s_to_mph(params.velocity),
        energy=energy,
        energy_comparison=get_energy_comparison(energy.energy_megatons, language),
        location=site,
        crater=crater,
        tsunami=tsunami,
        fireball=fireball,
        shock_wave=shock_wave,
        wind_blast=wind_blast,
        earthquake=earthquake,
        frequency=frequency,
        total_casualties=build_total_casualties(fireball, shock_wave, wind_blast),
        vaporized=calculate_vaporized_population(crater, density),
        population_density=density,
        display_results={},
    )

    logger.debug("Impact totals: %d deaths, %d injuries, crater %.3f km",
                 results.total_casualties.deaths, results.total_casualties.injuries,
                 crater.diameter_km)

    return replace(results, display_results=render_display_results(results, language))
