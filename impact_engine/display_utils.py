"""
Impact Engine - Display Projection

Turns a numeric ComprehensiveImpactResults into the mile-based, human-readable
sentences shown by consumers. This is a formatting pass only: every number in
the output is a number already held by the result, rounded for display.
"""

from impact_engine.translation_utils import format_translation, get_translation
from impact_engine.utils import round_half_up


def format_count(value):
    """Integer with thousands separators: 1234567 -> '1,234,567'."""
    return f"{int(value):,}"

def format_locale(value, max_decimals=3):
    """
    Number with thousands separators and at most max_decimals decimals.

    Trailing zeros are dropped, so 2.50 reads '2.5' and 3.0 reads '3'.
    Values too small to show at that precision fall back to scientific notation
    instead of collapsing to '0'.
    """
    if value != 0 and abs(value) < 10 ** -max_decimals:
        return f"{value:.2e}"
    text = f"{value:,.{max_decimals}f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text

def format_distance(miles):
    """Whole miles, keeping two decimals for sub-mile distances."""
    if miles < 1:
        return f"{miles:.2f}"
    return format_count(round_half_up(miles))

def format_interval(years, language=None):
    if years >= 1000000:
        return format_translation("display.millions", "{value} million", language,
                                  value=f"{years / 1000000:.0f}")
    return format_count(years)


def render_crater(results, language=None):
    crater = results.crater
    variant = "ocean" if crater.is_ocean else "land"
    fallback = ("{diameter} mile wide crater\n\nAn estimated {vaporized} people would be "
                "vaporized in the crater\n\nThe crater is {depth} miles deep")
    if crater.is_ocean:
        fallback += " on the sea floor"
    return format_translation(
        f"display.crater.{variant}", fallback, language,
        diameter=format_distance(crater.diameter_miles),
        vaporized=format_count(results.vaporized),
        depth=f"{crater.depth_miles:.2f}",
    )

def render_tsunami(tsunami, language=None):
    if tsunami is None:
        return None
    return format_translation(
        "display.tsunami",
        "The impact will create a {height} mile tall tsunami\n\n"
        "The wave would reach the nearest coast in about {arrival} minutes",
        language,
        height=f"{tsunami.height_miles:.1f}",
        arrival=format_count(round_half_up(tsunami.arrival_time_minutes)),
    )

def render_fireball(fireball, language=None):
    casualties = fireball.casualties
    return {
        "size": format_translation(
            "display.fireball.size", "{diameter} mile wide fireball", language,
            diameter=format_distance(fireball.diameter_miles)),
        "deaths": format_translation(
            "display.fireball.deaths", "An estimated {count} people would die from the fireball",
            language, count=format_count(casualties.deaths)),
        "third_degree_burns": format_translation(
            "display.fireball.thirdDegreeBurns",
            "An estimated {count} people would receive 3rd degree burns",
            language, count=format_count(casualties.third_degree_burns)),
        "second_degree_burns": format_translation(
            "display.fireball.secondDegreeBurns",
            "An estimated {count} people would receive 2nd degree burns",
            language, count=format_count(casualties.second_degree_burns)),
        "clothes_ignite_distance": format_translation(
            "display.fireball.clothesIgnite",
            "Clothes would catch on fire within {distance} miles of the impact",
            language, distance=format_distance(fireball.clothes_ignite_radius.miles)),
        "trees_ignite_distance": format_translation(
            "display.fireball.treesIgnite",
            "Trees would catch on fire within {distance} miles of the impact",
            language, distance=format_distance(fireball.trees_ignite_radius.miles)),
    }

def render_shock_wave(shock_wave, language=None):
    return {
        "decibels": format_translation(
            "display.shockWave.decibels", "{decibels} decibel shock wave", language,
            decibels=format_count(round_half_up(shock_wave.decibels))),
        "deaths": format_translation(
            "display.shockWave.deaths", "An estimated {count} people would die from the shock wave",
            language, count=format_count(shock_wave.casualties.deaths)),
        "lung_damage_distance": format_translation(
            "display.shockWave.lungDamage",
            "Anyone within {distance} miles would likely receive lung damage",
            language, distance=format_distance(shock_wave.lung_damage_radius.miles)),
        "eardrum_rupture_distance": format_translation(
            "display.shockWave.eardrumRupture",
            "Anyone within {distance} miles would likely have ruptured eardrums",
            language, distance=format_distance(shock_wave.eardrum_rupture_radius.miles)),
        "buildings_collapse_distance": format_translation(
            "display.shockWave.buildingsCollapse", "Buildings within {distance} miles would collapse",
            language, distance=format_distance(shock_wave.buildings_collapse_radius.miles)),
        "homes_collapse_distance": format_translation(
            "display.shockWave.homesCollapse", "Homes within {distance} miles would collapse",
            language, distance=format_distance(shock_wave.homes_collapse_radius.miles)),
    }

def render_wind_blast(wind_blast, language=None):
    return {
        "peak_speed": format_translation(
            "display.windBlast.peakSpeed", "{speed} mph peak wind speed", language,
            speed=format_count(round_half_up(wind_blast.peak_speed_mph))),
        "deaths": format_translation(
            "display.windBlast.deaths", "An estimated {count} people would die from the wind blast",
            language, count=format_count(wind_blast.casualties.deaths)),
        "jupiter_storm_distance": format_translation(
            "display.windBlast.jupiterStorm",
            "Wind within {distance} miles would be faster than storms on Jupiter",
            language, distance=format_distance(wind_blast.jupiter_storm_radius.miles)),
        "leveled_distance": format_translation(
            "display.windBlast.leveled", "Homes within {distance} miles would be completely leveled",
            language, distance=format_distance(wind_blast.completely_leveled_radius.miles)),
        "tornado_distance": format_translation(
            "display.windBlast.tornado",
            "Within {distance} miles it would feel like being inside an EF5 tornado",
            language, distance=format_distance(wind_blast.ef5_tornado_radius.miles)),
        "trees_down_distance": format_translation(
            "display.windBlast.treesDown",
            "Nearly all trees within {distance} miles would be knocked down",
            language, distance=format_distance(wind_blast.trees_knocked_down_radius.miles)),
    }

def render_earthquake(earthquake, language=None):
    return {
        "magnitude": format_translation(
            "display.earthquake.magnitude", "{magnitude} magnitude earthquake", language,
            magnitude=f"{earthquake.magnitude:.1f}"),
        "deaths": format_translation(
            "display.earthquake.deaths", "An estimated {count} people would die from the earthquake",
            language, count=format_count(earthquake.casualties.deaths)),
        "felt_distance": format_translation(
            "display.earthquake.feltDistance", "The earthquake would be felt {distance} miles away",
            language, distance=format_distance(earthquake.felt_radius.miles)),
    }

def render_display_results(results, language=None):
    """
    Build the display projection for a ComprehensiveImpactResults.

    Args:
        results: Numeric impact results (display_results is ignored)
        language (str): Optional language code for this rendering

    Returns:
        dict: Nested mapping of display sentences; 'tsunami' is None for land impacts
    """
    surface_key = "water" if results.crater.is_ocean else "ground"
    surface = get_translation(f"display.surface.{surface_key}", f"the {surface_key}", language)

    return {
        "crater": render_crater(results, language),
        "tsunami": render_tsunami(results.tsunami, language),
        "impact_speed": format_translation(
            "display.impactSpeed", "Your asteroid impacted {surface} at {speed} mph", language,
            surface=surface, speed=format_count(round_half_up(results.impact_speed_mph))),
        "energy_comparison": format_translation(
            "display.energyComparison",
            "The impact is equivalent to {gigatons} Gigatons of TNT\n\n{comparison}",
            language, gigatons=format_locale(results.energy.energy_gigatons),
            comparison=results.energy_comparison),
        "frequency": format_translation(
            "display.frequency", "An impact this size happens on average every {interval} years",
            language, interval=format_interval(results.frequency.average_interval_years, language)),
        "fireball": render_fireball(results.fireball, language),
        "shock_wave": render_shock_wave(results.shock_wave, language),
        "wind_blast": render_wind_blast(results.wind_blast, language),
        "earthquake": render_earthquake(results.earthquake, language),
        "total_casualties": format_translation(
            "display.totalCasualties", "An estimated {deaths} deaths and {injuries} injuries in total",
            language, deaths=format_count(results.total_casualties.deaths),
            injuries=format_count(results.total_casualties.injuries)),
    }
