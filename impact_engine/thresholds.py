"""
Recurrence intervals, energy comparisons and seismic lookup tables.

Every table is an ordered list of breakpoints paired with one value per band.
A value equal to a breakpoint belongs to the band above it, so each band reads
as "lower <= x < upper".
"""
import numpy as np

from impact_engine.schemas import FrequencyResults
from impact_engine.translation_utils import get_translation, format_translation


def lookup_band(breakpoints, value):
    """Index of the band containing value for ascending breakpoints (len(breakpoints) + 1 bands)."""
    return int(np.searchsorted(breakpoints, value, side='right'))

# ==========================================
# Energy comparison (megatons TNT)
# ==========================================
ENERGY_COMPARISON_BREAKPOINTS_MT = np.array([0.001, 0.015, 1.0, 50.0, 1000.0, 100000.0])

ENERGY_COMPARISONS = [
    ("thresholds.energyComparison.smallBomb", "Similar to a small conventional bomb"),
    ("thresholds.energyComparison.hiroshima", "Similar to Hiroshima bomb"),
    ("thresholds.energyComparison.wwii", "Multiple times larger than largest WWII bombs"),
    ("thresholds.energyComparison.largestNuclear", "Similar to largest nuclear weapons ever tested"),
    ("thresholds.energyComparison.yellowstone", "More energy than the last eruption of Yellowstone"),
    ("thresholds.energyComparison.regionalExtinction", "Regional extinction-level energy"),
    ("thresholds.energyComparison.globalExtinction", "Global extinction-level energy (Chicxulub-class)"),
]

def get_energy_comparison(energy_megatons, language=None):
    key, fallback = ENERGY_COMPARISONS[lookup_band(ENERGY_COMPARISON_BREAKPOINTS_MT, energy_megatons)]
    return get_translation(key, fallback, language)

# ==========================================
# Impact frequency (impactor diameter in meters)
# ==========================================
FREQUENCY_BREAKPOINTS_M = np.array([5.0, 20.0, 50.0, 100.0, 200.0, 500.0, 1000.0])

# (band, average interval in years, translation key, fallback)
FREQUENCY_BANDS = [
    ("multiple_per_year", 1, "thresholds.frequency.multiplePerYear",
     "Happens multiple times per year (usually burn up in atmosphere)"),
    ("few_years", 5, "thresholds.frequency.fewYears",
     "Happens every few years (Chelyabinsk-class events)"),
    ("century", 100, "thresholds.frequency.century",
     "Happens every century (Tunguska-class events)"),
    ("millennium", 1000, "thresholds.frequency.millennium",
     "Happens every millennium"),
    ("ten_millennia", 10000, "thresholds.frequency.tenMillennia",
     "Happens every 10,000 years"),
    ("hundred_millennia", 100000, "thresholds.frequency.hundredMillennia",
     "Happens every 100,000 years"),
    ("million_years", 1000000, "thresholds.frequency.millionYears",
     "Happens every million years"),
]

EXTINCTION_LEVEL_BAND = "extinction_level"

def extinction_interval_years(diameter_m):
    """Recurrence interval for kilometer-class impactors, (D/1000)^2.5 million years."""
    return int(round((diameter_m / 1000.0) ** 2.5 * 1e6))

def get_impact_frequency(diameter_m, language=None):
    """
    Historical recurrence interval for an impactor of the given diameter.

    Below 1 km the interval comes from a fixed band; at 1 km and above it is
    computed continuously and the band is always 'extinction_level'.
    """
    index = lookup_band(FREQUENCY_BREAKPOINTS_M, diameter_m)
    if index < len(FREQUENCY_BANDS):
        band, interval, key, fallback = FREQUENCY_BANDS[index]
        return FrequencyResults(
            average_interval_years=interval,
            description=get_translation(key, fallback, language),
            band=band,
        )

    interval = extinction_interval_years(diameter_m)
    description = format_translation(
        "thresholds.frequency.extinctionLevel",
        "Extinction-level event, happens every {millions} million years",
        language,
        millions=f"{interval / 1e6:.0f}",
    )
    return FrequencyResults(average_interval_years=interval, description=description,
                            band=EXTINCTION_LEVEL_BAND)

# ==========================================
# Seismic (Gutenberg-Richter magnitude)
# ==========================================
FATALITY_RATE_BREAKPOINTS = np.array([4.0, 5.0, 6.0, 7.0, 8.0])
FATALITY_RATES = [0.0001, 0.001, 0.01, 0.05, 0.1, 0.2]

def get_earthquake_fatality_rate(magnitude):
    """Historical fatality rate for the population inside the felt radius (step function)."""
    return FATALITY_RATES[lookup_band(FATALITY_RATE_BREAKPOINTS, magnitude)]

EARTHQUAKE_EQUIVALENT_BREAKPOINTS = np.array([4.0, 5.0, 6.0, 7.0, 8.0, 9.0, 10.0])

EARTHQUAKE_EQUIVALENTS = [
    ("thresholds.earthquake.minorTremor", "Minor tremor"),
    ("thresholds.earthquake.moderate", "Moderate earthquake"),
    ("thresholds.earthquake.lomaPrieta", "1989 Loma Prieta earthquake"),
    ("thresholds.earthquake.haiti", "2010 Haiti earthquake"),
    ("thresholds.earthquake.sanFrancisco", "1906 San Francisco earthquake"),
    ("thresholds.earthquake.sichuan", "2008 Sichuan earthquake"),
    ("thresholds.earthquake.tohoku", "2011 Tohoku earthquake"),
    ("thresholds.earthquake.strongestRecorded", "Strongest earthquake ever recorded"),
]

def get_earthquake_equivalent(magnitude, language=None):
    key, fallback = EARTHQUAKE_EQUIVALENTS[lookup_band(EARTHQUAKE_EQUIVALENT_BREAKPOINTS, magnitude)]
    return get_translation(key, fallback, language)
