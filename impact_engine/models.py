"""
Impact Engine - Core Physics Models

Closed-form scaling laws for every hazard zone of an impact. Each calculator
is a pure function of the shared energy scalars (and, for casualties, the
population density); no calculator reads another calculator's result.

References:
- Pike et al. (1980): crater diameter vs. energy
- Ward & Asphaug (2000): impact tsunami height
- Glasstone & Dolan (1977): fireball, thermal and blast scaling
- Collins, Melosh & Marcus (2005): thermal radiation radii
- Gutenberg-Richter energy/magnitude relation
"""

import logging
import math
import warnings

from impact_engine.exceptions import DegenerateGeometry, InvalidParameter
from impact_engine.schemas import (
    CraterResults, DamageRadius, EarthquakeCasualties, EarthquakeResults, EnergyResults,
    FireballCasualties, FireballResults, ShockWaveCasualties, ShockWaveResults,
    TsunamiResults, WindBlastCasualties, WindBlastResults,
)
from impact_engine.thresholds import get_earthquake_equivalent, get_earthquake_fatality_rate
from impact_engine.utils import (
    AVERAGE_OCEAN_DEPTH, EARTH_GRAVITY, JOULES_TO_ERG, KMH_PER_MS, TYPICAL_ASTEROID_DENSITY,
    angle_efficiency, annulus_area, circle_area, convert_energy_j_to_mt, kinetic_energy,
    km_s_to_mph, km_to_miles, m_to_km, meters_to_miles, round_half_up, sphere_mass,
)

logger = logging.getLogger(__name__)

# Crater (Pike et al., 1980): E_erg = 9.1e24 * D_km^2.59
PIKE_ENERGY_COEFFICIENT_ERG = 9.1e24
PIKE_DIAMETER_EXPONENT = 2.59
SIMPLE_CRATER_MAX_DIAMETER_KM = 3.2
SIMPLE_CRATER_DEPTH_RATIO = 0.20
COMPLEX_CRATER_DEPTH_RATIO = 0.15

# Tsunami (Ward & Asphaug, 2000): H = 1.88 * E_mt^0.22
TSUNAMI_HEIGHT_COEFFICIENT_M = 1.88
TSUNAMI_HEIGHT_EXPONENT = 0.22
MAX_TSUNAMI_HEIGHT_M = 1000.0
MIN_TSUNAMI_ARRIVAL_MINUTES = 5.0
COASTLINE_KM_PER_METER_OF_HEIGHT = 100.0
MAX_AFFECTED_COASTLINE_KM = 5000.0

# Fireball and thermal radiation, radii in meters
FIREBALL_RADIUS_COEFFICIENT_M = 140.0
FIREBALL_RADIUS_EXPONENT = 0.4
THERMAL_RADIUS_EXPONENT = 0.41
THIRD_DEGREE_BURN_COEFFICIENT_M = 1300.0
SECOND_DEGREE_BURN_COEFFICIENT_M = 1900.0
CLOTHES_IGNITE_COEFFICIENT_M = 1100.0
TREES_IGNITE_COEFFICIENT_M = 1400.0
FIREBALL_FATALITY_RATE = 1.0
THIRD_DEGREE_BURN_RATE = 0.8
SECOND_DEGREE_BURN_RATE = 0.5

# Shock wave, radii in km per unit of E_mt^(1/3)
MAX_SHOCK_DECIBELS = 300.0
BUILDINGS_COLLAPSE_COEFFICIENT_KM = 1.5
HOMES_COLLAPSE_COEFFICIENT_KM = 3.0
LUNG_DAMAGE_COEFFICIENT_KM = 5.0
EARDRUM_RUPTURE_COEFFICIENT_KM = 6.5
SHOCK_FATALITY_RATE = 0.5
LUNG_DAMAGE_RATE = 0.3
EARDRUM_RUPTURE_RATE = 0.2

# Wind blast, radii in km per unit of E_mt^(1/3)
PEAK_WIND_COEFFICIENT_MPH = 1000.0
PEAK_WIND_EXPONENT = 0.33
MAX_WIND_FRACTION_OF_IMPACT_SPEED = 0.8
JUPITER_STORM_COEFFICIENT_KM = 3.4
COMPLETELY_LEVELED_COEFFICIENT_KM = 5.5
EF5_TORNADO_COEFFICIENT_KM = 9.9
TREES_DOWN_COEFFICIENT_KM = 16.2
WIND_FATALITY_RATE = 0.4

# Earthquake (Gutenberg-Richter): log10(E_J) = 1.5 M + 4.8
GR_ENERGY_OFFSET = 4.8
GR_MAGNITUDE_SLOPE = 1.5


def _require_energy(field, value):
    if not math.isfinite(value) or value <= 0:
        raise InvalidParameter(field, value, "must be a positive finite energy")


def cube_root_scaling(energy_megatons):
    """Blast similarity scale factor E_mt^(1/3)."""
    return energy_megatons ** (1.0 / 3.0)

# Energy Calculations
def derive_energy(diameter, velocity_km_s, density=TYPICAL_ASTEROID_DENSITY):
    """Mass and kinetic energy of a spherical impactor, in every unit the zones need."""
    if not (math.isfinite(diameter) and diameter > 0):
        raise InvalidParameter("diameter", diameter, "must be greater than 0")
    if not (math.isfinite(velocity_km_s) and velocity_km_s > 0):
        raise InvalidParameter("velocity", velocity_km_s, "must be greater than 0")
    if not (math.isfinite(density) and density > 0):
        raise InvalidParameter("asteroid_density", density, "must be greater than 0")

    mass = sphere_mass(diameter, density)
    energy_j = kinetic_energy(mass, velocity_km_s)
    energy_mt = convert_energy_j_to_mt(energy_j)
    return EnergyResults(
        mass_kg=mass,
        energy_joules=energy_j,
        energy_megatons=energy_mt,
        energy_gigatons=energy_mt / 1000.0,
    )

# Crater Calculations
def calculate_crater_diameter_km(effective_energy_j):
    """Invert Pike's E = 9.1e24 * D^2.59 (erg, km) for the final crater diameter."""
    energy_erg = effective_energy_j * JOULES_TO_ERG
    return (energy_erg / PIKE_ENERGY_COEFFICIENT_ERG) ** (1.0 / PIKE_DIAMETER_EXPONENT)

def crater_depth_ratio(diameter_km):
    """Depth/diameter ratio: 0.20 for simple craters, 0.15 from 3.2 km upward."""
    if diameter_km < SIMPLE_CRATER_MAX_DIAMETER_KM:
        return SIMPLE_CRATER_DEPTH_RATIO
    return COMPLEX_CRATER_DEPTH_RATIO

def calculate_crater(energy_joules, angle_deg, is_ocean):
    """
    Crater dimensions from impact energy and angle.

    Only the crater is attenuated for oblique impacts: the effective energy is
    E * sin(angle)^0.44. A perfectly grazing impact (angle = 0) therefore
    leaves no crater; that case is reported through a DegenerateGeometry
    warning and the is_degenerate flag rather than an error.
    """
    _require_energy("energy_joules", energy_joules)

    efficiency = angle_efficiency(angle_deg)
    effective_energy = energy_joules * efficiency
    is_degenerate = effective_energy <= 0.0
    if is_degenerate:
        message = (f"Impact angle {angle_deg} deg gives zero effective crater energy; "
                   "crater diameter is 0")
        logger.warning(message)
        warnings.warn(message, DegenerateGeometry, stacklevel=2)

    diameter_km = calculate_crater_diameter_km(effective_energy)
    depth_km = diameter_km * crater_depth_ratio(diameter_km)
    # Simplified as a cone
    volume_km3 = (1.0 / 3.0) * math.pi * (diameter_km / 2.0) ** 2 * depth_km
    depth_miles = km_to_miles(depth_km)

    return CraterResults(
        diameter_km=diameter_km,
        diameter_miles=km_to_miles(diameter_km),
        depth_km=depth_km,
        depth_miles=depth_miles,
        volume_km3=volume_km3,
        is_ocean=is_ocean,
        is_complex=diameter_km >= SIMPLE_CRATER_MAX_DIAMETER_KM,
        is_degenerate=is_degenerate,
        depth_on_seafloor_miles=depth_miles if is_ocean else None,
        depth_on_land_miles=None if is_ocean else depth_miles,
    )

# Tsunami Calculations
def tsunami_wave_speed_kmh(ocean_depth_m=AVERAGE_OCEAN_DEPTH):
    """Shallow-water wave speed sqrt(g * depth), in km/h."""
    return math.sqrt(EARTH_GRAVITY * ocean_depth_m) * KMH_PER_MS

def calculate_tsunami(energy_megatons, distance_to_coast_km):
    """Tsunami generated by an ocean impact (Ward & Asphaug, 2000)."""
    _require_energy("energy_megatons", energy_megatons)

    height = min(TSUNAMI_HEIGHT_COEFFICIENT_M * energy_megatons ** TSUNAMI_HEIGHT_EXPONENT,
                 MAX_TSUNAMI_HEIGHT_M)
    wave_speed = tsunami_wave_speed_kmh()
    arrival_minutes = distance_to_coast_km / wave_speed * 60.0
    affected_coastline = min(height * COASTLINE_KM_PER_METER_OF_HEIGHT, MAX_AFFECTED_COASTLINE_KM)

    return TsunamiResults(
        height_m=height,
        height_miles=meters_to_miles(height),
        arrival_time_minutes=max(arrival_minutes, MIN_TSUNAMI_ARRIVAL_MINUTES),
        affected_coastline_km=affected_coastline,
        wave_speed_kmh=wave_speed,
        distance_to_coast_km=distance_to_coast_km,
    )

# Thermal Calculations
def calculate_fireball_radius_km(energy_megatons):
    """Maximum fireball radius, 140 * E^0.4 meters (Glasstone & Dolan)."""
    return m_to_km(FIREBALL_RADIUS_COEFFICIENT_M * energy_megatons ** FIREBALL_RADIUS_EXPONENT)

def calculate_thermal_radius_km(energy_megatons, coefficient_m):
    """Thermal-effect radius of the form k * E^0.41 meters."""
    return m_to_km(coefficient_m * energy_megatons ** THERMAL_RADIUS_EXPONENT)

def calculate_fireball(energy_megatons, population_density=0.0):
    """
    Fireball size, thermal radii and burn casualties.

    Casualties are counted per disjoint ring: everyone inside the fireball,
    80% of the ring out to the third-degree burn radius and 50% of the ring
    between the third- and second-degree radii.
    """
    _require_energy("energy_megatons", energy_megatons)

    fireball_radius = calculate_fireball_radius_km(energy_megatons)
    third_degree = calculate_thermal_radius_km(energy_megatons, THIRD_DEGREE_BURN_COEFFICIENT_M)
    second_degree = calculate_thermal_radius_km(energy_megatons, SECOND_DEGREE_BURN_COEFFICIENT_M)
    clothes = calculate_thermal_radius_km(energy_megatons, CLOTHES_IGNITE_COEFFICIENT_M)
    trees = calculate_thermal_radius_km(energy_megatons, TREES_IGNITE_COEFFICIENT_M)

    deaths = circle_area(fireball_radius) * population_density * FIREBALL_FATALITY_RATE
    third_burns = (annulus_area(fireball_radius, third_degree)
                   * population_density * THIRD_DEGREE_BURN_RATE)
    second_burns = (annulus_area(third_degree, second_degree)
                    * population_density * SECOND_DEGREE_BURN_RATE)

    return FireballResults(
        radius=DamageRadius.from_km(fireball_radius),
        diameter_miles=km_to_miles(fireball_radius * 2.0),
        third_degree_burn_radius=DamageRadius.from_km(third_degree),
        second_degree_burn_radius=DamageRadius.from_km(second_degree),
        clothes_ignite_radius=DamageRadius.from_km(clothes),
        trees_ignite_radius=DamageRadius.from_km(trees),
        casualties=FireballCasualties(
            deaths=round_half_up(deaths),
            third_degree_burns=round_half_up(third_burns),
            second_degree_burns=round_half_up(second_burns),
        ),
    )

# Seismic and Blast Calculations
def calculate_shock_decibels(energy_megatons):
    """Peak sound level at the impact site, capped at 300 dB."""
    return min(194.0 + 20.0 * math.log10(math.sqrt(energy_megatons)), MAX_SHOCK_DECIBELS)

def calculate_shock_wave(energy_megatons, population_density=0.0):
    """
    Overpressure damage radii and casualties with cube-root blast scaling.

    Deaths are 50% of the buildings-collapse disk; lung damage 30% of the ring
    out to the lung-damage radius; eardrum rupture 20% of the ring beyond it.
    """
    _require_energy("energy_megatons", energy_megatons)

    scale = cube_root_scaling(energy_megatons)
    buildings = BUILDINGS_COLLAPSE_COEFFICIENT_KM * scale
    homes = HOMES_COLLAPSE_COEFFICIENT_KM * scale
    lungs = LUNG_DAMAGE_COEFFICIENT_KM * scale
    eardrums = EARDRUM_RUPTURE_COEFFICIENT_KM * scale

    deaths = circle_area(buildings) * population_density * SHOCK_FATALITY_RATE
    lung_damage = annulus_area(buildings, lungs) * population_density * LUNG_DAMAGE_RATE
    eardrum_rupture = annulus_area(lungs, eardrums) * population_density * EARDRUM_RUPTURE_RATE

    return ShockWaveResults(
        decibels=calculate_shock_decibels(energy_megatons),
        buildings_collapse_radius=DamageRadius.from_km(buildings),
        homes_collapse_radius=DamageRadius.from_km(homes),
        lung_damage_radius=DamageRadius.from_km(lungs),
        eardrum_rupture_radius=DamageRadius.from_km(eardrums),
        casualties=ShockWaveCasualties(
            deaths=round_half_up(deaths),
            lung_damage=round_half_up(lung_damage),
            eardrum_rupture=round_half_up(eardrum_rupture),
        ),
    )

def calculate_peak_wind_speed_mph(energy_megatons, velocity_km_s):
    """Peak blast wind, never faster than 80% of the impactor's own speed."""
    blast_wind = PEAK_WIND_COEFFICIENT_MPH * energy_megatons ** PEAK_WIND_EXPONENT
    return min(blast_wind, km_s_to_mph(velocity_km_s) * MAX_WIND_FRACTION_OF_IMPACT_SPEED)

def calculate_wind_blast(energy_megatons, velocity_km_s, population_density=0.0):
    """Wind damage bands; deaths are 40% of the whole complete-leveling disk."""
    _require_energy("energy_megatons", energy_megatons)

    scale = cube_root_scaling(energy_megatons)
    jupiter = JUPITER_STORM_COEFFICIENT_KM * scale
    leveled = COMPLETELY_LEVELED_COEFFICIENT_KM * scale
    tornado = EF5_TORNADO_COEFFICIENT_KM * scale
    trees = TREES_DOWN_COEFFICIENT_KM * scale

    deaths = circle_area(leveled) * population_density * WIND_FATALITY_RATE

    return WindBlastResults(
        peak_speed_mph=calculate_peak_wind_speed_mph(energy_megatons, velocity_km_s),
        jupiter_storm_radius=DamageRadius.from_km(jupiter),
        completely_leveled_radius=DamageRadius.from_km(leveled),
        ef5_tornado_radius=DamageRadius.from_km(tornado),
        trees_knocked_down_radius=DamageRadius.from_km(trees),
        casualties=WindBlastCasualties(deaths=round_half_up(deaths)),
    )

def calculate_seismic_magnitude(energy_joules):
    """Gutenberg-Richter magnitude M = (log10(E) - 4.8) / 1.5, floored at 0."""
    return max((math.log10(energy_joules) - GR_ENERGY_OFFSET) / GR_MAGNITUDE_SLOPE, 0.0)

def calculate_felt_radius_km(magnitude):
    """Distance at which the shaking is still felt, R = 10^(0.5 M) km."""
    return 10.0 ** (0.5 * magnitude)

def calculate_earthquake(energy_joules, population_density=0.0, language=None):
    """Seismic magnitude, felt radius and deaths from the magnitude-band fatality rate."""
    _require_energy("energy_joules", energy_joules)

    magnitude = calculate_seismic_magnitude(energy_joules)
    felt_radius = calculate_felt_radius_km(magnitude)
    fatality_rate = get_earthquake_fatality_rate(magnitude)
    deaths = circle_area(felt_radius) * population_density * fatality_rate

    return EarthquakeResults(
        magnitude=magnitude,
        felt_radius=DamageRadius.from_km(felt_radius),
        equivalent_event=get_earthquake_equivalent(magnitude, language),
        fatality_rate=fatality_rate,
        casualties=EarthquakeCasualties(deaths=round_half_up(deaths)),
    )
