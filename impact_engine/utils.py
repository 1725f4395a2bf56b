"""
Impact Engine - Utility Functions and Constants Module

This module provides the physical constants and the small unit/geometry helpers
used by every zone calculator. It includes:

1. Physical constants for impact calculations
2. Unit conversion utilities (distance, energy, speed)
3. Sphere, circle and annulus geometry
4. Great-circle distance on a spherical Earth

All energies enter the zone calculators through the helpers below so that the
whole pipeline shares one consistent unit system.
"""

import math

# =============================================================================
# PHYSICAL CONSTANTS
# =============================================================================

# Standard gravitational acceleration (m/s²) - used for shallow-water wave speed
EARTH_GRAVITY = 9.81

# Joules per megaton of TNT - internationally accepted TNT equivalent
MEGATON_TO_JOULES = 4.184e15

# Typical stony asteroid density (kg/m³) - default when the caller gives none
TYPICAL_ASTEROID_DENSITY = 3000.0

# Average open-ocean depth (meters) - assumed for tsunami propagation speed
AVERAGE_OCEAN_DEPTH = 4000.0

# Earth's mean radius (kilometers) - used for great circle distance calculations
R_EARTH_KM = 6371.0

# Joules to erg (1 J = 10^7 erg) - crater scaling is expressed in erg
JOULES_TO_ERG = 1e7

# =============================================================================
# UNIT CONVERSION CONSTANTS
# =============================================================================

KM_TO_MILES = 0.621371
METERS_TO_FEET = 3.28084
FEET_PER_MILE = 5280.0
KMH_PER_MS = 3.6
SECONDS_PER_HOUR = 3600.0

# =============================================================================
# UNIT CONVERSION UTILITIES
# =============================================================================

def km_to_m(km):
    """
    Convert kilometers to meters.

    Parameters
    ----------
    km : float
        Distance in kilometers

    Returns
    -------
    float
        Distance in meters
    """
    return km * 1000.0

def m_to_km(m):
    """
    Convert meters to kilometers.

    Parameters
    ----------
    m : float
        Distance in meters

    Returns
    -------
    float
        Distance in kilometers
    """
    return m / 1000.0

def km_to_miles(km):
    """Convert kilometers to statute miles."""
    return km * KM_TO_MILES

def miles_to_km(miles):
    """Convert statute miles to kilometers."""
    return miles / KM_TO_MILES

def meters_to_miles(meters):
    """Convert meters to statute miles via feet, the way wave heights are quoted."""
    return meters * METERS_TO_FEET / FEET_PER_MILE

def km_s_to_mph(velocity_km_s):
    """Convert a speed in km/s to miles per hour."""
    return velocity_km_s * KM_TO_MILES * SECONDS_PER_HOUR

def convert_energy_j_to_mt(energy_j):
    """
    Convert energy from Joules to Megatons of TNT equivalent.

    Uses the standard conversion factor where 1 MT TNT = 4.184 × 10^15 Joules.

    Parameters
    ----------
    energy_j : float
        Energy in Joules

    Returns
    -------
    float
        Energy in Megatons TNT equivalent
    """
    return energy_j / MEGATON_TO_JOULES

def convert_energy_mt_to_j(energy_mt):
    """Convert energy from Megatons of TNT equivalent back to Joules."""
    return energy_mt * MEGATON_TO_JOULES

# =============================================================================
# IMPACTOR GEOMETRY AND ENERGY
# =============================================================================

def sphere_volume(diameter_m):
    """Volume (m³) of a sphere of the given diameter in meters."""
    radius = diameter_m / 2.0
    return (4.0 / 3.0) * math.pi * (radius ** 3)

def sphere_mass(diameter_m, density):
    """Mass (kg) of a homogeneous sphere of the given diameter (m) and density (kg/m³)."""
    return sphere_volume(diameter_m) * density

def kinetic_energy(mass_kg, velocity_km_s):
    """Kinetic energy in Joules for a mass in kg moving at velocity in km/s."""
    v = km_to_m(velocity_km_s)
    return 0.5 * mass_kg * (v ** 2)

def angle_efficiency(angle_deg, exponent=0.44):
    """
    Fraction of impact energy that goes into crater excavation.

    Oblique impacts excavate less efficiently than vertical ones. The empirical
    form is sin(angle)^0.44, so a vertical impact returns 1.0 and a grazing
    impact (angle = 0) returns exactly 0.

    Parameters
    ----------
    angle_deg : float
        Impact angle measured from the horizontal, in degrees
    exponent : float, optional
        Scaling exponent (default: 0.44)

    Returns
    -------
    float
        Efficiency factor in [0, 1]
    """
    s = math.sin(math.radians(angle_deg))
    # sin(0) can come out as a tiny negative float on some platforms
    if s <= 0.0:
        return 0.0
    return s ** exponent

# =============================================================================
# AREA HELPERS
# =============================================================================

def circle_area(radius):
    """Area of a circle; units follow the radius (km -> km²)."""
    return math.pi * radius ** 2

def annulus_area(inner_radius, outer_radius):
    """
    Area of the ring between two concentric circles.

    The result is floored at zero so a casualty band can never subtract
    people when the inner radius happens to exceed the outer one.
    """
    return max(circle_area(outer_radius) - circle_area(inner_radius), 0.0)

def round_half_up(value):
    """Round to the nearest integer with halves rounded up (not banker's rounding)."""
    return int(math.floor(value + 0.5))

# =============================================================================
# GEODESY
# =============================================================================

def haversine_distance(lat1, lon1, lat2, lon2, radius_km=R_EARTH_KM):
    """
    Great-circle distance between two points on a spherical Earth.

    Parameters
    ----------
    lat1, lon1 : float
        First point in decimal degrees
    lat2, lon2 : float
        Second point in decimal degrees
    radius_km : float, optional
        Sphere radius in kilometers (default: Earth's mean radius)

    Returns
    -------
    float
        Distance in kilometers
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (math.sin(d_lat / 2) ** 2 +
         math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) *
         math.sin(d_lon / 2) ** 2)

    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius_km * c
