"""
Impact Engine - Input and Result Types

Immutable dataclasses for everything that flows into and out of the engine.
Inputs validate themselves on construction, so an invalid request never gets
as far as a calculator. Results are built once per call and never mutated.
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from impact_engine.exceptions import InvalidParameter
from impact_engine.utils import R_EARTH_KM, TYPICAL_ASTEROID_DENSITY, km_to_miles

# Upper bounds keep every derived quantity inside float range
MAX_DIAMETER_M = 1.0e7
MAX_VELOCITY_KM_S = 299792.458  # speed of light
MAX_ASTEROID_DENSITY = 1.0e5
MAX_POPULATION_DENSITY = 1.0e6
MAX_SURFACE_DISTANCE_KM = math.pi * R_EARTH_KM


def _require_finite(field, value):
    try:
        finite = math.isfinite(value)
    except TypeError:
        raise InvalidParameter(field, value, "must be a number") from None
    if isinstance(value, bool) or not finite:
        raise InvalidParameter(field, value, "must be a finite number")


def _require_positive(field, value):
    _require_finite(field, value)
    if value <= 0:
        raise InvalidParameter(field, value, "must be greater than 0")


def _require_at_most(field, value, high):
    if value > high:
        raise InvalidParameter(field, value, f"must not exceed {high:g}")


def _require_range(field, value, low, high):
    _require_finite(field, value)
    if not (low <= value <= high):
        raise InvalidParameter(field, value, f"must be between {low} and {high}")


# =============================================================================
# INPUTS
# =============================================================================

@dataclass(frozen=True)
class ImpactParameters:
    """
    Physical description of one impact event.

    Attributes:
        diameter: Impactor diameter in meters (> 0)
        velocity: Impact velocity in km/s (> 0)
        angle: Impact angle in degrees from the horizontal (0 to 90)
        latitude: Impact latitude in decimal degrees
        longitude: Impact longitude in decimal degrees
        asteroid_density: Impactor density in kg/m³ (defaults to 3000)
    """
    diameter: float
    velocity: float
    angle: float = 45.0
    latitude: float = 0.0
    longitude: float = 0.0
    asteroid_density: Optional[float] = None

    def __post_init__(self):
        _require_positive("diameter", self.diameter)
        _require_at_most("diameter", self.diameter, MAX_DIAMETER_M)
        _require_positive("velocity", self.velocity)
        _require_at_most("velocity", self.velocity, MAX_VELOCITY_KM_S)
        _require_range("angle", self.angle, 0.0, 90.0)
        _require_range("latitude", self.latitude, -90.0, 90.0)
        _require_range("longitude", self.longitude, -180.0, 180.0)
        if self.asteroid_density is not None:
            _require_positive("asteroid_density", self.asteroid_density)
            _require_at_most("asteroid_density", self.asteroid_density, MAX_ASTEROID_DENSITY)

    @property
    def density(self):
        """Impactor density in kg/m³, falling back to a typical stony asteroid."""
        if self.asteroid_density is None:
            return TYPICAL_ASTEROID_DENSITY
        return self.asteroid_density


@dataclass(frozen=True)
class NearestCity:
    name: str
    population: int
    distance: float  # km


@dataclass(frozen=True)
class PopulationContext:
    """Population around the impact site; density is people per km²."""
    density: float
    nearest_city: Optional[NearestCity] = None

    def __post_init__(self):
        _require_finite("population_density", self.density)
        if self.density < 0:
            raise InvalidParameter("population_density", self.density, "must not be negative")
        _require_at_most("population_density", self.density, MAX_POPULATION_DENSITY)


@dataclass(frozen=True)
class LocationContext:
    """
    Ocean/land determination for the impact site.

    Produced by the built-in classifier or supplied by a richer terrain
    provider. When distance_to_coast_km is None the built-in coarse estimate
    is used for tsunami arrival times.
    """
    is_ocean: bool
    distance_to_coast_km: Optional[float] = None

    def __post_init__(self):
        if not isinstance(self.is_ocean, bool):
            raise InvalidParameter("is_ocean", self.is_ocean, "must be true or false")
        if self.distance_to_coast_km is not None:
            _require_finite("distance_to_coast_km", self.distance_to_coast_km)
            if self.distance_to_coast_km < 0:
                raise InvalidParameter("distance_to_coast_km", self.distance_to_coast_km,
                                       "must not be negative")
            _require_at_most("distance_to_coast_km", self.distance_to_coast_km,
                             MAX_SURFACE_DISTANCE_KM)


# =============================================================================
# SHARED SCALARS
# =============================================================================

@dataclass(frozen=True)
class EnergyResults:
    mass_kg: float
    energy_joules: float
    energy_megatons: float
    energy_gigatons: float


@dataclass(frozen=True)
class DamageRadius:
    """A hazard radius carried in both kilometers and miles."""
    km: float
    miles: float

    @classmethod
    def from_km(cls, km):
        return cls(km=km, miles=km_to_miles(km))


# =============================================================================
# ZONE RESULTS
# =============================================================================

@dataclass(frozen=True)
class CraterResults:
    diameter_km: float
    diameter_miles: float
    depth_km: float
    depth_miles: float
    volume_km3: float
    is_ocean: bool
    is_complex: bool
    is_degenerate: bool
    depth_on_seafloor_miles: Optional[float] = None
    depth_on_land_miles: Optional[float] = None


@dataclass(frozen=True)
class TsunamiResults:
    height_m: float
    height_miles: float
    arrival_time_minutes: float
    affected_coastline_km: float
    wave_speed_kmh: float
    distance_to_coast_km: float


@dataclass(frozen=True)
class FireballCasualties:
    deaths: int
    third_degree_burns: int
    second_degree_burns: int


@dataclass(frozen=True)
class FireballResults:
    radius: DamageRadius
    diameter_miles: float
    third_degree_burn_radius: DamageRadius
    second_degree_burn_radius: DamageRadius
    clothes_ignite_radius: DamageRadius
    trees_ignite_radius: DamageRadius
    casualties: FireballCasualties


@dataclass(frozen=True)
class ShockWaveCasualties:
    deaths: int
    lung_damage: int
    eardrum_rupture: int


@dataclass(frozen=True)
class ShockWaveResults:
    decibels: float
    buildings_collapse_radius: DamageRadius
    homes_collapse_radius: DamageRadius
    lung_damage_radius: DamageRadius
    eardrum_rupture_radius: DamageRadius
    casualties: ShockWaveCasualties


@dataclass(frozen=True)
class WindBlastCasualties:
    deaths: int


@dataclass(frozen=True)
class WindBlastResults:
    peak_speed_mph: float
    jupiter_storm_radius: DamageRadius
    completely_leveled_radius: DamageRadius
    ef5_tornado_radius: DamageRadius
    trees_knocked_down_radius: DamageRadius
    casualties: WindBlastCasualties


@dataclass(frozen=True)
class EarthquakeCasualties:
    deaths: int


@dataclass(frozen=True)
class EarthquakeResults:
    magnitude: float
    felt_radius: DamageRadius
    equivalent_event: str
    fatality_rate: float
    casualties: EarthquakeCasualties


@dataclass(frozen=True)
class FrequencyResults:
    average_interval_years: int
    description: str
    band: str


@dataclass(frozen=True)
class TotalCasualties:
    deaths: int
    injuries: int


# =============================================================================
# AGGREGATE
# =============================================================================

@dataclass(frozen=True)
class ComprehensiveImpactResults:
    """
    Everything the engine knows about one impact.

    display_results holds rendering-ready sentences built from the numeric
    fields above it; consumers never need to recompute a value.
    """
    parameters: ImpactParameters
    impact_speed_mph: float
    energy: EnergyResults
    energy_comparison: str
    location: LocationContext
    crater: CraterResults
    tsunami: Optional[TsunamiResults]
    fireball: FireballResults
    shock_wave: ShockWaveResults
    wind_blast: WindBlastResults
    earthquake: EarthquakeResults
    frequency: FrequencyResults
    total_casualties: TotalCasualties
    vaporized: int
    population_density: float
    display_results: Dict[str, Any]

    def to_dict(self):
        """JSON-ready mapping of the full result tree."""
        data = asdict(self)
        data["parameters"]["asteroid_density"] = self.parameters.density
        return data
