import json
import math
import unittest

from impact_engine.results import (
    build_total_casualties, calculate_impact, calculate_vaporized_population, resolve_location,
)
from impact_engine.schemas import (
    MAX_ASTEROID_DENSITY, MAX_DIAMETER_M, MAX_POPULATION_DENSITY, MAX_VELOCITY_KM_S,
    ImpactParameters, LocationContext, PopulationContext,
)


class TestResultsPipeline(unittest.TestCase):
    def setUp(self):
        self.params = ImpactParameters(diameter=150, velocity=20, angle=45,
                                       latitude=38.5, longitude=-98.0)
        self.population = PopulationContext(density=300)

    def test_calculate_impact_returns_expected_structure(self):
        results = calculate_impact(self.params, self.population)

        self.assertFalse(results.location.is_ocean)
        self.assertIsNone(results.tsunami)
        self.assertEqual(results.population_density, 300)
        self.assertGreater(results.energy.energy_megatons, 0)
        self.assertGreater(results.impact_speed_mph, 44000)
        self.assertIn("crater", results.display_results)
        self.assertIsNone(results.display_results["tsunami"])

    def test_largest_accepted_inputs_stay_finite(self):
        params = ImpactParameters(diameter=MAX_DIAMETER_M, velocity=MAX_VELOCITY_KM_S,
                                  asteroid_density=MAX_ASTEROID_DENSITY)
        results = calculate_impact(params, PopulationContext(density=MAX_POPULATION_DENSITY))

        self.assertTrue(math.isfinite(results.energy.energy_joules))
        self.assertTrue(math.isfinite(results.earthquake.felt_radius.km))
        self.assertGreater(results.total_casualties.deaths, 0)

    def test_totals_sum_blast_zones(self):
        results = calculate_impact(self.params, self.population)
        fireball = results.fireball.casualties
        shock = results.shock_wave.casualties

        expected_deaths = fireball.deaths + shock.deaths + results.wind_blast.casualties.deaths
        expected_injuries = (fireball.third_degree_burns + fireball.second_degree_burns +
                             shock.lung_damage + shock.eardrum_rupture)
        self.assertEqual(results.total_casualties.deaths, expected_deaths)
        self.assertEqual(results.total_casualties.injuries, expected_injuries)
        self.assertEqual(results.total_casualties,
                         build_total_casualties(results.fireball, results.shock_wave,
                                                results.wind_blast))

    def test_vaporized_population_uses_crater_disk(self):
        results = calculate_impact(self.params, self.population)
        self.assertEqual(results.vaporized,
                         calculate_vaporized_population(results.crater, 300))
        self.assertGreater(results.vaporized, 0)

    def test_location_override(self):
        override = LocationContext(is_ocean=True, distance_to_coast_km=50.0)
        results = calculate_impact(self.params, self.population, override)

        self.assertTrue(results.crater.is_ocean)
        self.assertIsNotNone(results.tsunami)
        self.assertEqual(results.tsunami.distance_to_coast_km, 50.0)

    def test_location_override_without_distance(self):
        site = resolve_location(self.params, LocationContext(is_ocean=True))
        self.assertTrue(site.is_ocean)
        # Kansas is outside every basin: 100 km + 3 km per degree from the equator
        self.assertAlmostEqual(site.distance_to_coast_km, 100.0 + 38.5 * 3.0, places=9)

    def test_to_dict_is_json_serialisable(self):
        data = calculate_impact(self.params, self.population).to_dict()
        self.assertEqual(data["parameters"]["asteroid_density"], 3000.0)
        self.assertIn("display_results", data)
        json.dumps(data)

    def test_results_are_immutable(self):
        results = calculate_impact(self.params)
        with self.assertRaises(AttributeError):
            results.vaporized = 10


if __name__ == "__main__":
    unittest.main()
