import math
import unittest
import warnings

from impact_engine import models
from impact_engine.exceptions import DegenerateGeometry, InvalidParameter
from impact_engine.utils import MEGATON_TO_JOULES, annulus_area


class TestEnergyDerivation(unittest.TestCase):
    def test_derive_energy_matches_formula(self):
        diameter = 2.0
        density = 3000.0
        velocity_km_s = 20.0

        expected_mass = density * (4.0 / 3.0) * math.pi * (diameter / 2.0) ** 3
        expected_energy = 0.5 * expected_mass * (velocity_km_s * 1000.0) ** 2

        energy = models.derive_energy(diameter, velocity_km_s, density)
        self.assertAlmostEqual(energy.mass_kg, expected_mass, places=6)
        self.assertAlmostEqual(energy.energy_joules, expected_energy, delta=expected_energy * 1e-12)
        self.assertAlmostEqual(energy.energy_megatons, expected_energy / MEGATON_TO_JOULES, places=12)
        self.assertAlmostEqual(energy.energy_gigatons, energy.energy_megatons / 1000.0, places=15)

    def test_derive_energy_rejects_bad_input(self):
        for args, field in (((0, 20), "diameter"), ((10, -1), "velocity"),
                            ((10, 20, 0), "asteroid_density"), ((float('nan'), 20), "diameter")):
            with self.assertRaises(InvalidParameter) as ctx:
                models.derive_energy(*args)
            self.assertEqual(ctx.exception.field, field)


class TestCrater(unittest.TestCase):
    def test_vertical_impact_inverts_pike_scaling(self):
        energy_j = 1.0e18
        crater = models.calculate_crater(energy_j, 90.0, is_ocean=False)
        # E_erg = 9.1e24 * D^2.59
        self.assertAlmostEqual(9.1e24 * crater.diameter_km ** 2.59, energy_j * 1e7, delta=1e18)

    def test_simple_and_complex_depth_ratios(self):
        small = models.calculate_crater(1.0e16, 90.0, is_ocean=False)
        self.assertFalse(small.is_complex)
        self.assertAlmostEqual(small.depth_km, small.diameter_km * 0.20, places=12)

        large = models.calculate_crater(1.0e22, 90.0, is_ocean=False)
        self.assertGreaterEqual(large.diameter_km, 3.2)
        self.assertTrue(large.is_complex)
        self.assertAlmostEqual(large.depth_km, large.diameter_km * 0.15, places=12)

    def test_oblique_impact_shrinks_crater(self):
        vertical = models.calculate_crater(1.0e18, 90.0, is_ocean=False)
        oblique = models.calculate_crater(1.0e18, 30.0, is_ocean=False)
        self.assertLess(oblique.diameter_km, vertical.diameter_km)

    def test_grazing_impact_warns_and_returns_zero(self):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            crater = models.calculate_crater(1.0e18, 0.0, is_ocean=False)

        self.assertTrue(any(issubclass(w.category, DegenerateGeometry) for w in caught))
        self.assertEqual(crater.diameter_km, 0.0)
        self.assertEqual(crater.depth_km, 0.0)
        self.assertTrue(crater.is_degenerate)

    def test_ocean_depth_reported_on_seafloor(self):
        crater = models.calculate_crater(1.0e18, 45.0, is_ocean=True)
        self.assertEqual(crater.depth_on_seafloor_miles, crater.depth_miles)
        self.assertIsNone(crater.depth_on_land_miles)


class TestTsunami(unittest.TestCase):
    def test_ward_asphaug_height(self):
        tsunami = models.calculate_tsunami(1000.0, 800.0)
        self.assertAlmostEqual(tsunami.height_m, 1.88 * 1000.0 ** 0.22, places=9)

    def test_height_capped(self):
        tsunami = models.calculate_tsunami(1.0e15, 800.0)
        self.assertEqual(tsunami.height_m, 1000.0)
        self.assertEqual(tsunami.affected_coastline_km, 5000.0)

    def test_arrival_time_floor(self):
        tsunami = models.calculate_tsunami(10.0, 1.0)
        self.assertEqual(tsunami.arrival_time_minutes, 5.0)

    def test_wave_speed_from_average_depth(self):
        # sqrt(9.81 * 4000) m/s is about 713 km/h
        self.assertAlmostEqual(models.tsunami_wave_speed_kmh(), math.sqrt(9.81 * 4000.0) * 3.6,
                               places=9)
        tsunami = models.calculate_tsunami(1000.0, 713.0)
        self.assertGreater(tsunami.arrival_time_minutes, 55.0)
        self.assertLess(tsunami.arrival_time_minutes, 65.0)


class TestFireball(unittest.TestCase):
    def test_radii_at_one_megaton(self):
        fireball = models.calculate_fireball(1.0)
        self.assertAlmostEqual(fireball.radius.km, 0.14, places=12)
        self.assertAlmostEqual(fireball.third_degree_burn_radius.km, 1.3, places=12)
        self.assertAlmostEqual(fireball.second_degree_burn_radius.km, 1.9, places=12)
        self.assertAlmostEqual(fireball.clothes_ignite_radius.km, 1.1, places=12)
        self.assertAlmostEqual(fireball.trees_ignite_radius.km, 1.4, places=12)

    def test_casualties_use_disjoint_rings(self):
        density = 1000.0
        fireball = models.calculate_fireball(1.0, density)
        expected_deaths = math.pi * 0.14 ** 2 * density
        expected_third = math.pi * (1.3 ** 2 - 0.14 ** 2) * density * 0.8
        expected_second = math.pi * (1.9 ** 2 - 1.3 ** 2) * density * 0.5

        self.assertEqual(fireball.casualties.deaths, round(expected_deaths))
        self.assertEqual(fireball.casualties.third_degree_burns, round(expected_third))
        self.assertEqual(fireball.casualties.second_degree_burns, round(expected_second))

    def test_zero_density_zero_casualties(self):
        casualties = models.calculate_fireball(50.0, 0.0).casualties
        self.assertEqual((casualties.deaths, casualties.third_degree_burns,
                          casualties.second_degree_burns), (0, 0, 0))


class TestCasualtyRings(unittest.TestCase):
    # From vanishingly small bodies up to the largest accepted impactor
    ENERGIES_MT = [10.0 ** exponent for exponent in range(-250, 27, 7)]

    def test_ring_areas_never_negative(self):
        for energy in self.ENERGIES_MT:
            fireball = models.calculate_fireball(energy, population_density=1000.0)
            shock = models.calculate_shock_wave(energy, population_density=1000.0)
            rings = [
                (fireball.radius.km, fireball.third_degree_burn_radius.km),
                (fireball.third_degree_burn_radius.km, fireball.second_degree_burn_radius.km),
                (shock.buildings_collapse_radius.km, shock.lung_damage_radius.km),
                (shock.lung_damage_radius.km, shock.eardrum_rupture_radius.km),
            ]
            for inner, outer in rings:
                self.assertGreaterEqual(annulus_area(inner, outer), 0.0, (energy, inner, outer))

            counts = [fireball.casualties.deaths, fireball.casualties.third_degree_burns,
                      fireball.casualties.second_degree_burns, shock.casualties.deaths,
                      shock.casualties.lung_damage, shock.casualties.eardrum_rupture]
            self.assertTrue(all(count >= 0 for count in counts), energy)

    def test_fireball_can_outgrow_burn_radius_on_tiny_bodies(self):
        # Thermal radii scale as E^0.41 and the fireball as E^0.4
        fireball = models.calculate_fireball(1.0e-200, population_density=1.0e6)
        self.assertGreater(fireball.radius.km, fireball.third_degree_burn_radius.km)
        self.assertEqual(fireball.casualties.third_degree_burns, 0)


class TestShockWave(unittest.TestCase):
    def test_cube_root_scaling(self):
        small = models.calculate_shock_wave(1.0)
        large = models.calculate_shock_wave(8.0)
        self.assertAlmostEqual(small.buildings_collapse_radius.km, 1.5, places=12)
        self.assertAlmostEqual(large.buildings_collapse_radius.km, 3.0, places=9)
        self.assertAlmostEqual(large.eardrum_rupture_radius.km, 13.0, places=9)

    def test_decibels(self):
        self.assertAlmostEqual(models.calculate_shock_wave(1.0).decibels, 194.0, places=9)
        self.assertEqual(models.calculate_shock_wave(1.0e30).decibels, 300.0)

    def test_radii_ordered(self):
        shock = models.calculate_shock_wave(100.0)
        self.assertLess(shock.buildings_collapse_radius.km, shock.homes_collapse_radius.km)
        self.assertLess(shock.homes_collapse_radius.km, shock.lung_damage_radius.km)
        self.assertLess(shock.lung_damage_radius.km, shock.eardrum_rupture_radius.km)


class TestWindBlast(unittest.TestCase):
    def test_peak_speed_capped_by_impact_speed(self):
        # A huge blast from a slow impactor is bounded by 80% of its speed
        wind = models.calculate_wind_blast(1.0e6, 1.0)
        self.assertAlmostEqual(wind.peak_speed_mph, 0.8 * 2236.9356, places=2)

    def test_peak_speed_uncapped(self):
        wind = models.calculate_wind_blast(1.0, 20.0)
        self.assertAlmostEqual(wind.peak_speed_mph, 1000.0, places=9)

    def test_deaths_use_full_leveled_disk(self):
        wind = models.calculate_wind_blast(1.0, 20.0, population_density=100.0)
        self.assertEqual(wind.casualties.deaths, round(math.pi * 5.5 ** 2 * 100.0 * 0.4))


class TestEarthquake(unittest.TestCase):
    def test_gutenberg_richter_magnitude(self):
        energy_j = 10 ** (1.5 * 6.5 + 4.8)
        quake = models.calculate_earthquake(energy_j)
        self.assertAlmostEqual(quake.magnitude, 6.5, places=9)
        self.assertAlmostEqual(quake.felt_radius.km, 10 ** 3.25, places=6)
        self.assertEqual(quake.fatality_rate, 0.05)
        self.assertEqual(quake.equivalent_event, "2010 Haiti earthquake")

    def test_magnitude_floored_at_zero(self):
        self.assertEqual(models.calculate_seismic_magnitude(1.0), 0.0)

    def test_deaths_in_felt_radius(self):
        energy_j = 10 ** (1.5 * 6.5 + 4.8)
        quake = models.calculate_earthquake(energy_j, population_density=1.0)
        expected = math.pi * quake.felt_radius.km ** 2 * 0.05
        self.assertEqual(quake.casualties.deaths, round(expected))


if __name__ == '__main__':
    unittest.main()
