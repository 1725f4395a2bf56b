import unittest

from impact_engine import location


class TestLocationClassifier(unittest.TestCase):
    def test_ocean_basins(self):
        self.assertEqual(location.find_ocean_region(0.0, -150.0).name, "pacific")
        self.assertEqual(location.find_ocean_region(10.0, 150.0).name, "pacific")
        self.assertEqual(location.find_ocean_region(30.0, -40.0).name, "atlantic")
        self.assertEqual(location.find_ocean_region(-20.0, 80.0).name, "indian")

    def test_land(self):
        # Kansas and central Europe
        self.assertFalse(location.is_ocean_impact(38.5, -98.0))
        self.assertFalse(location.is_ocean_impact(50.0, 10.0))

    def test_box_edges_are_open(self):
        self.assertFalse(location.is_ocean_impact(0.0, -100.0))
        self.assertFalse(location.is_ocean_impact(70.0, -40.0))

    def test_distance_to_coast(self):
        self.assertEqual(location.estimate_distance_to_coast(0.0, -150.0), 800.0)
        self.assertEqual(location.estimate_distance_to_coast(40.0, -40.0), 450.0)
        self.assertEqual(location.estimate_distance_to_coast(-30.0, 80.0), 580.0)
        # Outside every basin a short near-coast distance is assumed
        self.assertEqual(location.estimate_distance_to_coast(10.0, 10.0), 130.0)

    def test_classify_location(self):
        context = location.classify_location(0.0, -150.0)
        self.assertTrue(context.is_ocean)
        self.assertEqual(context.distance_to_coast_km, 800.0)

        context = location.classify_location(38.5, -98.0)
        self.assertFalse(context.is_ocean)


if __name__ == '__main__':
    unittest.main()
