import unittest

from app import app


class TestComprehensiveImpactRoute(unittest.TestCase):
    def setUp(self):
        app.config['TESTING'] = True
        self.client = app.test_client()

    def test_successful_calculation(self):
        response = self.client.post('/comprehensive-impact', json={
            'diameter': 50, 'velocity': 20, 'angle': 45,
            'latitude': 38.5, 'longitude': -98.0, 'population_density': 40,
        })
        self.assertEqual(response.status_code, 200)

        data = response.get_json()
        self.assertTrue(data['success'])
        for key in ('display_results', 'technical_details', 'location', 'visualization'):
            self.assertIn(key, data)
        self.assertNotIn('display_results', data['technical_details'])
        self.assertFalse(data['location']['is_ocean'])
        self.assertEqual(data['location']['population_density'], 40)
        self.assertIsNone(data['location']['nearest_city'])

    def test_population_estimated_when_missing(self):
        response = self.client.post('/comprehensive-impact', json={
            'diameter': 50, 'velocity': 20, 'latitude': 48.8566, 'longitude': 2.3522,
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()['location']['population_density'], 21000)

    def test_nearest_city_population(self):
        response = self.client.post('/comprehensive-impact', json={
            'diameter': 50, 'velocity': 20, 'latitude': 38.5, 'longitude': -98.0,
            'nearest_city': {'name': 'Salina', 'population': 46000, 'distance': 30},
        })
        location = response.get_json()['location']
        self.assertEqual(location['population_density'], 500)
        self.assertEqual(location['nearest_city']['name'], 'Salina')

    def test_ocean_override(self):
        response = self.client.post('/comprehensive-impact', json={
            'diameter': 200, 'velocity': 20, 'latitude': 38.5, 'longitude': -98.0,
            'population_density': 0, 'is_ocean': True, 'distance_to_coast_km': 120,
        })
        data = response.get_json()
        self.assertTrue(data['location']['is_ocean'])
        self.assertEqual(data['location']['distance_to_coast_km'], 120)
        self.assertIsNotNone(data['display_results']['tsunami'])

    def test_greek_language(self):
        response = self.client.post('/comprehensive-impact', json={
            'diameter': 50, 'velocity': 20, 'population_density': 10, 'language': 'el',
        })
        self.assertIn("Πύρινη σφαίρα", response.get_json()['display_results']['fireball']['size'])

    def test_invalid_parameter(self):
        response = self.client.post('/comprehensive-impact', json={'diameter': -5, 'velocity': 20})
        self.assertEqual(response.status_code, 400)
        data = response.get_json()
        self.assertFalse(data['success'])
        self.assertEqual(data['field'], 'diameter')

    def test_angle_out_of_range(self):
        response = self.client.post('/comprehensive-impact',
                                    json={'diameter': 50, 'velocity': 20, 'angle': 120})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['field'], 'angle')

    def test_unsupported_language(self):
        response = self.client.post('/comprehensive-impact',
                                    json={'diameter': 50, 'velocity': 20, 'language': 'xx'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['field'], 'language')

    def test_missing_parameter(self):
        response = self.client.post('/comprehensive-impact', json={'diameter': 50})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['field'], 'velocity')

    def test_non_numeric_parameter(self):
        response = self.client.post('/comprehensive-impact',
                                    json={'diameter': 'big', 'velocity': 20})
        self.assertEqual(response.status_code, 400)

    def test_is_ocean_must_be_boolean(self):
        for value in ("false", "true", 0, 1):
            response = self.client.post('/comprehensive-impact', json={
                'diameter': 50, 'velocity': 20, 'latitude': 38.5, 'longitude': -98.0,
                'population_density': 40, 'is_ocean': value,
            })
            self.assertEqual(response.status_code, 400, value)
            self.assertEqual(response.get_json()['field'], 'is_ocean')

    def test_is_ocean_false_keeps_land(self):
        response = self.client.post('/comprehensive-impact', json={
            'diameter': 50, 'velocity': 20, 'latitude': 0, 'longitude': -150,
            'population_density': 0, 'is_ocean': False,
        })
        self.assertEqual(response.status_code, 200)
        self.assertFalse(response.get_json()['location']['is_ocean'])

    def test_boolean_numbers_rejected(self):
        for field in ('diameter', 'angle', 'population_density'):
            payload = {'diameter': 50, 'velocity': 20, 'population_density': 10}
            payload[field] = True
            response = self.client.post('/comprehensive-impact', json=payload)
            self.assertEqual(response.status_code, 400, field)
            self.assertEqual(response.get_json()['field'], field)

    def test_oversized_inputs_rejected(self):
        cases = [
            ({'diameter': 1e110, 'velocity': 20, 'population_density': 10}, 'diameter'),
            ({'diameter': 50, 'velocity': 20, 'population_density': 1e300}, 'population_density'),
            ({'diameter': 50, 'velocity': 20, 'population_density': 10,
              'is_ocean': True, 'distance_to_coast_km': 1e300}, 'distance_to_coast_km'),
        ]
        for payload, field in cases:
            response = self.client.post('/comprehensive-impact', json=payload)
            self.assertEqual(response.status_code, 400, field)
            self.assertEqual(response.get_json()['field'], field)

    def test_non_json_body(self):
        response = self.client.post('/comprehensive-impact', data='diameter=50')
        self.assertEqual(response.status_code, 400)


class TestClassifyLocationRoute(unittest.TestCase):
    def setUp(self):
        self.client = app.test_client()

    def test_classify_ocean(self):
        response = self.client.post('/classify-location', json={'latitude': 0, 'longitude': -150})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {'is_ocean': True, 'distance_to_coast_km': 800.0})

    def test_classify_out_of_range(self):
        response = self.client.post('/classify-location', json={'latitude': 95, 'longitude': 0})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()['field'], 'latitude')

    def test_classify_missing_coordinates(self):
        response = self.client.post('/classify-location', json={'latitude': 10})
        self.assertEqual(response.status_code, 400)


if __name__ == '__main__':
    unittest.main()
