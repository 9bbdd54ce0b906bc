"""
Tests for the calculator API: loan calculations, amortization
schedule, discount calculator and the error envelope.
"""

from django.test import TestCase, override_settings
from rest_framework.test import APIClient


@override_settings(API_KEYS=['test-key'])
class LoanCalculationAPITests(TestCase):
    """Test POST /api/calculate."""

    def setUp(self):
        self.client = APIClient()
        self.url = '/api/calculate'
        self.header = {'HTTP_X_API_KEY': 'test-key'}

    def post(self, data):
        return self.client.post(self.url, data, format='json', **self.header)

    def test_calculate_emi(self):
        response = self.post({
            'calculation_type': 'emi',
            'principal': 100000,
            'annual_rate_percent': 10,
            'term_years': 1,
        })
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['calculation_type'], 'emi')
        self.assertEqual(data['emi'], '8791.59')
        self.assertEqual(data['total_payment'], '105499.06')
        self.assertEqual(data['total_interest'], '5499.06')
        self.assertIsNone(data['interest_rate_percent'])
        self.assertIsNone(data['max_principal'])

    def test_emi_is_default_calculation_type(self):
        response = self.post({
            'principal': 12000,
            'annual_rate_percent': 0,
            'term_years': 1,
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['emi'], '1000.00')

    def test_accepts_numeric_strings(self):
        """Form fields arrive as text."""
        response = self.post({
            'calculation_type': 'emi',
            'principal': '100000',
            'annual_rate_percent': '10',
            'term_years': '1',
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['emi'], '8791.59')

    def test_calculate_rate(self):
        response = self.post({
            'calculation_type': 'rate',
            'principal': 100000,
            'emi': 8791.59,
            'term_years': 1,
        })
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertAlmostEqual(float(data['interest_rate_percent']), 10, delta=0.01)

    def test_calculate_term(self):
        response = self.post({
            'calculation_type': 'term',
            'principal': 100000,
            'annual_rate_percent': 10,
            'emi': 8791.59,
        })
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['term_months'], 12)
        self.assertEqual(data['term_years'], 1.0)

    def test_calculate_borrow(self):
        response = self.post({
            'calculation_type': 'borrow',
            'emi': 8791.59,
            'annual_rate_percent': 10,
            'term_years': 1,
        })
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertAlmostEqual(float(data['max_principal']), 100000, delta=0.1)
        self.assertEqual(data['principal'], data['max_principal'])

    def test_missing_required_field(self):
        """Rate mode needs an EMI."""
        response = self.post({
            'calculation_type': 'rate',
            'principal': 100000,
            'term_years': 1,
        })
        self.assertEqual(response.status_code, 400)
        data = response.json()
        self.assertTrue(data['error'])
        self.assertIn('emi', data['detail'])

    def test_unknown_calculation_type(self):
        response = self.post({'calculation_type': 'payoff'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('calculation_type', response.json()['detail'])

    def test_non_numeric_input(self):
        response = self.post({
            'calculation_type': 'emi',
            'principal': 'lots',
            'annual_rate_percent': 10,
            'term_years': 1,
        })
        self.assertEqual(response.status_code, 400)
        self.assertIn('principal', response.json()['detail'])

    def test_out_of_domain_input(self):
        """Negative principal is classified by the solver."""
        response = self.post({
            'calculation_type': 'emi',
            'principal': -100,
            'annual_rate_percent': 10,
            'term_years': 1,
        })
        self.assertEqual(response.status_code, 400)
        data = response.json()
        self.assertEqual(data['code'], 'invalid_input')
        self.assertEqual(data['field'], 'principal')
        self.assertIn('loan amount', data['detail'])

    def test_principal_above_limit(self):
        """Amounts too large to report are rejected up front."""
        response = self.post({
            'calculation_type': 'emi',
            'principal': 1e19,
            'annual_rate_percent': 10,
            'term_years': 1,
        })
        self.assertEqual(response.status_code, 400)
        data = response.json()
        self.assertTrue(data['error'])
        self.assertIn('principal', data['detail'])

    def test_largest_principal_is_reported(self):
        response = self.post({
            'calculation_type': 'emi',
            'principal': 1e12,
            'annual_rate_percent': 1000,
            'term_years': 100,
        })
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['principal'], '1000000000000.00')

    def test_term_shorter_than_a_month(self):
        response = self.post({
            'calculation_type': 'emi',
            'principal': 1e12,
            'annual_rate_percent': 10,
            'term_years': 1e-12,
        })
        self.assertEqual(response.status_code, 400)
        self.assertIn('term_years', response.json()['detail'])

    def test_infeasible_emi(self):
        response = self.post({
            'calculation_type': 'rate',
            'principal': 100000,
            'emi': 500,
            'term_years': 1,
        })
        self.assertEqual(response.status_code, 422)
        data = response.json()
        self.assertTrue(data['error'])
        self.assertEqual(data['code'], 'infeasible_emi')
        self.assertIn('too low', data['detail'])

    def test_rate_out_of_range(self):
        response = self.post({
            'calculation_type': 'rate',
            'principal': 100000,
            'emi': 60000,
            'term_years': 1,
        })
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()['code'], 'rate_out_of_range')

    def test_non_amortizing_emi(self):
        response = self.post({
            'calculation_type': 'term',
            'principal': 100000,
            'annual_rate_percent': 12,
            'emi': 900,
        })
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()['code'], 'non_amortizing_emi')

    def test_term_out_of_range(self):
        response = self.post({
            'calculation_type': 'term',
            'principal': 100000,
            'annual_rate_percent': 12,
            'emi': 1001,
        })
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()['code'], 'term_out_of_range')


@override_settings(API_KEYS=['test-key'])
class AmortizationScheduleAPITests(TestCase):
    """Test POST /api/amortization-schedule."""

    def setUp(self):
        self.client = APIClient()
        self.url = '/api/amortization-schedule'
        self.header = {'HTTP_X_API_KEY': 'test-key'}

    def test_schedule(self):
        response = self.client.post(self.url, {
            'principal': 100000,
            'annual_rate_percent': 10,
            'term_years': 1,
        }, format='json', **self.header)
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['emi'], '8791.59')
        self.assertEqual(len(data['rows']), 12)
        self.assertEqual(data['rows'][0]['month'], 1)
        self.assertEqual(data['rows'][0]['interest_component'], '833.33')
        self.assertEqual(data['rows'][-1]['balance'], '0.00')

    def test_missing_field(self):
        response = self.client.post(self.url, {
            'principal': 100000,
            'annual_rate_percent': 10,
        }, format='json', **self.header)
        self.assertEqual(response.status_code, 400)
        self.assertIn('term_years', response.json()['detail'])

    def test_term_above_limit(self):
        """Schedules are capped at 30 years of rows."""
        response = self.client.post(self.url, {
            'principal': 1000,
            'annual_rate_percent': 10,
            'term_years': 1e7,
        }, format='json', **self.header)
        self.assertEqual(response.status_code, 400)
        data = response.json()
        self.assertEqual(data['code'], 'invalid_input')
        self.assertEqual(data['field'], 'term_years')

    def test_invalid_term(self):
        response = self.client.post(self.url, {
            'principal': 100000,
            'annual_rate_percent': 10,
            'term_years': 0,
        }, format='json', **self.header)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['field'], 'term_years')


@override_settings(API_KEYS=['test-key'])
class DiscountAPITests(TestCase):
    """Test POST /api/discount."""

    def setUp(self):
        self.client = APIClient()
        self.url = '/api/discount'
        self.header = {'HTTP_X_API_KEY': 'test-key'}

    def test_discount(self):
        response = self.client.post(self.url, {
            'original_price': 2500,
            'discount_percent': 20,
        }, format='json', **self.header)
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['saved_amount'], '500.00')
        self.assertEqual(data['final_price'], '2000.00')

    def test_price_above_limit(self):
        response = self.client.post(self.url, {
            'original_price': 1e19,
            'discount_percent': 10,
        }, format='json', **self.header)
        self.assertEqual(response.status_code, 400)
        self.assertIn('original_price', response.json()['detail'])

    def test_no_discount(self):
        response = self.client.post(self.url, {
            'original_price': 999.99,
            'discount_percent': 0,
        }, format='json', **self.header)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['final_price'], '999.99')

    def test_discount_above_100(self):
        response = self.client.post(self.url, {
            'original_price': 100,
            'discount_percent': 120,
        }, format='json', **self.header)
        self.assertEqual(response.status_code, 400)
        data = response.json()
        self.assertEqual(data['field'], 'discount_percent')
        self.assertIn('discount percentage', data['detail'])
