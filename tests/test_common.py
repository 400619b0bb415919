"""
Shared infrastructure: error bodies, middleware, runtime settings and the
ledger reconcile command.
"""
from decimal import Decimal
from io import StringIO
from unittest.mock import patch

import pytest
from django.core.cache import cache
from django.core.management import call_command
from django.test import RequestFactory, override_settings

from apps.common.exceptions import InvalidTransition, NotFound
from apps.common.middleware import ErrorHandlingMiddleware
from apps.common.models import SiteSetting
from apps.common.utils import parse_bool, parse_int
from apps.distributors.models import DistributorLedgerEntry
from apps.distributors.services import LedgerService


class TestExceptions:

    def test_invalid_transition_details(self):
        exc = InvalidTransition('delivered', 'pending')

        assert exc.status_code == 409
        assert exc.details == {'current': 'delivered', 'requested': 'pending'}
        assert 'delivered' in exc.message

    def test_default_message(self):
        assert NotFound().status_code == 404
        assert NotFound('Order not found').message == 'Order not found'


class TestQueryParsing:

    @pytest.mark.parametrize('value,expected', [
        ('7', 7), ('x', 3), (None, 3), ('-4', 1), ('500', 100),
    ])
    def test_parse_int_clamps(self, value, expected):
        assert parse_int(value, 3, minimum=1, maximum=100) == expected

    @pytest.mark.parametrize('value,expected', [
        ('true', True), ('1', True), ('false', False), ('0', False), (None, None),
    ])
    def test_parse_bool(self, value, expected):
        assert parse_bool(value) is expected


@pytest.mark.django_db
class TestErrorBodies:

    def test_unauthenticated_body(self, api_client):
        response = api_client.get('/api/cart')

        assert response.status_code == 401
        assert set(response.data) == {'error'}

    def test_validation_error_keeps_field_details(self, buyer_client):
        response = buyer_client.post('/api/cart', {}, format='json')

        assert response.status_code == 400
        assert response.data['error']
        assert 'product_id' in response.data['details']

    def test_unhandled_exception_becomes_json_500(self):
        request = RequestFactory().get('/api/orders')

        response = ErrorHandlingMiddleware(lambda r: None).process_exception(request, RuntimeError('boom'))

        assert response.status_code == 500
        assert b'Internal server error' in response.content

    def test_non_api_paths_fall_through(self):
        request = RequestFactory().get('/admin/')

        assert ErrorHandlingMiddleware(lambda r: None).process_exception(request, RuntimeError('boom')) is None


@pytest.mark.django_db
class TestSecurityMiddleware:

    def setup_method(self):
        cache.clear()

    def test_security_headers(self, api_client):
        response = api_client.get('/api/health/')

        assert response['X-Content-Type-Options'] == 'nosniff'
        assert response['X-Frame-Options'] == 'DENY'

    @patch('apps.common.middleware.time.time')
    def test_rate_limit_returns_429(self, mock_time, api_client):
        mock_time.return_value = 1_000_020
        limits = {'/api/health/': {'limit': 2, 'window': 60}}
        with override_settings(RATELIMIT_ENABLE=True, RATE_LIMITS=limits):
            statuses = [api_client.get('/api/health/').status_code for _ in range(3)]
            blocked = api_client.get('/api/health/')

        assert statuses == [200, 200, 429]
        assert blocked['Retry-After'] == '60'

    @patch('apps.common.middleware.time.time')
    def test_blocked_retries_do_not_extend_window(self, mock_time, api_client):
        mock_time.return_value = 1_000_020
        limits = {'/api/health/': {'limit': 1, 'window': 60}}
        with override_settings(RATELIMIT_ENABLE=True, RATE_LIMITS=limits):
            assert api_client.get('/api/health/').status_code == 200
            assert api_client.get('/api/health/').status_code == 429

            mock_time.return_value = 1_000_050
            blocked = api_client.get('/api/health/')
            assert blocked.status_code == 429
            assert blocked['Retry-After'] == '30'

            mock_time.return_value = 1_000_080
            assert api_client.get('/api/health/').status_code == 200

    def test_disabled_in_tests(self, api_client):
        statuses = {api_client.get('/api/health/').status_code for _ in range(10)}
        assert statuses == {200}


@pytest.mark.django_db
class TestSiteSetting:

    def test_falls_back_to_django_setting(self, settings):
        settings.RETURN_WINDOW_DAYS = 7
        assert SiteSetting.get_value('return_window_days', cast=int) == 7

    def test_override_wins(self):
        SiteSetting.set_value('return_window_days', 14, description='Festival season')
        assert SiteSetting.get_value('return_window_days', cast=int) == 14

    def test_bad_override_is_ignored(self, settings):
        settings.RETURN_WINDOW_DAYS = 7
        SiteSetting.set_value('return_window_days', 'two weeks')
        assert SiteSetting.get_value('return_window_days', cast=int) == 7

    def test_inactive_override_is_ignored(self, settings):
        settings.REWARD_MIN_REDEMPTION = 100
        setting = SiteSetting.set_value('reward_min_redemption', 10)
        setting.is_active = False
        setting.save()

        assert SiteSetting.get_value('reward_min_redemption', cast=int) == 100


@pytest.mark.django_db
class TestReconcileLedgerCommand:

    def _drift(self, distributor):
        LedgerService.add_entry(distributor, 'order', Decimal('500.00'), order_type='bulk', order_id=1)
        LedgerService.add_entry(distributor, 'order', Decimal('300.00'), order_type='bulk', order_id=2)
        DistributorLedgerEntry.objects.filter(distributor=distributor).update(balance_after=Decimal('0.00'))

    def test_reports_without_fixing(self, distributor):
        self._drift(distributor)
        out = StringIO()

        call_command('reconcile_ledger', stdout=out)

        assert 'Distributors with drift: 1' in out.getvalue()
        assert not LedgerService.check_consistency(distributor)['consistent']

    def test_fix_rewrites_balances(self, distributor):
        self._drift(distributor)
        out = StringIO()

        call_command('reconcile_ledger', '--fix', f'--distributor-id={distributor.pk}', stdout=out)

        assert f'Reconciled {distributor.business_name}' in out.getvalue()
        balances = list(
            DistributorLedgerEntry.objects.filter(distributor=distributor)
            .order_by('id').values_list('balance_after', flat=True)
        )
        assert balances == [Decimal('500.00'), Decimal('800.00')]

    def test_clean_ledger_reports_zero(self, distributor):
        LedgerService.add_entry(distributor, 'order', Decimal('100.00'), order_type='bulk', order_id=3)
        out = StringIO()

        call_command('reconcile_ledger', stdout=out)

        assert 'Distributors with drift: 0' in out.getvalue()
