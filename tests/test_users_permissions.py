"""
Accounts, role management and the permission helpers.
"""
import pytest
from django.contrib.auth.models import AnonymousUser

from apps.common.permissions import has_co_admin_permission, is_admin_user, is_full_admin
from apps.distributors.models import Distributor
from apps.notifications.models import Notification
from apps.users.models import Address, User
from tests.factories import AddressFactory, AdminFactory, CoAdminFactory, SellerFactory, UserFactory

STRONG_PASSWORD = 'Kx9!marigold-Lane'


@pytest.mark.django_db
class TestRegistrationAndLogin:

    def test_register_buyer_returns_tokens(self, api_client):
        response = api_client.post('/api/users/register', {
            'username': 'meera',
            'email': 'meera@example.com',
            'password': STRONG_PASSWORD,
            'name': 'Meera',
        }, format='json')

        assert response.status_code == 201
        assert response.data['access']
        assert response.data['refresh']
        assert response.data['user']['role'] == 'buyer'
        assert 'password' not in response.data['user']

    def test_register_seller_starts_pending(self, api_client):
        response = api_client.post('/api/users/register', {
            'username': 'kiran',
            'email': 'kiran@example.com',
            'password': STRONG_PASSWORD,
            'role': 'seller',
        }, format='json')

        assert response.status_code == 201
        assert response.data['user']['seller_status'] == 'pending'

    def test_register_cannot_claim_admin(self, api_client):
        response = api_client.post('/api/users/register', {
            'username': 'mallory',
            'email': 'mallory@example.com',
            'password': STRONG_PASSWORD,
            'role': 'admin',
        }, format='json')

        assert response.status_code == 400
        assert not User.objects.filter(username='mallory').exists()

    def test_register_duplicate_email(self, api_client, buyer):
        response = api_client.post('/api/users/register', {
            'username': 'another',
            'email': buyer.email,
            'password': STRONG_PASSWORD,
        }, format='json')

        assert response.status_code == 400
        assert 'error' in response.data

    def test_login_with_username_or_email(self, api_client):
        user = UserFactory(password=STRONG_PASSWORD)

        by_username = api_client.post('/api/users/login', {
            'username': user.username, 'password': STRONG_PASSWORD
        }, format='json')
        by_email = api_client.post('/api/users/login', {
            'username': user.email, 'password': STRONG_PASSWORD
        }, format='json')

        assert by_username.status_code == 200
        assert by_email.status_code == 200
        assert by_email.data['user']['id'] == user.pk

    def test_login_wrong_password(self, api_client, buyer):
        response = api_client.post('/api/users/login', {
            'username': buyer.username, 'password': 'not-the-password'
        }, format='json')

        assert response.status_code == 401

    def test_login_disabled_account(self, api_client):
        user = UserFactory(is_active=False)

        response = api_client.post('/api/users/login', {
            'username': user.username, 'password': 'testpass123'
        }, format='json')

        assert response.status_code == 401

    def test_me_requires_authentication(self, api_client):
        assert api_client.get('/api/users/me').status_code == 401

    def test_me_returns_profile(self, buyer_client, buyer):
        response = buyer_client.get('/api/users/me')

        assert response.status_code == 200
        assert response.data['username'] == buyer.username


@pytest.mark.django_db
class TestPermissionHelpers:

    def test_anonymous_is_nobody(self):
        anonymous = AnonymousUser()
        assert not is_admin_user(anonymous)
        assert not is_full_admin(anonymous)
        assert not has_co_admin_permission(anonymous, 'canManageOrders')

    def test_full_admin_has_every_key(self):
        admin = AdminFactory()
        assert is_full_admin(admin)
        assert has_co_admin_permission(admin, 'canManageFooter')

    def test_co_admin_needs_the_key(self):
        co_admin = CoAdminFactory(permissions=['canManageOrders'])

        assert is_admin_user(co_admin)
        assert not is_full_admin(co_admin)
        assert has_co_admin_permission(co_admin, 'canManageOrders')
        assert not has_co_admin_permission(co_admin, 'canManageReturns')

    def test_keys_do_not_help_non_admins(self):
        buyer = UserFactory(permissions=['canManageOrders'])
        assert not has_co_admin_permission(buyer, 'canManageOrders')


@pytest.mark.django_db
class TestAdminUserManagement:

    def test_role_change_to_distributor_creates_profile(self, admin_client):
        user = UserFactory()

        response = admin_client.put(f'/api/admin/users/{user.pk}/role', {'role': 'distributor'}, format='json')

        assert response.status_code == 200
        assert response.data['role'] == 'distributor'
        assert Distributor.objects.filter(user=user).exists()

    def test_role_change_away_from_seller_clears_status(self, admin_client):
        seller = SellerFactory()

        response = admin_client.put(f'/api/admin/users/{seller.pk}/role', {'role': 'buyer'}, format='json')

        assert response.status_code == 200
        seller.refresh_from_db()
        assert seller.seller_status is None

    def test_admin_cannot_change_own_role(self, admin_client, admin_user):
        response = admin_client.put(f'/api/admin/users/{admin_user.pk}/role', {'role': 'buyer'}, format='json')

        assert response.status_code == 403
        admin_user.refresh_from_db()
        assert admin_user.role == 'admin'

    def test_co_admin_cannot_change_roles(self, api_client):
        co_admin = CoAdminFactory(permissions=['canManageSellers'])
        user = UserFactory()
        api_client.force_authenticate(user=co_admin)

        response = api_client.put(f'/api/admin/users/{user.pk}/role', {'role': 'seller'}, format='json')

        assert response.status_code == 403

    def test_create_co_admin_and_update_permissions(self, admin_client):
        response = admin_client.post('/api/admin/co-admins', {
            'username': 'helper',
            'email': 'helper@example.com',
            'password': STRONG_PASSWORD,
            'permissions': ['canManageOrders'],
        }, format='json')

        assert response.status_code == 201
        assert response.data['is_co_admin'] is True
        co_admin_id = response.data['id']

        response = admin_client.put(
            f'/api/admin/co-admins/{co_admin_id}/permissions',
            {'permissions': ['canManageReturns', 'canManageOrders', 'canManageReturns']},
            format='json'
        )

        assert response.status_code == 200
        assert response.data['permissions'] == ['canManageOrders', 'canManageReturns']

    def test_unknown_permission_key_rejected(self, admin_client):
        co_admin = CoAdminFactory()

        response = admin_client.put(
            f'/api/admin/co-admins/{co_admin.pk}/permissions',
            {'permissions': ['canDoAnything']},
            format='json'
        )

        assert response.status_code == 400

    def test_permissions_only_for_co_admins(self, admin_client, buyer):
        response = admin_client.put(
            f'/api/admin/co-admins/{buyer.pk}/permissions', {'permissions': []}, format='json'
        )

        assert response.status_code == 400
        assert response.data['error'] == 'User is not a co-admin'

    def test_approve_seller_notifies(self, admin_client):
        seller = SellerFactory(seller_status='pending')

        response = admin_client.post(f'/api/admin/sellers/{seller.pk}/approve')

        assert response.status_code == 200
        assert response.data['seller_status'] == 'approved'
        assert Notification.objects.filter(user=seller, title='Seller account approved').exists()

    def test_reject_seller_requires_reason(self, admin_client):
        seller = SellerFactory(seller_status='pending')

        assert admin_client.post(f'/api/admin/sellers/{seller.pk}/reject', {}, format='json').status_code == 400

        response = admin_client.post(
            f'/api/admin/sellers/{seller.pk}/reject', {'reason': 'Missing GST details'}, format='json'
        )
        assert response.status_code == 200
        assert response.data['rejection_reason'] == 'Missing GST details'

    def test_co_admin_with_key_approves_sellers(self, api_client):
        co_admin = CoAdminFactory(permissions=['canApproveSellers'])
        seller = SellerFactory(seller_status='pending')
        api_client.force_authenticate(user=co_admin)

        response = api_client.post(f'/api/admin/sellers/{seller.pk}/approve')

        assert response.status_code == 200

    def test_pending_sellers_listed_by_default(self, admin_client):
        SellerFactory(seller_status='approved')
        pending = SellerFactory(seller_status='pending')

        response = admin_client.get('/api/admin/sellers')

        assert response.status_code == 200
        assert [row['id'] for row in response.data['sellers']] == [pending.pk]


@pytest.mark.django_db
class TestAddresses:

    def _payload(self, **overrides):
        payload = {
            'name': 'Asha Rao',
            'phone': '9876543210',
            'address_line1': '12 MG Road',
            'city': 'Bengaluru',
            'state': 'Karnataka',
            'pincode': '560001',
        }
        payload.update(overrides)
        return payload

    def test_first_address_becomes_default(self, buyer_client, buyer):
        response = buyer_client.post('/api/users/addresses', self._payload(), format='json')

        assert response.status_code == 201
        assert response.data['is_default'] is True

    def test_single_default_per_user(self, buyer_client, buyer):
        first = AddressFactory(user=buyer, is_default=True)

        response = buyer_client.post('/api/users/addresses', self._payload(is_default=True), format='json')

        assert response.status_code == 201
        first.refresh_from_db()
        assert first.is_default is False
        assert Address.objects.filter(user=buyer, is_default=True).count() == 1

    def test_set_default_action(self, buyer_client, buyer):
        AddressFactory(user=buyer, is_default=True)
        other = AddressFactory(user=buyer, is_default=False)

        response = buyer_client.post(f'/api/users/addresses/{other.pk}/set-default')

        assert response.status_code == 200
        assert list(Address.objects.filter(user=buyer, is_default=True)) == [other]

    def test_deleting_default_promotes_another(self, buyer_client, buyer):
        default = AddressFactory(user=buyer, is_default=True)
        other = AddressFactory(user=buyer, is_default=False)

        response = buyer_client.delete(f'/api/users/addresses/{default.pk}')

        assert response.status_code == 200
        other.refresh_from_db()
        assert other.is_default is True

    def test_invalid_pincode(self, buyer_client):
        response = buyer_client.post('/api/users/addresses', self._payload(pincode='12'), format='json')
        assert response.status_code == 400

    def test_other_users_addresses_hidden(self, buyer_client):
        foreign = AddressFactory()

        assert buyer_client.get(f'/api/users/addresses/{foreign.pk}').status_code == 404


@pytest.mark.django_db
def test_health_check(api_client):
    response = api_client.get('/api/health/')

    assert response.status_code == 200
    assert response.json()['status'] == 'healthy'
    assert response.json()['database']['status'] == 'healthy'
