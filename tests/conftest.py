"""
Test configuration for the marketplace server.
"""
import pytest
from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def buyer():
    from tests.factories import UserFactory
    return UserFactory(role='buyer')


@pytest.fixture
def seller():
    from tests.factories import SellerFactory
    return SellerFactory()


@pytest.fixture
def admin_user():
    from tests.factories import AdminFactory
    return AdminFactory()


@pytest.fixture
def distributor_user():
    from tests.factories import UserFactory
    return UserFactory(role='distributor')


@pytest.fixture
def distributor(distributor_user):
    from tests.factories import DistributorFactory
    return DistributorFactory(user=distributor_user)


@pytest.fixture
def buyer_client(buyer):
    client = APIClient()
    client.force_authenticate(user=buyer)
    return client


@pytest.fixture
def admin_client(admin_user):
    client = APIClient()
    client.force_authenticate(user=admin_user)
    return client


@pytest.fixture
def product(seller):
    from tests.factories import ProductFactory
    return ProductFactory(seller=seller)


@pytest.fixture
def shipping_details():
    return {
        'name': 'Asha Rao',
        'phone': '9876543210',
        'address': '12 MG Road',
        'city': 'Bengaluru',
        'state': 'Karnataka',
        'pincode': '560001',
    }
