"""
Test factories for creating test data using factory_boy.
"""
import factory
from factory.django import DjangoModelFactory
from factory import Faker, SubFactory
from decimal import Decimal
from django.contrib.auth import get_user_model
from django.utils import timezone

User = get_user_model()


class UserFactory(DjangoModelFactory):
    """Factory for creating test users."""

    class Meta:
        model = User
        django_get_or_create = ('username',)

    username = factory.Sequence(lambda n: f"testuser{n}")
    email = factory.LazyAttribute(lambda obj: f"{obj.username}@example.com")
    name = Faker('name')
    phone = factory.Sequence(lambda n: f"98765{n:05d}")
    role = 'buyer'
    is_active = True
    password = factory.PostGenerationMethodCall('set_password', 'testpass123')


class SellerFactory(UserFactory):
    role = 'seller'
    seller_status = 'approved'


class AdminFactory(UserFactory):
    role = 'admin'
    is_staff = True


class CoAdminFactory(UserFactory):
    role = 'admin'
    is_co_admin = True
    permissions = factory.LazyFunction(list)


class AddressFactory(DjangoModelFactory):

    class Meta:
        model = 'users.Address'

    user = SubFactory(UserFactory)
    name = Faker('name')
    phone = '9876543210'
    address_line1 = Faker('street_address')
    city = 'Bengaluru'
    state = 'Karnataka'
    pincode = '560001'
    is_default = True


class CategoryFactory(DjangoModelFactory):
    """Factory for creating product categories."""

    class Meta:
        model = 'products.Category'
        django_get_or_create = ('name',)

    name = factory.Sequence(lambda n: f"Category {n}")


class ProductFactory(DjangoModelFactory):
    """Approved, active product with stock."""

    class Meta:
        model = 'products.Product'

    seller = SubFactory(SellerFactory)
    category = SubFactory(CategoryFactory)
    name = factory.Sequence(lambda n: f"Product {n}")
    description = Faker('text', max_nb_chars=200)
    sku = factory.Sequence(lambda n: f"SKU-{n:05d}")
    price = Decimal('100.00')
    stock = 10
    approval_status = 'approved'
    is_active = True


class ProductVariantFactory(DjangoModelFactory):

    class Meta:
        model = 'products.ProductVariant'

    product = SubFactory(ProductFactory)
    sku = factory.Sequence(lambda n: f"VAR-{n:05d}")
    color = 'Red'
    size = 'M'
    stock = 5


class CartItemFactory(DjangoModelFactory):

    class Meta:
        model = 'cart.CartItem'

    user = SubFactory(UserFactory)
    product = SubFactory(ProductFactory)
    quantity = 1


class OrderFactory(DjangoModelFactory):

    class Meta:
        model = 'orders.Order'

    order_number = factory.Sequence(lambda n: f"ORD-TEST-{n:06d}")
    buyer = SubFactory(UserFactory)
    status = 'pending'
    shipping_details = factory.LazyFunction(lambda: {
        'name': 'Asha Rao', 'phone': '9876543210', 'address': '12 MG Road',
        'city': 'Bengaluru', 'pincode': '560001',
    })
    subtotal = Decimal('200.00')
    total = Decimal('200.00')


class DeliveredOrderFactory(OrderFactory):
    status = 'delivered'
    payment_status = 'paid'
    delivered_at = factory.LazyFunction(timezone.now)


class OrderItemFactory(DjangoModelFactory):

    class Meta:
        model = 'orders.OrderItem'

    order = SubFactory(OrderFactory)
    product = SubFactory(ProductFactory)
    seller = factory.LazyAttribute(lambda obj: obj.product.seller)
    product_name = factory.LazyAttribute(lambda obj: obj.product.name)
    quantity = 2
    unit_price = Decimal('100.00')
    total_price = Decimal('200.00')


class ReturnReasonFactory(DjangoModelFactory):

    class Meta:
        model = 'returns.ReturnReason'

    code = factory.Sequence(lambda n: f"reason_{n}")
    text = 'Item damaged'
    applicable_types = factory.LazyFunction(lambda: ['return', 'refund', 'replacement'])
    requires_media = False
    is_active = True


class ReturnRequestFactory(DjangoModelFactory):

    class Meta:
        model = 'returns.ReturnRequest'

    return_number = factory.Sequence(lambda n: f"RET-TEST-{n:06d}")
    order_item = SubFactory(OrderItemFactory, order=SubFactory(DeliveredOrderFactory))
    order = factory.LazyAttribute(lambda obj: obj.order_item.order)
    buyer = factory.LazyAttribute(lambda obj: obj.order_item.order.buyer)
    seller = factory.LazyAttribute(lambda obj: obj.order_item.seller)
    request_type = 'return'
    reason_text = 'Wrong size'
    quantity = 1
    status = 'pending'
    refund_amount = Decimal('100.00')
    refund_status = 'pending'


class NotificationFactory(DjangoModelFactory):

    class Meta:
        model = 'notifications.Notification'

    user = SubFactory(UserFactory)
    notification_type = 'system'
    title = 'Hello'
    message = Faker('sentence')


class DistributorFactory(DjangoModelFactory):

    class Meta:
        model = 'distributors.Distributor'
        django_get_or_create = ('user',)

    user = SubFactory(UserFactory, role='distributor')
    business_name = factory.Sequence(lambda n: f"Distributor {n} Traders")
    contact_name = Faker('name')
    phone = '9876543210'
    credit_limit = Decimal('50000.00')


class BulkItemFactory(DjangoModelFactory):

    class Meta:
        model = 'distributors.BulkItem'

    product = SubFactory(ProductFactory)
    allow_pieces = True
    allow_sets = True
    pieces_per_set = 6
    selling_price = Decimal('80.00')


class RewardRuleFactory(DjangoModelFactory):

    class Meta:
        model = 'rewards.RewardRule'

    name = 'Purchase points'
    rule_type = 'purchase'
    points_per_unit = Decimal('0.01')
    is_active = True


class FooterContentFactory(DjangoModelFactory):

    class Meta:
        model = 'content.FooterContent'

    section = 'about'
    title = factory.Sequence(lambda n: f"Footer block {n}")
    content = Faker('paragraph')
    order = factory.Sequence(lambda n: n)
