"""
Reward points: earning, redemption limits, FIFO consumption and expiry.
"""
from datetime import timedelta
from decimal import Decimal

import pytest
from django.utils import timezone

from apps.common.exceptions import ValidationFailed
from apps.orders.services import OrderService
from apps.rewards.models import RewardAccount, RewardTransaction
from apps.rewards.services import RewardService
from tests.factories import AdminFactory, CoAdminFactory, OrderFactory, RewardRuleFactory, UserFactory


@pytest.mark.django_db
class TestRedemption:

    def test_below_minimum_is_rejected(self, buyer):
        RewardService.credit(buyer, 500)
        with pytest.raises(ValidationFailed) as exc:
            RewardService.redeem(buyer, 50)
        assert 'Minimum redemption' in exc.value.message

    def test_insufficient_points(self, buyer_client, buyer):
        RewardService.credit(buyer, 150)
        response = buyer_client.post('/api/rewards/redeem', {'points': 200}, format='json')

        assert response.status_code == 400
        assert response.data['error'] == 'Insufficient points'
        assert response.data['details'] == {'available': 150, 'requested': 200}

    def test_redeem_updates_balance_and_notifies(self, buyer_client, buyer):
        RewardService.credit(buyer, 300)
        response = buyer_client.post('/api/rewards/redeem', {'points': 120}, format='json')

        assert response.status_code == 201
        assert response.data['points'] == 180
        account = RewardAccount.objects.get(user=buyer)
        assert account.lifetime_redeemed == 120
        assert buyer.notifications.filter(notification_type='wallet').exists()

    def test_redeem_against_order_records_value(self, buyer_client, buyer, settings):
        settings.REWARD_REDEMPTION_VALUE = Decimal('0.50')
        order = OrderFactory(buyer=buyer)
        RewardService.credit(buyer, 300)

        response = buyer_client.post('/api/rewards/redeem', {'points': 200, 'order_id': order.pk}, format='json')

        assert response.status_code == 201
        assert response.data['value'] == Decimal('100.00')
        txn = RewardTransaction.objects.get(transaction_type='redeem', account__user=buyer)
        assert txn.order_id == str(order.pk)
        assert txn.value == Decimal('100.00')

    def test_redeem_against_someone_elses_order(self, buyer_client, buyer):
        RewardService.credit(buyer, 300)
        response = buyer_client.post('/api/rewards/redeem', {'points': 200, 'order_id': OrderFactory().pk}, format='json')

        assert response.status_code == 404
        assert RewardAccount.objects.get(user=buyer).points == 300

    def test_debit_consumes_earliest_expiry_first(self, buyer):
        now = timezone.now()
        late = RewardService.credit(buyer, 100, expiry_date=now + timedelta(days=300))
        early = RewardService.credit(buyer, 100, expiry_date=now + timedelta(days=10))

        RewardService.debit(buyer, 130)

        early.refresh_from_db()
        late.refresh_from_db()
        assert early.remaining_points == 0
        assert early.status == 'used'
        assert late.remaining_points == 70


@pytest.mark.django_db
class TestEarning:

    def test_delivery_awards_points_once(self, admin_user):
        RewardRuleFactory(points_per_unit=Decimal('0.05'))
        order = OrderFactory(status='shipped', total=Decimal('2000.00'))

        OrderService.update_status(order, 'delivered', admin_user)
        RewardService.award_purchase_points(order)

        earned = RewardTransaction.objects.filter(account__user=order.buyer, transaction_type='earn')
        assert earned.count() == 1
        assert earned.get().points == 100

    def test_default_rate_without_rule(self, settings):
        settings.REWARD_POINTS_PER_RUPEE = Decimal('0.01')
        points, rule = RewardService.calculate_purchase_points(Decimal('1999.99'))
        assert points == 19
        assert rule is None

    def test_signup_bonus_from_rule(self):
        RewardRuleFactory(name='Welcome', rule_type='signup', points_per_unit=0, fixed_points=50)
        user = UserFactory()
        assert RewardAccount.objects.get(user=user).points == 50


@pytest.mark.django_db
class TestReviewAndReferral:

    def test_review_points_awarded_once_per_product(self, buyer_client, buyer, product):
        RewardRuleFactory(name='Review', rule_type='review', points_per_unit=0, fixed_points=10)

        response = buyer_client.post('/api/rewards/review', {'product_id': product.pk}, format='json')
        assert response.status_code == 201
        assert response.data['pointsAwarded'] == 10
        assert response.data['transaction']['product_id'] == product.pk

        response = buyer_client.post('/api/rewards/review', {'product_id': product.pk}, format='json')
        assert response.status_code == 400
        assert response.data['error'] == 'Points already awarded for reviewing this product'
        assert RewardTransaction.objects.filter(account__user=buyer, transaction_type='review').count() == 1

    def test_review_without_rule_is_404(self, buyer_client, product):
        response = buyer_client.post('/api/rewards/review', {'product_id': product.pk}, format='json')
        assert response.status_code == 404
        assert response.data['error'] == 'No active reward rule found for product reviews'

    def test_referral_code_is_stable(self, buyer_client, buyer):
        first = buyer_client.get('/api/rewards/referral-code').data['referralCode']
        second = buyer_client.get('/api/rewards/referral-code').data['referralCode']

        assert first == second
        assert first.startswith(buyer.username[:3].upper() + '-')

    def test_referral_credits_referrer_once(self, api_client):
        RewardRuleFactory(name='Referral', rule_type='referral', points_per_unit=0, fixed_points=100)
        referrer = UserFactory()
        newcomer = UserFactory()
        code = RewardService.get_referral_code(referrer)
        api_client.force_authenticate(user=newcomer)

        response = api_client.post('/api/rewards/referral', {'referral_code': code.lower()}, format='json')
        assert response.status_code == 200
        assert response.data == {'referringUser': referrer.username, 'pointsAwarded': 100}
        assert RewardAccount.objects.get(user=referrer).points == 100
        assert RewardAccount.objects.get(user=newcomer).referred_by == referrer

        response = api_client.post('/api/rewards/referral', {'referral_code': code}, format='json')
        assert response.status_code == 400
        assert RewardAccount.objects.get(user=referrer).points == 100

    def test_referral_rejects_own_and_unknown_codes(self, buyer_client, buyer):
        RewardRuleFactory(name='Referral', rule_type='referral', points_per_unit=0, fixed_points=100)
        own = RewardService.get_referral_code(buyer)

        assert buyer_client.post('/api/rewards/referral', {'referral_code': own}, format='json').status_code == 400
        assert buyer_client.post(
            '/api/rewards/referral', {'referral_code': 'NOPE-0000'}, format='json'
        ).status_code == 404


@pytest.mark.django_db
class TestExpiry:

    def test_expired_credits_leave_balance(self, buyer):
        past = timezone.now() - timedelta(days=1)
        RewardService.credit(buyer, 80, expiry_date=past)
        RewardService.credit(buyer, 40, expiry_date=timezone.now() + timedelta(days=30))

        expired = RewardService.expire_all()

        assert expired == 80
        account = RewardAccount.objects.get(user=buyer)
        assert account.points == 40
        assert account.transactions.filter(transaction_type='expire', points=-80).exists()


@pytest.mark.django_db
class TestAdminRewards:

    def test_admin_adjustment(self, admin_client, buyer):
        response = admin_client.post('/api/rewards/admin/add', {
            'user_id': buyer.pk, 'points': 250, 'description': 'Goodwill',
        }, format='json')
        assert response.status_code == 201
        assert RewardAccount.objects.get(user=buyer).points == 250

    def test_co_admin_needs_reward_permission(self, api_client, buyer):
        api_client.force_authenticate(user=CoAdminFactory(permissions=['canManageOrders']))
        response = api_client.post('/api/rewards/admin/add', {
            'user_id': buyer.pk, 'points': 10, 'description': 'x',
        }, format='json')
        assert response.status_code == 403

    def test_statistics(self, api_client, buyer):
        RewardService.credit(buyer, 100)
        api_client.force_authenticate(user=AdminFactory())
        data = api_client.get('/api/rewards/statistics').data
        assert data['pointsOutstanding'] >= 100
        assert data['byType']['earn']['count'] >= 1
