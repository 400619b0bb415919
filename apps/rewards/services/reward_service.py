"""
Reward points service for earning, redemption and expiry.
"""
import logging
import uuid
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Count, Sum
from django.utils import timezone

from apps.common.exceptions import NotFound, ValidationFailed
from apps.common.models import SiteSetting
from apps.notifications.services import NotificationService
from apps.orders.models import Order
from apps.products.models import Product
from ..models import RewardAccount, RewardRule, RewardTransaction

logger = logging.getLogger(__name__)
audit_logger = logging.getLogger('audit')


class RewardService:
    """Service for handling reward point operations"""

    @staticmethod
    def get_or_create_account(user):
        account, _ = RewardAccount.objects.get_or_create(user=user)
        return account

    @staticmethod
    def _locked_account(user):
        RewardService.get_or_create_account(user)
        return RewardAccount.objects.select_for_update().get(user=user)

    @staticmethod
    def _expiry_for(rule=None):
        days = rule.validity_days if rule and rule.validity_days else None
        if days is None:
            days = SiteSetting.get_value('reward_points_validity_days', cast=int)
        return timezone.now() + timedelta(days=days) if days else None

    @staticmethod
    @transaction.atomic
    def credit(user, points, transaction_type='earn', description='', order_id=None,
               expiry_date=None, created_by=None, product_id=None):
        """Add points and record the transaction"""
        if points <= 0:
            raise ValidationFailed('Points amount must be positive')

        account = RewardService._locked_account(user)
        account.points += points
        account.lifetime_earned += points
        account.save(update_fields=['points', 'lifetime_earned', 'updated_at'])

        return RewardTransaction.objects.create(
            account=account,
            transaction_type=transaction_type,
            points=points,
            balance_after=account.points,
            remaining_points=points,
            description=description,
            order_id=str(order_id) if order_id is not None else None,
            expiry_date=expiry_date,
            product_id=product_id,
            created_by=created_by,
        )

    @staticmethod
    def _consume(account, points):
        """Use up credits oldest-expiry first"""
        remaining = points
        credits = account.transactions.filter(
            status='active', remaining_points__gt=0
        ).order_by('expiry_date', 'created_at', 'id')
        for credit in credits:
            if remaining <= 0:
                break
            used = min(remaining, credit.remaining_points)
            credit.remaining_points -= used
            if credit.remaining_points == 0:
                credit.status = 'used'
            credit.save(update_fields=['remaining_points', 'status'])
            remaining -= used

    @staticmethod
    @transaction.atomic
    def debit(user, points, transaction_type='redeem', description='', order_id=None, created_by=None,
              value=None):
        if points <= 0:
            raise ValidationFailed('Points amount must be positive')

        account = RewardService._locked_account(user)
        if points > account.points:
            raise ValidationFailed(
                'Insufficient points',
                details={'available': account.points, 'requested': points}
            )

        RewardService._consume(account, points)
        account.points -= points
        if transaction_type == 'redeem':
            account.lifetime_redeemed += points
        account.save(update_fields=['points', 'lifetime_redeemed', 'updated_at'])

        return RewardTransaction.objects.create(
            account=account,
            transaction_type=transaction_type,
            points=-points,
            balance_after=account.points,
            status='used',
            description=description,
            order_id=str(order_id) if order_id is not None else None,
            value=value,
            created_by=created_by,
        )

    @staticmethod
    def redemption_value(points):
        """Rupee value of ``points`` at the configured redemption rate"""
        rate = SiteSetting.get_value('reward_redemption_value', default=Decimal('0'), cast=Decimal)
        return (Decimal(points) * rate).quantize(Decimal('0.01'))

    @staticmethod
    def redeem(user, points, description='', order_id=None):
        minimum = SiteSetting.get_value('reward_min_redemption', cast=int)
        if points < minimum:
            raise ValidationFailed(f'Minimum redemption is {minimum} points')
        if order_id is not None and not Order.objects.filter(pk=order_id, buyer=user).exists():
            raise NotFound('Order not found')

        value = RewardService.redemption_value(points)
        txn = RewardService.debit(
            user, points, 'redeem', description or f'Redeemed {points} points',
            order_id=order_id, value=value
        )
        NotificationService.notify(
            user, 'wallet', 'Points redeemed',
            f'You redeemed {points} points worth {value}. Remaining balance: {txn.balance_after}.',
            link='/rewards'
        )
        return txn

    @staticmethod
    def admin_adjust(user, points, description, acting_user, transaction_type='adjust'):
        """Admin credit (positive) or debit (negative)"""
        if points == 0:
            raise ValidationFailed('Points must not be zero')
        if points > 0:
            txn = RewardService.credit(
                user, points, transaction_type, description,
                expiry_date=RewardService._expiry_for(), created_by=acting_user
            )
        else:
            txn = RewardService.debit(user, -points, 'adjust', description, created_by=acting_user)
        audit_logger.info(f"REWARD_ADJUST user={user.pk} points={points} by={acting_user.pk}")
        return txn

    @staticmethod
    def award_signup_bonus(user):
        rule = RewardRule.get_rule('signup')
        if not rule:
            return None
        points = rule.calculate_points()
        if points <= 0:
            return None
        return RewardService.credit(
            user, points, 'bonus', 'Welcome bonus',
            expiry_date=RewardService._expiry_for(rule)
        )

    @staticmethod
    def calculate_purchase_points(amount):
        """floor(amount x rate) using the active purchase rule or the configured default rate"""
        rule = RewardRule.get_rule('purchase')
        if rule:
            if rule.min_order_amount and Decimal(str(amount)) < rule.min_order_amount:
                return 0, rule
            return rule.calculate_points(base_amount=amount), rule
        rate = SiteSetting.get_value('reward_points_per_rupee', default=Decimal('0'), cast=Decimal)
        return int(Decimal(str(amount)) * Decimal(str(rate))), None

    @staticmethod
    def award_purchase_points(order):
        """Award points once per delivered order"""
        already = RewardTransaction.objects.filter(
            account__user=order.buyer, order_id=str(order.pk), transaction_type='earn'
        ).exists()
        if already:
            return None

        points, rule = RewardService.calculate_purchase_points(order.total)
        if points <= 0:
            return None

        txn = RewardService.credit(
            order.buyer, points, 'earn',
            f'Points for order {order.order_number}',
            order_id=order.pk,
            expiry_date=RewardService._expiry_for(rule)
        )
        NotificationService.notify(
            order.buyer, 'wallet', 'Points earned',
            f'You earned {points} points on order {order.order_number}.',
            link='/rewards'
        )
        logger.info(f"Awarded {points} points to user {order.buyer_id} for order {order.pk}")
        return txn

    @staticmethod
    def _active_rule(rule_type, label):
        rule = RewardRule.get_rule(rule_type)
        if not rule:
            raise NotFound(f'No active reward rule found for {label}')
        return rule

    @staticmethod
    @transaction.atomic
    def award_review_points(user, product_id):
        """Award the review rule's points once per reviewed product"""
        if not Product.objects.filter(pk=product_id).exists():
            raise NotFound('Product not found')

        account = RewardService._locked_account(user)
        if account.transactions.filter(transaction_type='review', product_id=product_id).exists():
            raise ValidationFailed('Points already awarded for reviewing this product')

        rule = RewardService._active_rule('review', 'product reviews')
        points = rule.calculate_points()
        if points <= 0:
            raise ValidationFailed('The review rule awards no points')
        return RewardService.credit(
            user, points, 'review', f'{points} points for product review',
            product_id=product_id,
            expiry_date=RewardService._expiry_for(rule)
        )

    @staticmethod
    @transaction.atomic
    def get_referral_code(user):
        """Return the user's referral code, generating it on first use"""
        account = RewardService._locked_account(user)
        if not account.referral_code:
            prefix = (user.username[:3] or 'REF').upper()
            code = f"{prefix}-{uuid.uuid4().hex[:8].upper()}"
            while RewardAccount.objects.filter(referral_code=code).exists():
                code = f"{prefix}-{uuid.uuid4().hex[:8].upper()}"
            account.referral_code = code
            account.save(update_fields=['referral_code', 'updated_at'])
        return account.referral_code

    @staticmethod
    @transaction.atomic
    def apply_referral(user, referral_code):
        """
        Record that ``user`` joined through ``referral_code`` and credit the
        referrer. A user can apply one referral code, never their own.

        Returns ``(referrer, points_awarded)``.
        """
        code = (referral_code or '').strip().upper()
        try:
            referrer_account = RewardAccount.objects.select_related('user').get(referral_code=code)
        except RewardAccount.DoesNotExist:
            raise NotFound('Invalid referral code')
        referrer = referrer_account.user
        if referrer.pk == user.pk:
            raise ValidationFailed('You cannot refer yourself')

        account = RewardService._locked_account(user)
        if account.referred_by_id:
            raise ValidationFailed('You have already used a referral code')

        rule = RewardService._active_rule('referral', 'referrals')
        account.referred_by = referrer
        account.save(update_fields=['referred_by', 'updated_at'])

        points = rule.calculate_points()
        if points > 0:
            RewardService.credit(
                referrer, points, 'referral', f'{points} points for referring {user.username}',
                expiry_date=RewardService._expiry_for(rule)
            )
            NotificationService.notify(
                referrer, 'wallet', 'Referral bonus',
                f'{user.username} joined with your referral code. You earned {points} points.',
                link='/rewards'
            )
        audit_logger.info(f"REFERRAL_APPLIED user={user.pk} referrer={referrer.pk} points={points}")
        return referrer, points

    @staticmethod
    @transaction.atomic
    def expire_account(account, now=None):
        """Expire unspent credits past their expiry date; returns points expired"""
        now = now or timezone.now()
        account = RewardAccount.objects.select_for_update().get(pk=account.pk)
        credits = account.transactions.filter(
            status='active', remaining_points__gt=0, expiry_date__lt=now
        )

        total_expired = 0
        for credit in credits:
            expired = min(credit.remaining_points, account.points)
            credit.remaining_points = 0
            credit.status = 'expired'
            credit.save(update_fields=['remaining_points', 'status'])
            if expired <= 0:
                continue
            account.points -= expired
            total_expired += expired
            RewardTransaction.objects.create(
                account=account,
                transaction_type='expire',
                points=-expired,
                balance_after=account.points,
                status='expired',
                description=f"Points expired from {credit.created_at.date()}",
            )

        if total_expired:
            account.save(update_fields=['points', 'updated_at'])
        return total_expired

    @staticmethod
    def expire_all(now=None):
        """Batch job over every account with expirable credits"""
        now = now or timezone.now()
        account_ids = RewardTransaction.objects.filter(
            status='active', remaining_points__gt=0, expiry_date__lt=now
        ).values_list('account_id', flat=True).distinct()

        total_expired = 0
        for account in RewardAccount.objects.filter(pk__in=list(account_ids)):
            total_expired += RewardService.expire_account(account, now)
        logger.info(f"Expired {total_expired} reward points")
        return total_expired

    @staticmethod
    def summary(user):
        account = RewardService.get_or_create_account(user)
        soon = timezone.now() + timedelta(days=30)
        expiring = account.transactions.filter(
            status='active', remaining_points__gt=0, expiry_date__lte=soon
        ).aggregate(total=Sum('remaining_points'))['total'] or 0
        return {
            'points': account.points,
            'lifetime_earned': account.lifetime_earned,
            'lifetime_redeemed': account.lifetime_redeemed,
            'expiring_soon': expiring,
            'min_redemption': SiteSetting.get_value('reward_min_redemption', cast=int),
            'recent_transactions': list(account.transactions.all()[:5]),
        }

    @staticmethod
    def statistics():
        totals = RewardAccount.objects.aggregate(
            accounts=Count('id'),
            outstanding=Sum('points'),
            earned=Sum('lifetime_earned'),
            redeemed=Sum('lifetime_redeemed'),
        )
        by_type = {
            row['transaction_type']: {'count': row['count'], 'points': row['points'] or 0}
            for row in RewardTransaction.objects.values('transaction_type').annotate(
                count=Count('id'), points=Sum('points')
            )
        }
        return {
            'totalAccounts': totals['accounts'] or 0,
            'pointsOutstanding': totals['outstanding'] or 0,
            'lifetimeEarned': totals['earned'] or 0,
            'lifetimeRedeemed': totals['redeemed'] or 0,
            'byType': by_type,
            'activeRules': RewardRule.objects.filter(is_active=True).count(),
            'defaultRate': str(settings.REWARD_POINTS_PER_RUPEE),
        }
