from decimal import Decimal

from django.core.management.base import BaseCommand

from apps.rewards.models import RewardRule


class Command(BaseCommand):
    help = 'Set up default reward rules'

    def handle(self, *args, **options):
        rules_data = [
            {
                'name': 'Purchase points',
                'rule_type': 'purchase',
                'points_per_unit': Decimal('0.01'),
                'validity_days': 365,
                'description': '1 point per 100 rupees of delivered orders',
            },
            {
                'name': 'Welcome bonus',
                'rule_type': 'signup',
                'fixed_points': 50,
                'validity_days': 365,
                'description': 'Welcome bonus for new accounts',
            },
            {
                'name': 'Product review',
                'rule_type': 'review',
                'fixed_points': 10,
                'max_points': 10,
                'description': 'Points for writing product reviews',
            },
            {
                'name': 'Referral',
                'rule_type': 'referral',
                'fixed_points': 100,
                'description': 'Points for successful referrals',
            },
        ]

        created_count = 0
        updated_count = 0

        for rule_data in rules_data:
            rule, created = RewardRule.objects.get_or_create(
                rule_type=rule_data['rule_type'],
                name=rule_data['name'],
                defaults=rule_data
            )

            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'Created reward rule: {rule.name}'))
            else:
                for key, value in rule_data.items():
                    setattr(rule, key, value)
                rule.save()
                updated_count += 1
                self.stdout.write(self.style.WARNING(f'Updated reward rule: {rule.name}'))

        self.stdout.write(
            self.style.SUCCESS(
                f'Reward rules setup complete. Created: {created_count}, Updated: {updated_count}'
            )
        )
