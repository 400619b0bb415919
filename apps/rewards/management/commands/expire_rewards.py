from django.core.management.base import BaseCommand

from apps.rewards.models import RewardAccount
from apps.rewards.services import RewardService


class Command(BaseCommand):
    help = 'Expire reward points that are past their expiry date'

    def add_arguments(self, parser):
        parser.add_argument(
            '--user-id',
            type=int,
            help='Expire points for specific user ID only',
        )

    def handle(self, *args, **options):
        user_id = options.get('user_id')

        if user_id:
            try:
                account = RewardAccount.objects.select_related('user').get(user_id=user_id)
            except RewardAccount.DoesNotExist:
                self.stdout.write(self.style.ERROR(f'No reward account for user {user_id}'))
                return
            expired = RewardService.expire_account(account)
            self.stdout.write(
                self.style.SUCCESS(f'Expired {expired} points for user {account.user.username}')
            )
            return

        self.stdout.write('Starting reward expiration for all users...')
        total_expired = RewardService.expire_all()
        self.stdout.write(
            self.style.SUCCESS(f'Reward expiration complete. Total expired: {total_expired} points')
        )
