from django.core.management.base import BaseCommand

from apps.returns.models import ReturnReason


class Command(BaseCommand):
    help = 'Set up the default return reason catalogue'

    def handle(self, *args, **options):
        reasons = [
            ('damaged', 'Item arrived damaged', [], True),
            ('defective', 'Item is defective or not working', [], True),
            ('wrong_item', 'Received the wrong item', [], True),
            ('size_issue', 'Size or fit is not right', ['return', 'replacement'], False),
            ('not_as_described', 'Item is not as described', [], False),
            ('missing_parts', 'Parts or accessories are missing', ['refund', 'replacement'], True),
            ('changed_mind', 'No longer needed', ['return', 'refund'], False),
        ]

        created_count = 0
        for order, (code, text, types, requires_media) in enumerate(reasons):
            _, created = ReturnReason.objects.update_or_create(
                code=code,
                defaults={
                    'text': text,
                    'applicable_types': types,
                    'requires_media': requires_media,
                    'display_order': order,
                }
            )
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'Created return reason: {text}'))

        self.stdout.write(
            self.style.SUCCESS(f'Return reasons ready. Created: {created_count}, Total: {len(reasons)}')
        )
