import json
import random
from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from apps.customers.models import Customer
from apps.customers.serializers import CustomerSerializer


class Command(BaseCommand):
    help = 'Load customers from a JSON file or generate random ones'

    def add_arguments(self, parser):
        parser.add_argument('--file', type=str, help='JSON file with a list of customers (camelCase keys)')
        parser.add_argument('--random', type=int, default=0, help='Number of random customers to create')
        parser.add_argument('--batch_size', type=int, default=1000, help='Batch size for bulk creation')
        parser.add_argument('--days_back', type=int, default=180, help='Days back for last visit distribution')

    def handle(self, *args, **options):
        if not options['file'] and not options['random']:
            raise CommandError('Pass --file or --random')

        created = 0
        if options['file']:
            created += self.load_file(options['file'])
        if options['random']:
            created += self.create_random(options['random'], options['batch_size'], options['days_back'])

        self.stdout.write(
            self.style.SUCCESS(f'Loaded {created:,} customers ({Customer.objects.count():,} in store)')
        )

    def load_file(self, path):
        try:
            with open(path, encoding='utf-8') as fh:
                payload = json.load(fh)
        except (OSError, ValueError) as e:
            raise CommandError(f'Cannot read {path}: {e}')

        serializer = CustomerSerializer(data=payload, many=True)
        if not serializer.is_valid():
            raise CommandError(f'Invalid customers in {path}: {serializer.errors}')

        with transaction.atomic():
            serializer.save()
        self.stdout.write(f'✅ Loaded {len(serializer.validated_data)} customers from {path}')
        return len(serializer.validated_data)

    def create_random(self, count, batch_size, days_back):
        now = timezone.now()
        offset = Customer.objects.count()
        batch = []
        total = 0

        for i in range(count):
            n = offset + i
            batch.append(Customer(
                name=f'Customer {n}',
                email=f'customer{n}@example.com',
                total_spend=round(random.uniform(0, 20000), 2),
                num_visits=random.randint(0, 50),
                last_visit_date=now - timedelta(days=random.randint(0, days_back)),
            ))
            if len(batch) >= batch_size:
                Customer.objects.bulk_create(batch)
                total += len(batch)
                batch = []
                self.stdout.write(f'Created {total:,}/{count:,} customers')

        if batch:
            Customer.objects.bulk_create(batch)
            total += len(batch)

        return total
