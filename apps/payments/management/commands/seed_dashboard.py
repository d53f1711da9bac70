"""
Management command to seed the dashboard with default users and sample payments.

Usage:
    python manage.py seed_dashboard [--clear]

This creates (when missing):
- 4 users (admin, viewer, demo_admin, test_user)
- 20 payments spread over the last seven days
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.services import seed_default_users
from apps.payments.models import Payment
from apps.payments.services import seed_sample_payments


class Command(BaseCommand):
    help = 'Seed default users and sample payments'

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Delete existing payments before seeding',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            deleted, _ = Payment.objects.all().delete()
            self.stdout.write(f'Deleted {deleted} payment(s).')

        users = seed_default_users()
        self.stdout.write(f'Created {len(users)} user(s).')

        payments = seed_sample_payments()
        self.stdout.write(f'Created {len(payments)} payment(s).')

        self.stdout.write(self.style.SUCCESS('Dashboard seeded successfully!'))
        if users:
            self.stdout.write('')
            self.stdout.write('Default accounts:')
            for user in users:
                self.stdout.write(f'  {user.username} ({user.role})')
