from django.core.management.base import BaseCommand, CommandError
from django.contrib.auth import get_user_model
from django.conf import settings
from django.db import transaction
import getpass

User = get_user_model()


class Command(BaseCommand):
    help = 'Create the single admin principal, or reset its password (requires the superuser secret key)'

    def add_arguments(self, parser):
        parser.add_argument('--email', help='Admin email')
        parser.add_argument('--name', help='Admin display name')

    def handle(self, *args, **options):
        expected_secret = getattr(settings, 'SUPERUSER_SECRET_KEY', None)
        if not expected_secret:
            raise CommandError('SUPERUSER_SECRET_KEY is not configured.')

        # Ask for secret key
        secret = getpass.getpass('Enter SUPERUSER SECRET KEY: ')
        if secret != expected_secret:
            raise CommandError('Invalid secret key. Cannot create admin.')

        email = (options['email'] or input('Email: ')).strip().lower()
        name = (options['name'] or input('Name: ')).strip() or 'Admin'
        password = getpass.getpass('Password: ')
        if not email or not password:
            raise CommandError('Email and password are required.')

        with transaction.atomic():
            existing = User.objects.filter(user_type=User.ADMIN).select_for_update().first()

            if existing and existing.email != email:
                raise CommandError(f'An admin already exists ({existing.email}).')

            if existing:
                existing.set_password(password)
                existing.save(update_fields=['password'])
                self.stdout.write(self.style.SUCCESS(f'Admin password reset for {email}.'))
                return

            User.objects.create_principal(
                User.ADMIN, email, password,
                name=name, is_staff=True, is_superuser=True,
            )

        self.stdout.write(self.style.SUCCESS(f'Admin {email} created successfully!'))
