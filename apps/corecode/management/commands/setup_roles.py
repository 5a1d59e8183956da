import logging

from django.contrib.auth.models import Group, User
from django.core.management.base import BaseCommand, CommandError

from apps.corecode.identity import ROLE_ADMIN, ROLES, IdentityError, IdentityProvider

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Create the role groups and optionally an admin account'

    def add_arguments(self, parser):
        parser.add_argument('--admin-username', help='Username of an admin account to create')
        parser.add_argument('--admin-password', help='Password of the admin account')
        parser.add_argument('--admin-email', default='', help='Email of the admin account')

    def handle(self, *args, **options):
        for role in ROLES:
            _group, created = Group.objects.get_or_create(name=role)
            if created:
                self.stdout.write(f"Created group '{role}'")

        username = options.get('admin_username')
        if not username:
            self.stdout.write(self.style.SUCCESS("Role groups are ready"))
            return

        password = options.get('admin_password')
        if not password:
            raise CommandError("--admin-password is required with --admin-username")
        if User.objects.filter(username=username).exists():
            self.stdout.write(self.style.WARNING(f"User '{username}' already exists"))
            return

        try:
            user = IdentityProvider.create_account(
                username=username,
                password=password,
                first_name='',
                last_name='',
                role=ROLE_ADMIN,
                email=options.get('admin_email') or '',
            )
        except IdentityError as exc:
            raise CommandError(str(exc))
        user.is_staff = True
        user.save(update_fields=['is_staff'])
        self.stdout.write(self.style.SUCCESS(f"Admin account '{username}' created"))
