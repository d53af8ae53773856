# users/management/commands/set_role.py
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from users.constants import ALL_ROLES


class Command(BaseCommand):
    help = "Assign the vendor or admin role to an existing user."

    def add_arguments(self, parser):
        parser.add_argument("username")
        parser.add_argument("role", choices=ALL_ROLES)
        parser.add_argument("--dry-run", action="store_true", help="Report the change without saving it.")

    def handle(self, *args, **opts):
        User = get_user_model()
        username = opts["username"]
        role = opts["role"]

        with transaction.atomic():
            try:
                user = User.objects.select_for_update().get(username=username)
            except User.DoesNotExist:
                raise CommandError(f"No user named {username!r}.")

            before = user.role
            if before == role:
                self.stdout.write(f"{username} already has role {role}")
                return

            if not opts["dry_run"]:
                user.role = role
                user.save(update_fields=["role"])

        verb = "Would change" if opts["dry_run"] else "Changed"
        self.stdout.write(self.style.SUCCESS(f"{verb} {username}: {before} -> {role}"))
