# hc_core/common/management/commands/ensure_roles.py

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand, CommandError

from hc_core.common.permissions import ROLE_ADMIN, ROLE_DOCTOR, ROLE_PATIENT

ROLE_GROUPS = [ROLE_ADMIN, ROLE_DOCTOR, ROLE_PATIENT]


class Command(BaseCommand):
    help = "Ensure the role groups exist (idempotent); optionally grant roles to users."

    def add_arguments(self, parser):
        parser.add_argument("--doctor", action="append", default=[], metavar="USERNAME")
        parser.add_argument("--patient", action="append", default=[], metavar="USERNAME")

    def handle(self, *args, **options):
        groups = {}
        created = 0
        for name in ROLE_GROUPS:
            groups[name], was_created = Group.objects.get_or_create(name=name)
            created += 1 if was_created else 0

        User = get_user_model()
        for role, usernames in ((ROLE_DOCTOR, options["doctor"]), (ROLE_PATIENT, options["patient"])):
            for username in usernames:
                try:
                    user = User.objects.get(username=username)
                except User.DoesNotExist:
                    raise CommandError(f"No user named {username!r}.")
                user.groups.add(groups[role])
                self.stdout.write(f"{username}: {role}")

        self.stdout.write(self.style.SUCCESS(f"Roles ensured. Newly created: {created}"))
