from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from rest_framework.authtoken.models import Token

from clients.models import Client

DEMO_ACCOUNTS = (
    # (role, username, password, email)
    ("admin", "studio-admin", "studio-admin-24", "admin@example.com"),
    ("client", "demo-client", "demo-client-24", "client@example.com"),
)


class Command(BaseCommand):
    help = "Create or update the demo studio admin and demo client accounts."

    def add_arguments(self, parser):
        parser.add_argument(
            "--company",
            default="Demo Client Ltd.",
            help="Company name stored on the demo client's record.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        User = get_user_model()

        for role, username, password, email in DEMO_ACCOUNTS:
            user, created = User.objects.get_or_create(username=username, defaults={"email": email})
            user.set_password(password)
            user.is_staff = role == "admin"
            user.save(update_fields=["password", "is_staff"])

            if role == "client":
                client, _ = Client.objects.get_or_create(user=user)
                if client.company_name != options["company"]:
                    client.company_name = options["company"]
                    client.save(update_fields=["company_name"])

            token, _ = Token.objects.get_or_create(user=user)
            state = "created" if created else "already exists"
            self.stdout.write(f"{role:<6} {username} ({state}) token={token.key}")

        self.stdout.write(self.style.SUCCESS("Demo users ready."))
