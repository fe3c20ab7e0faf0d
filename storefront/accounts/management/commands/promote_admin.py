from django.core.management.base import BaseCommand, CommandError, CommandParser

from storefront.accounts.credentials import CredentialStore
from storefront.errors import StorefrontError


class Command(BaseCommand):
    help = "Grant a role (default: admin) to an existing account. Roles are not editable over the API."

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("email", help="Email of the account to promote.")
        parser.add_argument("--role", default="admin", help="Role to assign (customer or admin).")

    def handle(self, *args, **options):
        try:
            account = CredentialStore().promote(options["email"], options["role"])
        except StorefrontError as e:
            raise CommandError(e.message) from e
        self.stdout.write(self.style.SUCCESS(f"OK • {account.email} is now {account.role}"))
