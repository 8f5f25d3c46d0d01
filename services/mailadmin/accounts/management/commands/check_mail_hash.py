"""Check that the configured mail password hasher works on this host."""
from __future__ import annotations

import getpass

from django.core.management.base import BaseCommand, CommandError

from accounts.credentials import MailHashError, get_credential_encoder


class Command(BaseCommand):
    help = "Hash a password with the mail hasher and check the result's format."

    def add_arguments(self, parser) -> None:
        parser.add_argument("password", nargs="?", help="Password to hash; prompted for when omitted.")

    def handle(self, *args, **options) -> None:
        password = options["password"] or getpass.getpass("Enter a password to hash: ")
        if not password:
            raise CommandError("A password is required")

        encoder = get_credential_encoder()
        masked = getattr(encoder, "masked_command", None)
        if masked is not None:
            self.stdout.write(f"Executing command: {masked()}")

        try:
            mail_hash = encoder.mail_hash(password)
        except MailHashError as exc:
            raise CommandError(f"Failed to generate hash: {exc}") from exc

        self.stdout.write("Generated hash:")
        self.stdout.write(mail_hash)

        if mail_hash.startswith(encoder.format_tag):
            self.stdout.write(self.style.SUCCESS("Hash generated successfully with correct format"))
        else:
            self.stderr.write(self.style.ERROR(f"Hash does not start with {encoder.format_tag}"))

        self.stdout.write("For comparison, the web login hash is:")
        self.stdout.write(encoder.web_hash(password))

        try:
            verified = encoder.verify_mail_hash(password, mail_hash)
        except (MailHashError, NotImplementedError) as exc:
            self.stderr.write(self.style.WARNING(f"Could not verify hash: {exc}"))
            return
        if verified:
            self.stdout.write(self.style.SUCCESS("Hash verifies against the password"))
        else:
            raise CommandError("Generated hash does not verify against the password")
