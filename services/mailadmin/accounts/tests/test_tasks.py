"""Tests for background mail hash regeneration."""
from __future__ import annotations

from django.contrib.auth.hashers import make_password
from django.test import TestCase, override_settings

from accounts.models import Account
from accounts.tasks import regenerate_mail_hash

from .fakes import fake_mail_hash


@override_settings(ACCOUNTS_CREDENTIAL_ENCODER="accounts.tests.fakes.FakeCredentialEncoder")
class RegenerateMailHashTests(TestCase):
    def setUp(self) -> None:
        self.account = Account.objects.create(
            name="Quinn",
            email="quinn@example.com",
            password=make_password("stored-password"),
            clearpw="stored-password",
            emailpw=None,
        )

    def test_missing_hash_is_rebuilt_from_stored_password(self) -> None:
        regenerate_mail_hash.apply(args=[self.account.id]).get()

        self.account.refresh_from_db()
        self.assertEqual(self.account.emailpw, fake_mail_hash("stored-password"))

    def test_gives_up_after_final_retry(self) -> None:
        with self.settings(ACCOUNTS_CREDENTIAL_ENCODER="accounts.tests.fakes.FailingCredentialEncoder"):
            with self.assertLogs("accounts.tasks", level="ERROR"):
                regenerate_mail_hash.apply(
                    args=[self.account.id], retries=regenerate_mail_hash.max_retries
                ).get()

        self.account.refresh_from_db()
        self.assertIsNone(self.account.emailpw)

    def test_password_changed_while_hashing_is_not_overwritten(self) -> None:
        with self.settings(ACCOUNTS_CREDENTIAL_ENCODER="accounts.tests.fakes.RacingCredentialEncoder"):
            regenerate_mail_hash.apply(args=[self.account.id]).get()

        self.account.refresh_from_db()
        self.assertEqual(self.account.clearpw, "changed-elsewhere")
        self.assertIsNone(self.account.emailpw)

    def test_account_without_stored_password_is_skipped(self) -> None:
        Account.objects.filter(pk=self.account.pk).update(clearpw=None)

        regenerate_mail_hash.apply(args=[self.account.id]).get()

        self.account.refresh_from_db()
        self.assertIsNone(self.account.emailpw)

    def test_missing_account_is_ignored(self) -> None:
        with self.assertLogs("accounts.tasks", level="WARNING"):
            regenerate_mail_hash.apply(args=[999]).get()
