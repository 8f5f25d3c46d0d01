"""Tests for the doveadm-backed credential encoder."""
from __future__ import annotations

import subprocess
from unittest import mock

from django.contrib.auth.hashers import check_password
from django.test import SimpleTestCase, override_settings

from accounts.credentials import (
    DoveadmCredentialEncoder,
    MailHashError,
    get_credential_encoder,
)

from .fakes import FakeCredentialEncoder

HOSTILE_PASSWORD = "pa ss'; rm -rf / #$(id)"


def _completed(stdout: str = "", returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["doveadm"], returncode=returncode, stdout=stdout, stderr="")


@override_settings(PASSWORD_HASHERS=["django.contrib.auth.hashers.MD5PasswordHasher"])
class DoveadmCredentialEncoderTests(SimpleTestCase):
    def setUp(self) -> None:
        self.encoder = DoveadmCredentialEncoder(binary="/usr/bin/doveadm", timeout=5.0)

    def test_defaults_come_from_settings(self) -> None:
        with self.settings(DOVEADM_BINARY="/opt/dovecot/bin/doveadm", MAIL_HASH_TIMEOUT=2.5):
            encoder = DoveadmCredentialEncoder()
        self.assertEqual(encoder.binary, "/opt/dovecot/bin/doveadm")
        self.assertEqual(encoder.scheme, "SHA512-CRYPT")
        self.assertEqual(encoder.timeout, 2.5)
        self.assertEqual(encoder.format_tag, "{SHA512-CRYPT}")

    @mock.patch("accounts.credentials.subprocess.run")
    def test_mail_hash_passes_password_as_single_argument(self, mock_run: mock.Mock) -> None:
        mock_run.return_value = _completed("{SHA512-CRYPT}$6$salt$digest\n")

        result = self.encoder.mail_hash(HOSTILE_PASSWORD)

        self.assertEqual(result, "{SHA512-CRYPT}$6$salt$digest")
        mock_run.assert_called_once_with(
            ["/usr/bin/doveadm", "pw", "-s", "SHA512-CRYPT", "-p", HOSTILE_PASSWORD],
            capture_output=True,
            text=True,
            timeout=5.0,
            check=True,
        )
        self.assertNotIn("shell", mock_run.call_args.kwargs)

    @mock.patch("accounts.credentials.subprocess.run", side_effect=FileNotFoundError)
    def test_missing_binary_is_reported(self, _: mock.Mock) -> None:
        with self.assertRaisesMessage(MailHashError, "not found"):
            self.encoder.mail_hash("secret-password")

    @mock.patch("accounts.credentials.subprocess.run")
    def test_non_zero_exit_is_reported_without_the_password(self, mock_run: mock.Mock) -> None:
        mock_run.side_effect = subprocess.CalledProcessError(
            75, ["/usr/bin/doveadm", "pw", "-p", HOSTILE_PASSWORD]
        )

        with self.assertRaises(MailHashError) as ctx:
            self.encoder.mail_hash(HOSTILE_PASSWORD)

        self.assertIn("75", str(ctx.exception))
        self.assertNotIn(HOSTILE_PASSWORD, str(ctx.exception))

    @mock.patch("accounts.credentials.subprocess.run")
    def test_timeout_is_reported(self, mock_run: mock.Mock) -> None:
        mock_run.side_effect = subprocess.TimeoutExpired(["/usr/bin/doveadm"], 5.0)

        with self.assertRaisesMessage(MailHashError, "timed out"):
            self.encoder.mail_hash("secret-password")

    @mock.patch("accounts.credentials.subprocess.run")
    def test_empty_output_is_reported(self, mock_run: mock.Mock) -> None:
        mock_run.return_value = _completed("  \n")

        with self.assertRaisesMessage(MailHashError, "no output"):
            self.encoder.mail_hash("secret-password")

    @mock.patch("accounts.credentials.subprocess.run")
    def test_empty_password_never_reaches_doveadm(self, mock_run: mock.Mock) -> None:
        with self.assertRaises(MailHashError):
            self.encoder.mail_hash("")
        mock_run.assert_not_called()

    @mock.patch("accounts.credentials.subprocess.run")
    def test_verify_mail_hash_uses_exit_status(self, mock_run: mock.Mock) -> None:
        mock_run.return_value = _completed(returncode=0)
        self.assertTrue(self.encoder.verify_mail_hash("secret-password", "{SHA512-CRYPT}$6$x$y"))
        mock_run.assert_called_once_with(
            ["/usr/bin/doveadm", "pw", "-t", "{SHA512-CRYPT}$6$x$y", "-p", "secret-password"],
            capture_output=True,
            text=True,
            timeout=5.0,
            check=False,
        )

        mock_run.return_value = _completed(returncode=1)
        self.assertFalse(self.encoder.verify_mail_hash("wrong-password", "{SHA512-CRYPT}$6$x$y"))

    def test_web_hash_verifies_with_django_hashers(self) -> None:
        hashed = self.encoder.web_hash("secret-password")
        self.assertNotEqual(hashed, "secret-password")
        self.assertTrue(check_password("secret-password", hashed))

    def test_web_hash_rejects_empty_password(self) -> None:
        with self.assertRaises(ValueError):
            self.encoder.web_hash("")

    def test_masked_command_hides_password(self) -> None:
        self.assertEqual(
            self.encoder.masked_command(), "/usr/bin/doveadm pw -s SHA512-CRYPT -p [MASKED]"
        )


class GetCredentialEncoderTests(SimpleTestCase):
    @override_settings(ACCOUNTS_CREDENTIAL_ENCODER="accounts.credentials.DoveadmCredentialEncoder")
    def test_default_encoder_is_doveadm(self) -> None:
        self.assertIsInstance(get_credential_encoder(), DoveadmCredentialEncoder)

    @override_settings(ACCOUNTS_CREDENTIAL_ENCODER="accounts.tests.fakes.FakeCredentialEncoder")
    def test_encoder_is_configurable(self) -> None:
        self.assertIsInstance(get_credential_encoder(), FakeCredentialEncoder)
