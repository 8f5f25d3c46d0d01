"""Password encoders for web login and Dovecot mail login."""
from __future__ import annotations

import logging
import subprocess
from typing import List, Optional

from django.conf import settings
from django.contrib.auth.hashers import make_password
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)


class MailHashError(Exception):
    """The mail password hash could not be produced or checked."""


class CredentialEncoder:
    """Turns a plaintext secret into the hashes stored on an account."""

    scheme = "SHA512-CRYPT"

    @property
    def format_tag(self) -> str:
        return "{%s}" % self.scheme

    def web_hash(self, plaintext: str) -> str:
        if not plaintext:
            raise ValueError("Cannot hash an empty password")
        return make_password(plaintext)

    def mail_hash(self, plaintext: str) -> str:
        raise NotImplementedError

    def verify_mail_hash(self, plaintext: str, mail_hash: str) -> bool:
        raise NotImplementedError


class DoveadmCredentialEncoder(CredentialEncoder):
    """Generates mail hashes with ``doveadm pw``.

    The plaintext travels as a single argv element and no shell is involved,
    so shell metacharacters in a password are inert. Messages attached to
    :class:`MailHashError` never include the command line because it carries
    the plaintext.
    """

    def __init__(
        self,
        binary: Optional[str] = None,
        scheme: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.binary = binary or settings.DOVEADM_BINARY
        self.scheme = scheme or settings.MAIL_HASH_SCHEME
        self.timeout = timeout if timeout is not None else settings.MAIL_HASH_TIMEOUT

    def masked_command(self) -> str:
        return f"{self.binary} pw -s {self.scheme} -p [MASKED]"

    def _run(self, args: List[str], check: bool) -> subprocess.CompletedProcess:
        try:
            return subprocess.run(
                [self.binary, *args],
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=check,
            )
        except FileNotFoundError as exc:
            raise MailHashError(f"{self.binary} not found") from exc
        except subprocess.TimeoutExpired as exc:
            raise MailHashError(f"{self.binary} timed out after {self.timeout}s") from exc
        except subprocess.CalledProcessError as exc:
            raise MailHashError(f"{self.binary} exited with status {exc.returncode}") from exc
        except OSError as exc:
            raise MailHashError(f"{self.binary} could not be executed: {exc.strerror}") from exc

    def mail_hash(self, plaintext: str) -> str:
        if not plaintext:
            raise MailHashError("Cannot hash an empty password")
        completed = self._run(["pw", "-s", self.scheme, "-p", plaintext], check=True)
        mail_hash = (completed.stdout or "").strip()
        if not mail_hash:
            raise MailHashError(f"{self.binary} produced no output")
        return mail_hash

    def verify_mail_hash(self, plaintext: str, mail_hash: str) -> bool:
        completed = self._run(["pw", "-t", mail_hash, "-p", plaintext], check=False)
        return completed.returncode == 0


def get_credential_encoder() -> CredentialEncoder:
    """Instantiate the encoder named by ``ACCOUNTS_CREDENTIAL_ENCODER``."""

    encoder_class = import_string(settings.ACCOUNTS_CREDENTIAL_ENCODER)
    return encoder_class()
