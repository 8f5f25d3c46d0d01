"""Keep the three password representations of an account in step."""
from __future__ import annotations

import logging
from typing import List

from .credentials import CredentialEncoder, MailHashError
from .models import Account

logger = logging.getLogger(__name__)


def _label(account: Account) -> str:
    if account.pk is not None:
        return f"account {account.pk}"
    return account.email or "new account"


def synchronize_secret(account: Account, plaintext: str, encoder: CredentialEncoder) -> List[str]:
    """Write ``plaintext`` into the web hash, plaintext mirror and mail hash.

    The account is only modified in memory; the caller saves it. Returns the
    fields that changed, which is empty when ``plaintext`` is the stored web
    hash itself (an already-hashed value passed back in).

    A mail hash failure leaves ``emailpw`` as ``None`` and is logged rather
    than raised, so the web login still gets the new password.
    """

    if not plaintext:
        raise ValueError("A non-empty password is required")

    if account.password and plaintext == account.password:
        logger.info("Submitted password for %s is its stored hash; skipping", _label(account))
        return []

    account.password = encoder.web_hash(plaintext)
    account.clearpw = plaintext

    try:
        mail_hash = encoder.mail_hash(plaintext)
    except MailHashError as exc:
        logger.error("Failed to generate mail password hash for %s: %s", _label(account), exc)
        account.emailpw = None
    else:
        if not mail_hash.startswith(encoder.format_tag):
            logger.warning(
                "Mail password hash for %s lacks the %s tag", _label(account), encoder.format_tag
            )
        account.emailpw = mail_hash

    logger.info(
        "Password synchronization applied for %s (mail hash %s)",
        _label(account),
        "present" if account.emailpw else "absent",
    )
    return list(Account.SECRET_FIELDS)
