"""Background tasks for the mailadmin service."""
from __future__ import annotations

import logging

from celery import shared_task
from django.db import transaction

from .credentials import MailHashError, get_credential_encoder
from .models import Account

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=5)
def regenerate_mail_hash(self, account_id: int) -> None:
    """Rebuild ``emailpw`` from the stored plaintext mirror.

    Used to repair accounts whose mail hash could not be generated at write
    time. The hash is only stored if the plaintext is still the one that was
    hashed.
    """

    account = Account.objects.filter(pk=account_id).first()
    if account is None:
        logger.warning("Account %s does not exist", account_id)
        return
    if not account.clearpw:
        logger.info("Account %s has no stored password to hash", account_id)
        return

    plaintext = account.clearpw
    encoder = get_credential_encoder()
    try:
        mail_hash = encoder.mail_hash(plaintext)
    except MailHashError as exc:
        if self.request.retries >= self.max_retries:
            logger.error("Giving up on mail hash for account %s: %s", account_id, exc)
            return
        logger.warning("Mail hash for account %s failed, retrying: %s", account_id, exc)
        raise self.retry(exc=exc, countdown=min(60, 2 ** self.request.retries))

    with transaction.atomic():
        current = Account.objects.select_for_update().filter(pk=account_id).first()
        if current is None:
            logger.warning("Account %s was deleted while hashing", account_id)
            return
        if current.clearpw != plaintext:
            logger.info("Password of account %s changed while hashing; discarding", account_id)
            return
        current.emailpw = mail_hash
        current.save(update_fields=["emailpw", "updated_at"])
    logger.info("Mail hash regenerated for account %s", account_id)
