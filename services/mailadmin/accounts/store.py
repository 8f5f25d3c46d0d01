"""Persistence operations for accounts."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings
from django.db import DatabaseError, transaction
from django.utils.crypto import get_random_string

from .credentials import CredentialEncoder
from .models import Account
from .sync import synchronize_secret

logger = logging.getLogger(__name__)


class DeleteStatus(enum.Enum):
    DELETED = "deleted"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class DeleteOutcome:
    account_id: Any
    status: DeleteStatus
    message: str

    @property
    def ok(self) -> bool:
        return self.status is DeleteStatus.DELETED


@dataclass
class BatchDeleteResult:
    deleted: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.deleted > 0

    @property
    def message(self) -> str:
        if self.deleted:
            return f"{self.deleted} users deleted successfully"
        return "No users were deleted"

    def as_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "deleted": self.deleted,
            "failed": self.failed,
            "message": self.message,
            "errors": list(self.errors),
        }


class AccountStore:
    """Create, update and delete accounts, routing secrets through the encoder."""

    def __init__(self, encoder: CredentialEncoder) -> None:
        self.encoder = encoder

    def get(self, account_id: Any) -> Optional[Account]:
        return Account.objects.filter(pk=account_id).first()

    def create(self, data: Dict[str, Any]) -> Account:
        values = dict(data)
        plaintext = values.pop("password", None) or get_random_string(
            settings.ACCOUNTS_GENERATED_PASSWORD_LENGTH
        )
        account = Account(**values)
        synchronize_secret(account, plaintext, self.encoder)
        account.save()
        logger.info("Created account %s", account.pk)
        return account

    def update(self, account: Account, data: Dict[str, Any]) -> Account:
        values = dict(data)
        plaintext = values.pop("password", None)
        for attr, value in values.items():
            setattr(account, attr, value)
        if plaintext is not None:
            synchronize_secret(account, plaintext, self.encoder)
        account.save()
        logger.info("Updated account %s (%s)", account.pk, ", ".join(sorted(data)) or "no fields")
        return account

    def set_password(self, account: Account, plaintext: str) -> Account:
        changed = synchronize_secret(account, plaintext, self.encoder)
        if changed:
            account.save(update_fields=[*changed, "updated_at"])
            logger.info("Password updated for account %s", account.pk)
        return account

    def delete(self, account_id: Any) -> DeleteOutcome:
        try:
            with transaction.atomic():
                account = Account.objects.select_for_update().filter(pk=account_id).first()
                if account is None:
                    logger.warning("Account %s not found for deletion", account_id)
                    return DeleteOutcome(
                        account_id, DeleteStatus.NOT_FOUND, f"User with ID {account_id} not found"
                    )
                account.delete()
        except DatabaseError as exc:
            logger.exception("Deleting account %s failed", account_id)
            return DeleteOutcome(
                account_id, DeleteStatus.FAILED, f"Error deleting user {account_id}: {exc}"
            )
        logger.info("Deleted account %s", account_id)
        return DeleteOutcome(account_id, DeleteStatus.DELETED, "User deleted successfully")

    def delete_many(self, account_ids: Iterable[Any]) -> BatchDeleteResult:
        """Delete each id on its own; a failure never undoes earlier deletions."""

        result = BatchDeleteResult()
        for account_id in dict.fromkeys(account_ids):
            outcome = self.delete(account_id)
            if outcome.ok:
                result.deleted += 1
            else:
                result.failed += 1
                result.errors.append(outcome.message)
        logger.info("Batch delete finished: %s deleted, %s failed", result.deleted, result.failed)
        return result
