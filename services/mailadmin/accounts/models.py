"""Database models for the mail account administration service."""
from __future__ import annotations

from django.contrib.auth.hashers import check_password
from django.db import models


class Account(models.Model):
    """A web login that doubles as a Dovecot mailbox account.

    ``password`` holds the Django password hash, ``clearpw`` the plaintext
    mirror and ``emailpw`` the crypt hash read by the mail server. The three
    are only ever written together by :func:`accounts.sync.synchronize_secret`.
    """

    SECRET_FIELDS = ("password", "clearpw", "emailpw")

    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=255, unique=True)
    email_verified_at = models.DateTimeField(null=True, blank=True)
    password = models.CharField(max_length=128)
    clearpw = models.CharField(max_length=127, null=True, blank=True)
    emailpw = models.CharField(max_length=255, null=True, blank=True)
    active = models.BooleanField(default=True)
    gid = models.IntegerField(default=1000)
    uid = models.IntegerField(default=1000)
    home = models.CharField(max_length=127, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-updated_at", "id"]

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    def check_password(self, raw_password: str) -> bool:
        """Verify ``raw_password`` against the web-login hash."""

        if not self.password:
            return False
        return check_password(raw_password, self.password)
