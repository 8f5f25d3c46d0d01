"""Serializers for account records."""
from __future__ import annotations

from typing import Any, Dict

from rest_framework import serializers

from .models import Account

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 127


class AccountSerializer(serializers.ModelSerializer):
    password = serializers.CharField(
        write_only=True,
        required=False,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        trim_whitespace=False,
    )
    clearpw = serializers.CharField(
        required=False,
        min_length=PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        trim_whitespace=False,
    )
    gid = serializers.IntegerField(required=False, min_value=0)
    uid = serializers.IntegerField(required=False, min_value=0)

    class Meta:
        model = Account
        fields = [
            "id",
            "name",
            "email",
            "email_verified_at",
            "created_at",
            "updated_at",
            "password",
            "clearpw",
            "emailpw",
            "active",
            "gid",
            "uid",
            "home",
        ]
        read_only_fields = ["email_verified_at", "created_at", "updated_at", "emailpw"]

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:  # type: ignore[override]
        """Fold ``password`` and ``clearpw`` into a single secret candidate."""

        password = attrs.pop("password", None)
        clearpw = attrs.pop("clearpw", None)
        if password is not None and clearpw is not None and password != clearpw:
            raise serializers.ValidationError({"clearpw": "Must match password when both are given."})
        secret = password if password is not None else clearpw
        if secret is not None:
            attrs["password"] = secret
        return attrs


class PasswordChangeSerializer(serializers.Serializer):
    password = serializers.CharField(
        min_length=PASSWORD_MIN_LENGTH, max_length=PASSWORD_MAX_LENGTH, trim_whitespace=False
    )
    password_confirmation = serializers.CharField(trim_whitespace=False)

    def validate(self, attrs: Dict[str, Any]) -> Dict[str, Any]:  # type: ignore[override]
        if attrs["password"] != attrs["password_confirmation"]:
            raise serializers.ValidationError({"password_confirmation": "Passwords do not match."})
        return attrs


class BatchDeleteSerializer(serializers.Serializer):
    ids = serializers.ListField(
        child=serializers.IntegerField(),
        allow_empty=False,
        error_messages={
            "required": "Invalid request: ids array is required",
            "empty": "Invalid request: ids array is required",
        },
    )
