"""API views for the mailadmin service."""
from __future__ import annotations

from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view
from rest_framework.filters import SearchFilter
from rest_framework.request import Request
from rest_framework.response import Response

from .credentials import get_credential_encoder
from .filters import DataTableOrderingFilter
from .models import Account
from .pagination import DataTablePagination
from .serializers import AccountSerializer, BatchDeleteSerializer, PasswordChangeSerializer
from .store import AccountStore, DeleteStatus
from .tasks import regenerate_mail_hash


class AccountViewSet(viewsets.ModelViewSet):
    queryset = Account.objects.all()
    serializer_class = AccountSerializer
    pagination_class = DataTablePagination
    filter_backends = [SearchFilter, DataTableOrderingFilter]
    search_fields = ["name", "email", "clearpw", "emailpw", "home"]
    ordering_fields = ["name", "email", "created_at", "updated_at"]
    ordering = "updated_at"
    lookup_value_regex = r"\d+"

    def get_store(self) -> AccountStore:
        return AccountStore(get_credential_encoder())

    def perform_create(self, serializer: AccountSerializer) -> None:
        serializer.instance = self.get_store().create(serializer.validated_data)

    def perform_update(self, serializer: AccountSerializer) -> None:
        serializer.instance = self.get_store().update(serializer.instance, serializer.validated_data)

    def update(self, request: Request, *args, **kwargs):  # type: ignore[override]
        kwargs["partial"] = True
        return super().update(request, *args, **kwargs)

    def destroy(self, request: Request, *args, **kwargs):  # type: ignore[override]
        outcome = self.get_store().delete(kwargs[self.lookup_field])
        if outcome.status is DeleteStatus.NOT_FOUND:
            status_code = status.HTTP_404_NOT_FOUND
        elif outcome.status is DeleteStatus.FAILED:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        else:
            status_code = status.HTTP_200_OK
        return Response({"success": outcome.ok, "message": outcome.message}, status=status_code)

    @action(detail=False, methods=["post"], url_path="batch-delete")
    def batch_delete(self, request: Request, *args, **kwargs):  # type: ignore[override]
        """Delete several accounts, reporting each failure instead of rolling back."""

        serializer = BatchDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.get_store().delete_many(serializer.validated_data["ids"])
        status_code = status.HTTP_200_OK if result.success else status.HTTP_422_UNPROCESSABLE_ENTITY
        return Response(result.as_dict(), status=status_code)

    @action(detail=True, methods=["post"], url_path="password")
    def set_password(self, request: Request, *args, **kwargs):  # type: ignore[override]
        """Change an account password, resynchronising all stored forms."""

        account = self.get_object()
        serializer = PasswordChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        account = self.get_store().set_password(account, serializer.validated_data["password"])
        return Response(self.get_serializer(account).data)

    @action(
        detail=True,
        methods=["post"],
        url_path="regenerate-mail-hash",
        url_name="regenerate-mail-hash",
    )
    def queue_mail_hash(self, request: Request, *args, **kwargs):  # type: ignore[override]
        """Queue a rebuild of the mail hash from the stored password."""

        account = self.get_object()
        if not account.clearpw:
            return Response(
                {"detail": "Account has no stored password to hash."},
                status=status.HTTP_409_CONFLICT,
            )
        regenerate_mail_hash.delay(account.id)
        return Response({"status": "queued", "account": account.id}, status=status.HTTP_202_ACCEPTED)


@api_view(["GET"])
def health(request: Request):  # type: ignore[override]
    """Readiness endpoint for orchestration tooling."""

    return Response({"status": "ok"})
