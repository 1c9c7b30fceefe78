"""
Superadmin API views.

These endpoints are used by the superadmin to:
- Create admins together with their license
- List and switch admins on or off
- Report licenses that expire soon and renew them
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from api.dependencies import get_lifecycle_service
from api.responses import error_response
from api.v1.base import ERROR_RESPONSES, ServiceView, body_value, get_caller, record_result
from api.v1.superadmin.serializers import (
    AdminListItemSerializer,
    CreateAdminRequestSerializer,
    CreateAdminResponseSerializer,
    CreatedAdminSerializer,
    ExpiringLicenseSerializer,
    RenewLicenseRequestSerializer,
    RenewLicenseResponseSerializer,
    ToggleAdminResponseSerializer,
)
from core.instrumentation import get_tracer

tracer = get_tracer(__name__)


class AdminsView(ServiceView):
    """View for creating and listing admins."""

    @extend_schema(
        operation_id="create_admin",
        summary="Create Admin",
        description=(
            "Create an admin account and issue it an active license in one "
            "transaction. The expiry is expiryDate when given, otherwise "
            "startDate (default today) plus licensePeriodDays, otherwise none."
        ),
        tags=["Superadmin API"],
        request=CreateAdminRequestSerializer,
        responses={201: CreateAdminResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Create an admin with a license."""
        with tracer.start_as_current_span("create_admin_with_license") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)

            result = get_lifecycle_service().create_admin_with_license(
                caller,
                email=body_value(request, "email"),
                password=body_value(request, "password"),
                name=body_value(request, "name"),
                start_date=body_value(request, "startDate"),
                expiry_date=body_value(request, "expiryDate"),
                license_period_days=body_value(request, "licensePeriodDays"),
            )
            record_result(span, result)
            if not result.ok:
                return error_response(result)

            span.set_attribute("admin.id", result.data.admin.id)
            span.set_attribute("license.id", result.data.license.id)
            return Response(
                {
                    "status": True,
                    "data": CreatedAdminSerializer(result.data).data,
                    "message": result.message,
                },
                status=status.HTTP_201_CREATED,
            )

    @extend_schema(
        operation_id="list_admins",
        summary="List Admins",
        description=(
            "One row per admin and license pair; admins without a license "
            "appear once with empty license fields. Newest admin first."
        ),
        tags=["Superadmin API"],
        responses={200: AdminListItemSerializer(many=True), **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """List admins with their licenses."""
        with tracer.start_as_current_span("list_admins") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)

            result = get_lifecycle_service().list_admins(caller)
            record_result(span, result)
            if not result.ok:
                return error_response(result)

            span.set_attribute("admins.rows", len(result.data))
            return Response(
                AdminListItemSerializer(result.data, many=True).data, status=status.HTTP_200_OK
            )


class ToggleAdminView(ServiceView):
    """View for switching an admin account on or off."""

    @extend_schema(
        operation_id="toggle_admin",
        summary="Toggle Admin",
        description="Flip an admin account's active flag.",
        tags=["Superadmin API"],
        request=None,
        responses={200: ToggleAdminResponseSerializer, **ERROR_RESPONSES},
    )
    def patch(self, request: Request, admin_id: int) -> Response:
        """Toggle an admin."""
        with tracer.start_as_current_span("toggle_admin_active") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)
            span.set_attribute("admin.id", admin_id)

            result = get_lifecycle_service().toggle_admin_active(caller, admin_id)
            record_result(span, result)
            if not result.ok:
                return error_response(result)

            return Response(
                {"status": True, "message": result.message, "is_active": result.data.is_active},
                status=status.HTTP_200_OK,
            )


class ExpiringLicensesView(ServiceView):
    """View for the licenses-expiring-soon report."""

    @extend_schema(
        operation_id="list_expiring_licenses",
        summary="List Expiring Licenses",
        description=(
            "Switched-on licenses whose expiry falls between the start of "
            "today and the end of the seventh day from today, with their "
            "owner's name and email. Soonest first."
        ),
        tags=["Superadmin API"],
        responses={200: ExpiringLicenseSerializer(many=True), **ERROR_RESPONSES},
    )
    def get(self, request: Request) -> Response:
        """List licenses expiring soon."""
        with tracer.start_as_current_span("list_expiring_licenses") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)

            result = get_lifecycle_service().list_expiring_soon(caller)
            record_result(span, result)
            if not result.ok:
                return error_response(result)

            span.set_attribute("licenses.count", len(result.data))
            return Response(
                ExpiringLicenseSerializer(result.data, many=True).data, status=status.HTTP_200_OK
            )


class RenewLicenseView(ServiceView):
    """View for renewing a license."""

    @extend_schema(
        operation_id="renew_license",
        summary="Renew License",
        description=(
            "Replace a license's expiry date. The new date is parsed the same "
            "way as on the update expiry endpoint."
        ),
        tags=["Superadmin API"],
        request=RenewLicenseRequestSerializer,
        responses={200: RenewLicenseResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Renew a license."""
        with tracer.start_as_current_span("renew_license") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)

            result = get_lifecycle_service().renew_license(
                caller,
                license_id=body_value(request, "license_id"),
                new_expiry_date=body_value(request, "new_expiry_date"),
            )
            record_result(span, result)
            if not result.ok:
                return error_response(result)

            span.set_attribute("license.id", result.data.id)
            body = RenewLicenseResponseSerializer(
                {
                    "status": True,
                    "message": result.message,
                    "id": result.data.id,
                    "expiry_date": result.data.expiry_date,
                    "license_status": result.data.status,
                }
            ).data
            return Response(body, status=status.HTTP_200_OK)
