"""
License API views.

These endpoints are used by admins to activate and validate their
license, and by the superadmin to issue and manage licenses.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response

from api.dependencies import get_lifecycle_service
from api.responses import error_response
from api.v1.base import ERROR_RESPONSES, ServiceView, body_value, get_caller, record_result
from api.v1.licenses.serializers import (
    ActivateLicenseRequestSerializer,
    GenerateLicenseResponseSerializer,
    LicenseListResponseSerializer,
    LicenseSerializer,
    MessageResponseSerializer,
    ToggleLicenseResponseSerializer,
    UpdateExpiryRequestSerializer,
    UpdateExpiryResponseSerializer,
    ValidateLicenseResponseSerializer,
)
from core.instrumentation import get_tracer

tracer = get_tracer(__name__)


class ActivateLicenseView(ServiceView):
    """View for activating a license key."""

    @extend_schema(
        operation_id="activate_license",
        summary="Activate License",
        description=(
            "Bind a license key to the calling admin and mark it active. "
            "The key is trimmed and uppercased before it is checked."
        ),
        tags=["License API"],
        request=ActivateLicenseRequestSerializer,
        responses={200: MessageResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Activate a license for the caller."""
        with tracer.start_as_current_span("activate_license") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)

            license_key = body_value(request, "licenseKey")

            result = get_lifecycle_service().activate(caller, license_key)
            record_result(span, result)
            if not result.ok:
                return error_response(result)
            return Response({"status": True, "message": result.message}, status=status.HTTP_200_OK)


class ValidateLicenseView(ServiceView):
    """View for checking the caller's license."""

    @extend_schema(
        operation_id="validate_license",
        summary="Validate License",
        description="Report whether the caller holds an active, switched-on license.",
        tags=["License API"],
        responses={200: ValidateLicenseResponseSerializer, 401: ERROR_RESPONSES[401], 500: ERROR_RESPONSES[500]},
    )
    def get(self, request: Request) -> Response:
        """Validate the caller's license."""
        with tracer.start_as_current_span("validate_license") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)

            result = get_lifecycle_service().validate(caller)
            record_result(span, result)
            if not result.ok:
                return error_response(result)

            span.set_attribute("license.valid", result.data.valid)
            body = ValidateLicenseResponseSerializer(
                {
                    "status": True,
                    "message": result.message,
                    "valid": result.data.valid,
                    "license_key": result.data.license_key,
                    "expiry_date": result.data.expiry_date,
                }
            ).data
            return Response(body, status=status.HTTP_200_OK)


class GenerateLicenseView(ServiceView):
    """View for issuing a new unassigned license."""

    @extend_schema(
        operation_id="generate_license",
        summary="Generate License",
        description="Issue a new unassigned license key. Superadmin only.",
        tags=["License API"],
        parameters=[
            OpenApiParameter(
                name="expiryDate",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Expiry day as YYYY-MM-DD",
            )
        ],
        request=None,
        responses={201: GenerateLicenseResponseSerializer, **ERROR_RESPONSES},
    )
    def post(self, request: Request) -> Response:
        """Generate a license."""
        with tracer.start_as_current_span("generate_license") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)

            expiry_date = request.query_params.get("expiryDate")
            result = get_lifecycle_service().generate(caller, expiry_date)
            record_result(span, result)
            if not result.ok:
                return error_response(result)

            span.set_attribute("license.id", result.data.id)
            body = GenerateLicenseResponseSerializer(
                {
                    "status": True,
                    "message": result.message,
                    "id": result.data.id,
                    "license_key": result.data.license_key,
                    "expiry_date": result.data.expiry_date,
                }
            ).data
            return Response(body, status=status.HTTP_201_CREATED)


class ListLicensesView(ServiceView):
    """View for listing licenses visible to the caller."""

    @extend_schema(
        operation_id="list_licenses",
        summary="List Licenses",
        description=(
            "The superadmin sees every license; an admin sees the licenses "
            "bound to their account. Newest first."
        ),
        tags=["License API"],
        responses={200: LicenseListResponseSerializer, 401: ERROR_RESPONSES[401], 500: ERROR_RESPONSES[500]},
    )
    def get(self, request: Request) -> Response:
        """List licenses."""
        with tracer.start_as_current_span("list_licenses") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)

            result = get_lifecycle_service().list_all(caller)
            record_result(span, result)
            if not result.ok:
                return error_response(result)

            span.set_attribute("licenses.count", len(result.data))
            return Response(
                {
                    "status": True,
                    "data": LicenseSerializer(result.data, many=True).data,
                    "message": result.message,
                },
                status=status.HTTP_200_OK,
            )


class ToggleLicenseView(ServiceView):
    """View for switching a license on or off."""

    @extend_schema(
        operation_id="toggle_license",
        summary="Toggle License",
        description="Flip a license's active switch without changing its status. Superadmin only.",
        tags=["License API"],
        request=None,
        responses={200: ToggleLicenseResponseSerializer, **ERROR_RESPONSES},
    )
    def put(self, request: Request, license_id: int) -> Response:
        """Toggle a license."""
        with tracer.start_as_current_span("toggle_license") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)
            span.set_attribute("license.id", license_id)

            result = get_lifecycle_service().toggle_active(caller, license_id)
            record_result(span, result)
            if not result.ok:
                return error_response(result)

            return Response(
                {
                    "status": True,
                    "id": result.data.id,
                    "is_active": result.data.is_active,
                    "message": result.message,
                },
                status=status.HTTP_200_OK,
            )


class UpdateExpiryView(ServiceView):
    """View for setting or clearing a license's expiry date."""

    @extend_schema(
        operation_id="update_license_expiry",
        summary="Update License Expiry",
        description=(
            "Set the expiry date of a license to the end of the given day, "
            "or clear it when expiryDate is omitted. Superadmin only."
        ),
        tags=["License API"],
        request=UpdateExpiryRequestSerializer,
        responses={200: UpdateExpiryResponseSerializer, **ERROR_RESPONSES},
    )
    def put(self, request: Request, license_id: int) -> Response:
        """Update a license's expiry date."""
        with tracer.start_as_current_span("update_license_expiry") as span:
            caller = get_caller(request)
            self.trace_caller(span, caller)
            span.set_attribute("license.id", license_id)

            expiry_date = body_value(request, "expiryDate")
            result = get_lifecycle_service().update_expiry(caller, license_id, expiry_date)
            record_result(span, result)
            if not result.ok:
                return error_response(result)

            body = UpdateExpiryResponseSerializer(
                {
                    "status": True,
                    "message": result.message,
                    "id": result.data.id,
                    "expiry_date": result.data.expiry_date,
                    "license_status": result.data.status,
                }
            ).data
            return Response(body, status=status.HTTP_200_OK)
