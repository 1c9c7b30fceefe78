"""
Serializers for License API endpoints.

Request serializers only shape the payload; field rules (required keys,
key format, date format) are enforced by the lifecycle service so every
entry point reports them the same way.
"""

from rest_framework import serializers


def _optional_text(**kwargs):
    return serializers.CharField(required=False, allow_blank=True, allow_null=True, **kwargs)


class ActivateLicenseRequestSerializer(serializers.Serializer):
    """Serializer for activate license request."""

    licenseKey = _optional_text(max_length=64)


class UpdateExpiryRequestSerializer(serializers.Serializer):
    """Serializer for update expiry request. Omit expiryDate to clear it."""

    expiryDate = _optional_text(help_text="Expiry day as YYYY-MM-DD")


class LicenseSerializer(serializers.Serializer):
    """Serializer for LicenseDTO."""

    id = serializers.IntegerField()
    license_key = serializers.CharField()
    admin_id = serializers.IntegerField(allow_null=True)
    assigned_email = serializers.CharField(allow_null=True)
    status = serializers.CharField()
    is_active = serializers.BooleanField()
    expiry_date = serializers.DateTimeField(allow_null=True)
    created_at = serializers.DateTimeField(allow_null=True)
    updated_at = serializers.DateTimeField(allow_null=True)


class MessageResponseSerializer(serializers.Serializer):
    """Serializer for a bare status and message response."""

    status = serializers.BooleanField()
    message = serializers.CharField()


class ValidateLicenseResponseSerializer(MessageResponseSerializer):
    """Serializer for validate license response."""

    valid = serializers.BooleanField()
    license_key = serializers.CharField(allow_null=True, required=False)
    expiry_date = serializers.DateTimeField(allow_null=True, required=False)


class GenerateLicenseResponseSerializer(MessageResponseSerializer):
    """Serializer for generate license response."""

    id = serializers.IntegerField()
    license_key = serializers.CharField()
    expiry_date = serializers.DateTimeField(allow_null=True)


class LicenseListResponseSerializer(MessageResponseSerializer):
    """Serializer for list licenses response."""

    data = LicenseSerializer(many=True)


class ToggleLicenseResponseSerializer(MessageResponseSerializer):
    """Serializer for toggle license response."""

    id = serializers.IntegerField()
    is_active = serializers.BooleanField()


class UpdateExpiryResponseSerializer(MessageResponseSerializer):
    """Serializer for update expiry response."""

    id = serializers.IntegerField()
    expiry_date = serializers.DateTimeField(allow_null=True)
    license_status = serializers.CharField()


class ErrorDetailSerializer(serializers.Serializer):
    code = serializers.CharField()
    kind = serializers.CharField()
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    """Serializer for the error body shared by every endpoint."""

    status = serializers.BooleanField(default=False)
    error = ErrorDetailSerializer()
    message = serializers.CharField()
