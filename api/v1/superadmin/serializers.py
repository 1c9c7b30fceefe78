"""
Serializers for Superadmin API endpoints.
"""

from rest_framework import serializers


class CreateAdminRequestSerializer(serializers.Serializer):
    """Serializer for create admin request."""

    email = serializers.CharField(required=False, allow_blank=True)
    password = serializers.CharField(required=False, allow_blank=True, write_only=True)
    name = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    startDate = serializers.CharField(
        required=False, allow_null=True, help_text="License start day as YYYY-MM-DD"
    )
    expiryDate = serializers.CharField(
        required=False, allow_null=True, help_text="Expiry day as YYYY-MM-DD"
    )
    licensePeriodDays = serializers.IntegerField(required=False, allow_null=True, min_value=1)


class AdminSerializer(serializers.Serializer):
    """Serializer for AdminDTO."""

    id = serializers.IntegerField()
    email = serializers.CharField()
    name = serializers.CharField(allow_null=True)
    role = serializers.CharField()
    is_active = serializers.BooleanField()


class IssuedLicenseSerializer(serializers.Serializer):
    """Serializer for IssuedLicenseDTO."""

    id = serializers.IntegerField()
    license_key = serializers.CharField()
    status = serializers.CharField()
    expiry_date = serializers.DateTimeField(allow_null=True)
    start_date = serializers.DateField()


class CreatedAdminSerializer(serializers.Serializer):
    """Serializer for CreatedAdminDTO."""

    admin = AdminSerializer()
    license = IssuedLicenseSerializer()


class CreateAdminResponseSerializer(serializers.Serializer):
    """Serializer for create admin response."""

    status = serializers.BooleanField()
    data = CreatedAdminSerializer()
    message = serializers.CharField()


class AdminListItemSerializer(serializers.Serializer):
    """Serializer for one admin/license row of the admin listing."""

    id = serializers.IntegerField()
    name = serializers.CharField(allow_null=True)
    email = serializers.CharField()
    is_active = serializers.BooleanField()
    license_key = serializers.CharField(allow_null=True)
    status = serializers.CharField(allow_null=True)
    expiry_date = serializers.DateTimeField(allow_null=True)


class ToggleAdminResponseSerializer(serializers.Serializer):
    """Serializer for toggle admin response."""

    status = serializers.BooleanField()
    message = serializers.CharField()
    is_active = serializers.BooleanField()


class ExpiringLicenseSerializer(serializers.Serializer):
    """Serializer for ExpiringLicenseDTO."""

    name = serializers.CharField(allow_null=True)
    email = serializers.CharField(allow_null=True)
    license_key = serializers.CharField()
    expiry_date = serializers.DateTimeField()


class RenewLicenseRequestSerializer(serializers.Serializer):
    """Serializer for renew license request."""

    license_id = serializers.IntegerField(required=False)
    new_expiry_date = serializers.CharField(
        required=False, help_text="New expiry day as YYYY-MM-DD"
    )


class RenewLicenseResponseSerializer(serializers.Serializer):
    """Serializer for renew license response."""

    status = serializers.BooleanField()
    message = serializers.CharField()
    id = serializers.IntegerField()
    expiry_date = serializers.DateTimeField(allow_null=True)
    license_status = serializers.CharField()
