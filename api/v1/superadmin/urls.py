"""
URL configuration for superadmin API endpoints.
"""

from django.urls import path

from api.v1.superadmin import views

app_name = "superadmin"

urlpatterns = [
    path("admins", views.AdminsView.as_view(), name="admins"),
    path(
        "admins/<int:admin_id>/toggle",
        views.ToggleAdminView.as_view(),
        name="toggle-admin",
    ),
    path(
        "licenses/expiring",
        views.ExpiringLicensesView.as_view(),
        name="expiring-licenses",
    ),
    path(
        "licenses/renew",
        views.RenewLicenseView.as_view(),
        name="renew-license",
    ),
]
