"""
URL configuration for license API endpoints.
"""

from django.urls import path

from api.v1.licenses import views

app_name = "license"

urlpatterns = [
    path("activate", views.ActivateLicenseView.as_view(), name="activate"),
    path("validate", views.ValidateLicenseView.as_view(), name="validate"),
    path("generate", views.GenerateLicenseView.as_view(), name="generate"),
    path("all", views.ListLicensesView.as_view(), name="list"),
    path("toggle/<int:license_id>", views.ToggleLicenseView.as_view(), name="toggle"),
    path("expiry/<int:license_id>", views.UpdateExpiryView.as_view(), name="expiry"),
]
