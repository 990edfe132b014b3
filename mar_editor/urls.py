"""
URL configuration for the MAR editor project.
"""
from django.contrib import admin
from django.contrib.auth.views import LogoutView
from django.urls import include, path

admin.site.logout = LogoutView.as_view(next_page="/admin/")


urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("web_nurse.urls", namespace="web_nurse")),
]
