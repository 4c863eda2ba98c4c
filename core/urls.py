from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("services.api.urls")),
    path("api/", include("custom_requests.api.urls")),
    path("api/", include("projects.api.urls")),
    path("api/", include("messaging.api.urls")),
    path("api/", include("lifecycle.api.urls")),
    path("api/", include("finance.api.urls")),
]
