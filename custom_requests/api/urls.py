from django.urls import path
from .views import (
    CustomRequestDetailUpdateAPIView,
    CustomRequestListCreateAPIView,
    CustomRequestStatusCountsAPIView,
)

urlpatterns = [
    path("custom-requests/", CustomRequestListCreateAPIView.as_view(), name="custom-request-list"),
    path(
        "custom-requests/status-counts/",
        CustomRequestStatusCountsAPIView.as_view(),
        name="custom-request-status-counts",
    ),
    path("custom-requests/<int:pk>/", CustomRequestDetailUpdateAPIView.as_view(), name="custom-request-detail"),
]
