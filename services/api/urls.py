from django.urls import path
from .views import ServiceListCreateAPIView, ServiceRetrieveUpdateDestroyAPIView, ServiceToggleAPIView

urlpatterns = [
    path("services/", ServiceListCreateAPIView.as_view(), name="service-list"),
    path("services/<int:pk>/", ServiceRetrieveUpdateDestroyAPIView.as_view(), name="service-detail"),
    path("services/<int:pk>/toggle/", ServiceToggleAPIView.as_view(), name="service-toggle"),
]
