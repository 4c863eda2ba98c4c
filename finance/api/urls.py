from django.urls import path

from .views import DashboardStatsAPIView, FinanceSummaryAPIView

urlpatterns = [
    path("finance/summary/", FinanceSummaryAPIView.as_view(), name="finance-summary"),
    path("dashboard/stats/", DashboardStatsAPIView.as_view(), name="dashboard-stats"),
]
