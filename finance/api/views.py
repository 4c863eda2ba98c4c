from decimal import Decimal

from django.db.models import Sum
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from clients.api.permissions import IsAdminStaff
from custom_requests.models import CustomRequest
from messaging.models import Message
from projects.models import Project
from services.models import Service


def _client_name(client):
    return client.company_name or client.user.get_username()


def _sum_amount(qs):
    return qs.aggregate(total=Sum("amount"))["total"] or Decimal("0")


class FinanceSummaryAPIView(APIView):
    """
    GET /api/finance/summary/

    Revenue overview for the studio:
    - total_revenue: sum of completed project amounts
    - pending_revenue: sum of every other project amount
    - active_orders: projects not yet completed
    - project_count: all projects
    - transactions: one row per project, newest first

    Permissions: authenticated admin staff
    """

    permission_classes = [IsAuthenticated, IsAdminStaff]

    def get(self, request):
        projects = Project.objects.select_related("client__user").order_by("-created_at", "-id")
        completed = projects.filter(status=Project.Status.COMPLETED)
        open_projects = projects.exclude(status=Project.Status.COMPLETED)

        transactions = [
            {
                "id": p.id,
                "client": _client_name(p.client),
                "title": p.title,
                "amount": p.amount,
                "date": p.created_at,
                "status": "completed" if p.status == Project.Status.COMPLETED else "pending",
            }
            for p in projects
        ]
        data = {
            "total_revenue": _sum_amount(completed),
            "pending_revenue": _sum_amount(open_projects),
            "active_orders": open_projects.count(),
            "project_count": projects.count(),
            "transactions": transactions,
        }
        return Response(data, status=status.HTTP_200_OK)


class DashboardStatsAPIView(APIView):
    """
    GET /api/dashboard/stats/

    Counters for the admin dashboard cards:
    - active_orders: projects not yet completed
    - pending_requests: custom requests waiting for a review
    - active_services: services listed in the catalog
    - unread_messages: client messages the studio has not read yet

    Permissions: authenticated admin staff
    """

    permission_classes = [IsAuthenticated, IsAdminStaff]

    def get(self, request):
        data = {
            "active_orders": Project.objects.exclude(status=Project.Status.COMPLETED).count(),
            "pending_requests": CustomRequest.objects.filter(
                status=CustomRequest.Status.PENDING
            ).count(),
            "active_services": Service.objects.filter(status=Service.Status.ACTIVE).count(),
            "unread_messages": Message.objects.filter(
                sender_type=Message.SenderType.CLIENT, read=False
            ).count(),
        }
        return Response(data, status=status.HTTP_200_OK)
