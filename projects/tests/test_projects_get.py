from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from clients.models import Client
from projects.models import Project
from services.models import Service

User = get_user_model()


def create_project(client, service=None, status_value="pending", amount="1000.00", title="Shop"):
    return Project.objects.create(
        client=client,
        service=service,
        title=title,
        amount=Decimal(amount),
        status=status_value,
    )


class ProjectGetTests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user("admin", "admin@example.com", "pass1234", is_staff=True)
        self.admin_token = Token.objects.create(user=self.admin)
        self.cust = User.objects.create_user("ada", "ada@example.com", "pass1234")
        self.cust_token = Token.objects.create(user=self.cust)
        self.other = User.objects.create_user("bob", "bob@example.com", "pass1234")
        self.other_token = Token.objects.create(user=self.other)

        self.service = Service.objects.create(category="web", title="Landing page", price=Decimal("1000"))
        self.cust_client = Client.objects.create(user=self.cust)
        self.other_client = Client.objects.create(user=self.other)

        self.p1 = create_project(self.cust_client, self.service, "pending")
        self.p2 = create_project(self.cust_client, self.service, "review", title="Redesign")
        self.p3 = create_project(self.other_client, self.service, "completed", title="Bob shop")

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_list_requires_auth_401(self):
        res = self.client.get(reverse("project-list"))
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_client_sees_own_projects_newest_first(self):
        self.auth(self.cust_token)
        res = self.client.get(reverse("project-list"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual([p["id"] for p in res.data], [self.p2.id, self.p1.id])

    def test_representation_has_progress_and_next_status(self):
        self.auth(self.cust_token)
        res = self.client.get(reverse("project-detail", args=[self.p2.id]))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["stage_label"], "Review")
        self.assertEqual(res.data["progress"], 75)
        self.assertEqual(res.data["next_status"], "completed")
        self.assertEqual(res.data["amount"], "1000.00")

    def test_completed_project_has_no_next_status(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("project-detail", args=[self.p3.id]))
        self.assertEqual(res.data["progress"], 100)
        self.assertIsNone(res.data["next_status"])

    def test_admin_lists_all_and_filters_by_status(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("project-list"))
        self.assertEqual(len(res.data), 3)
        res = self.client.get(reverse("project-list"), {"status": "completed"})
        self.assertEqual([p["id"] for p in res.data], [self.p3.id])

    def test_invalid_status_filter_400(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("project-list"), {"status": "done"})
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_other_clients_project_403(self):
        self.auth(self.cust_token)
        res = self.client.get(reverse("project-detail", args=[self.p3.id]))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_board_columns_in_pipeline_order(self):
        self.auth(self.admin_token)
        res = self.client.get(reverse("project-board"))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        columns = res.data["columns"]
        self.assertEqual([c["status"] for c in columns], ["pending", "in_progress", "review", "completed"])
        self.assertEqual([c["label"] for c in columns], ["Pending", "In Progress", "Review", "Completed"])
        self.assertEqual([c["count"] for c in columns], [1, 0, 1, 1])
        self.assertEqual(columns[0]["projects"][0]["id"], self.p1.id)

    def test_board_admin_only_403(self):
        self.auth(self.cust_token)
        res = self.client.get(reverse("project-board"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
