from decimal import Decimal

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.authtoken.models import Token
from rest_framework.test import APITestCase

from clients.models import Client
from custom_requests.models import CustomRequest
from messaging.models import Message
from projects.models import Project

User = get_user_model()


class MessagesAPITests(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user("admin", "admin@example.com", "pass1234", is_staff=True)
        self.admin_token = Token.objects.create(user=self.admin)
        self.cust = User.objects.create_user("ada", "ada@example.com", "pass1234")
        self.cust_token = Token.objects.create(user=self.cust)
        self.other = User.objects.create_user("bob", "bob@example.com", "pass1234")
        self.other_token = Token.objects.create(user=self.other)

        self.req = CustomRequest.objects.create(
            user=self.cust,
            category="web",
            name="Ada",
            email="ada@example.com",
            status="converted",
            approved_price=Decimal("800"),
        )
        self.cust_client = Client.objects.create(user=self.cust)
        self.converted = Project.objects.create(
            client=self.cust_client, source_request=self.req, title="Web Platform Project", amount=Decimal("800")
        )
        self.req.converted_project = self.converted
        self.req.save()
        self.catalog = Project.objects.create(client=self.cust_client, title="Logo", amount=Decimal("300"))

        self.url = reverse("message-list")

    def auth(self, token):
        self.client.credentials(HTTP_AUTHORIZATION=f"Token {token.key}")

    def test_unauthenticated_401(self):
        res = self.client.get(self.url, {"request_id": self.req.id})
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_client_posts_and_admin_reads_same_thread(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url, {"request_id": self.req.id, "text": "  Hello  "}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["text"], "Hello")
        self.assertEqual(res.data["sender_type"], "client")
        self.assertEqual(res.data["request"], self.req.id)
        self.assertIsNone(res.data["project"])

        self.auth(self.admin_token)
        res = self.client.post(self.url, {"project_id": self.converted.id, "text": "Hi Ada"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["sender_type"], "admin")
        self.assertEqual(res.data["request"], self.req.id)

        res = self.client.get(self.url, {"request_id": self.req.id})
        self.assertEqual([m["text"] for m in res.data], ["Hello", "Hi Ada"])
        self.auth(self.cust_token)
        res = self.client.get(self.url, {"project_id": self.converted.id})
        self.assertEqual([m["text"] for m in res.data], ["Hello", "Hi Ada"])

    def test_catalog_project_uses_project_thread(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url, {"project_id": self.catalog.id, "text": "Colors?"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["project"], self.catalog.id)
        self.assertIsNone(res.data["request"])

    def test_blank_text_400(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url, {"request_id": self.req.id, "text": "   "}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_exactly_one_target_400(self):
        self.auth(self.cust_token)
        res = self.client.post(self.url, {"text": "x"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        res = self.client.post(
            self.url, {"request_id": self.req.id, "project_id": self.catalog.id, "text": "x"}, format="json"
        )
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_other_client_403(self):
        self.auth(self.other_token)
        res = self.client.get(self.url, {"request_id": self.req.id})
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        res = self.client.post(self.url, {"project_id": self.catalog.id, "text": "hi"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Message.objects.exists())

    def test_unknown_target_404(self):
        self.auth(self.admin_token)
        res = self.client.get(self.url, {"project_id": 999999})
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)

    def test_mark_read_and_thread_list_unread_counts(self):
        self.auth(self.cust_token)
        self.client.post(self.url, {"request_id": self.req.id, "text": "one"}, format="json")
        self.client.post(self.url, {"request_id": self.req.id, "text": "two"}, format="json")
        self.client.post(self.url, {"project_id": self.catalog.id, "text": "three"}, format="json")

        self.auth(self.admin_token)
        threads = self.client.get(reverse("message-threads")).data
        by_key = {(t["thread"]["field"], t["thread"]["id"]): t for t in threads}
        self.assertEqual(set(by_key), {("request", self.req.id), ("project", self.catalog.id)})
        self.assertEqual(by_key[("request", self.req.id)]["unread_count"], 2)
        self.assertEqual(by_key[("project", self.catalog.id)]["unread_count"], 1)

        res = self.client.post(reverse("message-read"), {"request_id": self.req.id}, format="json")
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["updated"], 2)
        self.assertEqual(res.data["thread"], {"field": "request", "id": self.req.id})

        threads = self.client.get(reverse("message-threads")).data
        by_key = {(t["thread"]["field"], t["thread"]["id"]): t for t in threads}
        self.assertEqual(by_key[("request", self.req.id)]["unread_count"], 0)

    def test_client_thread_list_is_scoped(self):
        CustomRequest.objects.create(user=self.other, category="ai", name="Bob", email="bob@example.com")
        self.auth(self.cust_token)
        threads = self.client.get(reverse("message-threads")).data
        keys = {(t["thread"]["field"], t["thread"]["id"]) for t in threads}
        self.assertEqual(keys, {("request", self.req.id), ("project", self.catalog.id)})
