from django.urls import path

from .views import MessageListCreateAPIView, MessageMarkReadAPIView, ThreadListAPIView

urlpatterns = [
    path("messages/", MessageListCreateAPIView.as_view(), name="message-list"),
    path("messages/read/", MessageMarkReadAPIView.as_view(), name="message-read"),
    path("messages/threads/", ThreadListAPIView.as_view(), name="message-threads"),
]
