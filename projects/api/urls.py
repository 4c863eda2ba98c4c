from django.urls import path
from .views import ProjectBoardAPIView, ProjectDetailUpdateAPIView, ProjectListAPIView

urlpatterns = [
    path("projects/", ProjectListAPIView.as_view(), name="project-list"),
    path("projects/board/", ProjectBoardAPIView.as_view(), name="project-board"),
    path("projects/<int:pk>/", ProjectDetailUpdateAPIView.as_view(), name="project-detail"),
]
