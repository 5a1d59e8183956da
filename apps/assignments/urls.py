from django.urls import path

from . import views

app_name = "assignments"

urlpatterns = [
    path("", views.AssignmentListView.as_view(), name="assignment_list"),
    path("create/", views.AssignmentCreateView.as_view(), name="assignment_create"),
    path("<int:pk>/", views.AssignmentDetailView.as_view(), name="assignment_detail"),
    path("<int:pk>/update/", views.AssignmentUpdateView.as_view(), name="assignment_update"),
    path("<int:pk>/delete/", views.AssignmentDeleteView.as_view(), name="assignment_delete"),
]
