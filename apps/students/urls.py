from django.urls import path

from . import views

app_name = "students"

urlpatterns = [
    path("", views.StudentDashboardView.as_view(), name="dashboard"),
    path("list/", views.StudentListView.as_view(), name="student_list"),
    path("create/", views.StudentCreateView.as_view(), name="student_create"),
    path("<int:pk>/", views.StudentDetailView.as_view(), name="student_detail"),
    path("<int:pk>/update/", views.StudentUpdateView.as_view(), name="student_update"),
    path("<int:pk>/delete/", views.StudentDeleteView.as_view(), name="student_delete"),

    path("parents/", views.ParentListView.as_view(), name="parent_list"),
    path("parents/create/", views.ParentCreateView.as_view(), name="parent_create"),
    path("parents/<int:pk>/update/", views.ParentUpdateView.as_view(), name="parent_update"),
    path("parents/<int:pk>/delete/", views.ParentDeleteView.as_view(), name="parent_delete"),
]
