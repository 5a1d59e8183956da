from django.urls import path

from . import views

app_name = "corecode"

urlpatterns = [
    path("courses/", views.CourseListView.as_view(), name="course_list"),
    path("courses/create/", views.CourseCreateView.as_view(), name="course_create"),
    path("courses/<int:pk>/update/", views.CourseUpdateView.as_view(), name="course_update"),
    path("courses/<int:pk>/delete/", views.CourseDeleteView.as_view(), name="course_delete"),
    path("subjects/", views.SubjectListView.as_view(), name="subject_list"),
    path("subjects/create/", views.SubjectCreateView.as_view(), name="subject_create"),
    path("subjects/<int:pk>/update/", views.SubjectUpdateView.as_view(), name="subject_update"),
    path("subjects/<int:pk>/delete/", views.SubjectDeleteView.as_view(), name="subject_delete"),
    path("offerings/", views.SubjectOfferingListView.as_view(), name="offering_list"),
    path("offerings/create/", views.SubjectOfferingCreateView.as_view(), name="offering_create"),
    path("offerings/<int:pk>/update/", views.SubjectOfferingUpdateView.as_view(), name="offering_update"),
    path("offerings/<int:pk>/delete/", views.SubjectOfferingDeleteView.as_view(), name="offering_delete"),
]
