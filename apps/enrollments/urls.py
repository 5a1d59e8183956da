from django.urls import path

from . import views

app_name = "enrollments"

urlpatterns = [
    path("", views.EnrollmentListView.as_view(), name="enrollment_list"),
    path("enroll/", views.EnrollStudentView.as_view(), name="enroll_student"),
    path("batch/", views.BatchEnrollView.as_view(), name="batch_enroll"),
    path("promote/", views.PromoteStudentsView.as_view(), name="promote_students"),
    path("<int:pk>/remove/", views.EnrollmentRemoveView.as_view(), name="enrollment_remove"),
    path("bulk-remove/", views.EnrollmentBulkRemoveView.as_view(), name="enrollment_bulk_remove"),
]
