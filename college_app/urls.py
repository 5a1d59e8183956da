from django.contrib import admin
from django.contrib.auth import views as auth_views
from django.urls import include, path

from apps.attendance.views import student_attendance_api
from apps.corecode.views import AdminDashboardView, HomeView
from apps.corecode.views_auth import CustomLoginView
from apps.enrollments.views import student_subjects_api
from apps.result.views import results_api

urlpatterns = [
    path("admin/", admin.site.urls),
    path("accounts/login/", CustomLoginView.as_view(), name="login"),
    path("accounts/logout/", auth_views.LogoutView.as_view(), name="logout"),
    path("", HomeView.as_view(), name="home"),
    path("admin-dashboard/", AdminDashboardView.as_view(), name="admin_dashboard"),

    path("academic/", include("apps.corecode.urls")),
    path("teacher/", include("apps.teachers.urls")),
    path("student/", include("apps.students.urls")),
    path("parent/", include("apps.parent.urls")),
    path("lessons/", include("apps.lessons.urls")),
    path("attendance/", include("apps.attendance.urls")),
    path("enrollments/", include("apps.enrollments.urls")),
    path("results/", include("apps.result.urls")),
    path("admission/", include("apps.admissions.urls")),
    path("announcements/", include("apps.announcements.urls")),
    path("assignments/", include("apps.assignments.urls")),

    # JSON endpoints
    path("api/results/", results_api, name="results_api"),
    path("api/students/<int:pk>/attendance/", student_attendance_api, name="student_attendance_api"),
    path("api/students/<int:pk>/subjects/", student_subjects_api, name="student_subjects_api"),
]
