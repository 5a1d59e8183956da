from django.urls import path

from . import views

app_name = "attendance"

urlpatterns = [
    path("", views.AttendanceListView.as_view(), name="attendance_list"),
    path("sheet/", views.AttendanceSheetView.as_view(), name="attendance_sheet"),
    path("delete/", views.AttendanceDeleteView.as_view(), name="attendance_delete"),
]
