from django.urls import path

from . import views

app_name = "lessons"

urlpatterns = [
    path("", views.TimetableView.as_view(), name="timetable"),
    path("create/", views.LessonCreateView.as_view(), name="lesson_create"),
    path("<int:pk>/update/", views.LessonUpdateView.as_view(), name="lesson_update"),
    path("<int:pk>/delete/", views.LessonDeleteView.as_view(), name="lesson_delete"),
    path("weekly-schedule/", views.WeeklyScheduleView.as_view(), name="weekly_schedule"),
]
