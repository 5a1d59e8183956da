from django.contrib import admin

from .models import Attendance


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ('student', 'lesson', 'date', 'present')
    list_filter = ('present', 'date')
    search_fields = ('student__name', 'student__surname', 'student__username')
