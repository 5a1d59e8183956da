from django.contrib import admin

from .models import Lesson


@admin.register(Lesson)
class LessonAdmin(admin.ModelAdmin):
    list_display = ('subject_offering', 'day', 'start_time', 'end_time', 'status', 'is_makeup_class')
    list_filter = ('day', 'status', 'is_makeup_class')
    search_fields = ('subject_offering__subject__name', 'subject_offering__teacher__name')
