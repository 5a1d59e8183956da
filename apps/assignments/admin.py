from django.contrib import admin

from .models import Assignment


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ('title', 'course', 'semester', 'start_date', 'due_date')
    list_filter = ('course',)
    search_fields = ('title',)
