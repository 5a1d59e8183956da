from django.contrib import admin

from .models import Enrollment


@admin.register(Enrollment)
class EnrollmentAdmin(admin.ModelAdmin):
    list_display = ('student', 'subject_offering', 'enrollment_date', 'status')
    list_filter = ('status',)
    search_fields = ('student__name', 'student__surname', 'subject_offering__subject__name')
