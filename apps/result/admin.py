from django.contrib import admin

from .models import Result


@admin.register(Result)
class ResultAdmin(admin.ModelAdmin):
    list_display = ('student', 'subject', 'internal', 'external', 'attendance', 'total')
    search_fields = ('student__name', 'student__surname', 'subject__name')
    list_filter = ('subject',)
