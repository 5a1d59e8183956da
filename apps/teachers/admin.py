from django.contrib import admin

from .models import Teacher


@admin.register(Teacher)
class TeacherAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'username', 'email', 'phone', 'sex')
    search_fields = ('name', 'surname', 'username', 'email')
    list_filter = ('sex',)
