from django.contrib import admin

from .models import Parent, Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'username', 'course', 'current_semester', 'parent')
    list_filter = ('course', 'sex')
    search_fields = ('name', 'surname', 'username', 'email')


@admin.register(Parent)
class ParentAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'username', 'email', 'phone', 'student_count')
    search_fields = ('name', 'surname', 'username', 'email')

    def student_count(self, obj):
        return obj.students.count()
    student_count.short_description = 'Students'
