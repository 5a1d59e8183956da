from django.contrib import admin

from .models import Course, Semester, Subject, SubjectOffering


class SemesterInline(admin.TabularInline):
    model = Semester
    extra = 0


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ('name', 'code', 'duration', 'created_at')
    readonly_fields = ('code',)
    search_fields = ('name', 'code')
    inlines = [SemesterInline]


admin.site.register(Subject)


@admin.register(SubjectOffering)
class SubjectOfferingAdmin(admin.ModelAdmin):
    list_display = ('subject', 'semester', 'teacher')
    list_filter = ('semester__course',)
