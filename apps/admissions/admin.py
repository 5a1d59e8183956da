from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import AdmissionForm, AdmissionLog, Payment, VerificationToken


class PaymentInline(admin.StackedInline):
    model = Payment
    extra = 0
    readonly_fields = ['verified_by', 'verified_at', 'created_at']


class AdmissionLogInline(admin.TabularInline):
    model = AdmissionLog
    extra = 0
    readonly_fields = ['actor', 'action', 'notes', 'from_status', 'to_status', 'created_at']
    can_delete = False


@admin.register(AdmissionForm)
class AdmissionFormAdmin(admin.ModelAdmin):
    list_display = [
        'application_number', 'full_name', 'course', 'status',
        'parent_verification_status', 'created_at'
    ]
    list_filter = ['status', 'parent_verification_status', 'course']
    search_fields = [
        'application_number', 'student_name', 'student_surname',
        'parent_name', 'parent_phone', 'parent_email'
    ]
    readonly_fields = ['application_number', 'student', 'created_at', 'updated_at']
    inlines = [PaymentInline, AdmissionLogInline]
    fieldsets = (
        (_('Application Information'), {
            'fields': ('application_number', 'course', 'status',
                       'parent_verification_status', 'rejection_reason')
        }),
        (_('Student Information'), {
            'fields': ('student_name', 'student_surname', 'email', 'phone', 'address',
                       'birthday', 'blood_type', 'sex', 'img', 'student')
        }),
        (_('Parent Information'), {
            'fields': ('parent', 'parent_name', 'parent_email', 'parent_phone', 'parent_address')
        }),
        (_('System Information'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )


@admin.register(VerificationToken)
class VerificationTokenAdmin(admin.ModelAdmin):
    list_display = ['admission', 'expires', 'created_at']
    readonly_fields = ['token']
