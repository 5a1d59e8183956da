from django import forms
from django.db import transaction
from django.utils.translation import gettext_lazy as _

from .models import Course, Subject, SubjectOffering


class CourseForm(forms.ModelForm):
    semesters = forms.IntegerField(
        min_value=1,
        max_value=20,
        help_text=_("Number of semesters, numbered from 1")
    )

    class Meta:
        model = Course
        fields = ['name', 'duration']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.fields['semesters'].initial = self.instance.semester_count

    def clean_name(self):
        name = self.cleaned_data['name'].strip()
        if Course.objects.filter(name__iexact=name).exclude(pk=self.instance.pk).exists():
            raise forms.ValidationError(_("A course with this name already exists"))
        return name

    def clean_semesters(self):
        count = self.cleaned_data['semesters']
        if self.instance.pk:
            occupied = self.instance.semesters.filter(
                number__gt=count, students__isnull=False
            ).exists()
            if occupied:
                raise forms.ValidationError(
                    _("Semesters above %(count)s still have students") % {'count': count}
                )
        return count

    def save(self, commit=True):
        with transaction.atomic():
            course = super().save(commit=True)
            course.sync_semesters(self.cleaned_data['semesters'])
        return course


class SubjectForm(forms.ModelForm):
    class Meta:
        model = Subject
        fields = ['name']


class SubjectOfferingForm(forms.ModelForm):
    class Meta:
        model = SubjectOffering
        fields = ['subject', 'semester', 'teacher']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['semester'].queryset = self.fields['semester'].queryset.select_related('course')
