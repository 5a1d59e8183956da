from django import forms
from django.utils.translation import gettext_lazy as _

from apps.corecode.models import Course, Semester, SubjectOffering
from apps.students.models import Student

OFFERINGS = SubjectOffering.objects.select_related('subject', 'semester__course', 'teacher')


class EnrollmentForm(forms.Form):
    student = forms.ModelChoiceField(queryset=Student.objects.all())
    subject_offering = forms.ModelChoiceField(queryset=OFFERINGS)


class BatchEnrollmentForm(forms.Form):
    students = forms.ModelMultipleChoiceField(
        queryset=Student.objects.all(),
        widget=forms.SelectMultiple(attrs={'size': 10})
    )
    subject_offerings = forms.ModelMultipleChoiceField(
        queryset=OFFERINGS,
        widget=forms.SelectMultiple(attrs={'size': 10})
    )


class PromotionForm(forms.Form):
    course = forms.ModelChoiceField(queryset=Course.objects.all())
    from_semester = forms.ModelChoiceField(queryset=Semester.objects.select_related('course'))
    to_semester = forms.ModelChoiceField(queryset=Semester.objects.select_related('course'))

    def clean(self):
        cleaned_data = super().clean()
        course = cleaned_data.get('course')
        from_semester = cleaned_data.get('from_semester')
        to_semester = cleaned_data.get('to_semester')
        if course and from_semester and to_semester:
            if from_semester.course_id != course.pk or to_semester.course_id != course.pk:
                raise forms.ValidationError(_("Both semesters must belong to the selected course"))
            if from_semester.pk == to_semester.pk:
                raise forms.ValidationError(_("Choose a different target semester"))
        return cleaned_data
