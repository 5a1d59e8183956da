from django import forms
from django.forms import formset_factory
from django.utils.translation import gettext_lazy as _

from apps.corecode.models import Course, Semester, SubjectOffering

from .models import Day, Lesson


class LessonForm(forms.ModelForm):
    class Meta:
        model = Lesson
        fields = [
            'subject_offering', 'day', 'start_time', 'end_time',
            'status', 'is_makeup_class', 'reason',
        ]
        widgets = {
            'start_time': forms.TimeInput(attrs={'type': 'time'}),
            'end_time': forms.TimeInput(attrs={'type': 'time'}),
            'reason': forms.Textarea(attrs={'rows': 2}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['subject_offering'].queryset = SubjectOffering.objects.select_related(
            'subject', 'semester__course', 'teacher'
        )


class ScheduleSemesterForm(forms.Form):
    course = forms.ModelChoiceField(queryset=Course.objects.all())
    semester = forms.ModelChoiceField(queryset=Semester.objects.select_related('course'))

    def clean(self):
        cleaned_data = super().clean()
        course = cleaned_data.get('course')
        semester = cleaned_data.get('semester')
        if course and semester and semester.course_id != course.pk:
            raise forms.ValidationError(_("The semester does not belong to the selected course."))
        return cleaned_data


class PeriodForm(forms.Form):
    day = forms.ChoiceField(choices=Day.choices)
    subject_offering = forms.ModelChoiceField(
        queryset=SubjectOffering.objects.select_related('subject', 'semester__course', 'teacher')
    )
    start_time = forms.TimeField(widget=forms.TimeInput(attrs={'type': 'time'}))
    end_time = forms.TimeField(widget=forms.TimeInput(attrs={'type': 'time'}))


PeriodFormSet = formset_factory(PeriodForm, extra=5)
