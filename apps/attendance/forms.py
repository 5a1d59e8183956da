from django import forms
from django.utils import timezone

from apps.lessons.models import Lesson


class AttendanceSheetForm(forms.Form):
    lesson = forms.ModelChoiceField(
        queryset=Lesson.objects.select_related(
            'subject_offering__subject', 'subject_offering__teacher'
        )
    )
    date = forms.DateField(
        initial=timezone.localdate,
        widget=forms.DateInput(attrs={'type': 'date'})
    )

    def __init__(self, *args, teacher=None, **kwargs):
        super().__init__(*args, **kwargs)
        if teacher is not None:
            self.fields['lesson'].queryset = self.fields['lesson'].queryset.filter(
                subject_offering__teacher=teacher
            )
