from django import forms

from .models import Assignment

DATETIME_WIDGET = forms.DateTimeInput(attrs={'type': 'datetime-local'}, format='%Y-%m-%dT%H:%M')


class AssignmentForm(forms.ModelForm):
    class Meta:
        model = Assignment
        fields = ['title', 'description', 'start_date', 'due_date', 'course', 'semester', 'attachment']
        widgets = {
            'description': forms.Textarea(attrs={'rows': 3}),
            'start_date': DATETIME_WIDGET,
            'due_date': DATETIME_WIDGET,
        }
