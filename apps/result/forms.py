from django import forms

from .models import Result


class ResultForm(forms.ModelForm):
    class Meta:
        model = Result
        fields = ['student', 'subject', 'internal', 'external', 'attendance', 'total']
        widgets = {
            field: forms.NumberInput(attrs={'min': 0, 'step': '0.5'})
            for field in ('internal', 'external', 'attendance', 'total')
        }
