from django import forms

from apps.corecode.identity import ROLE_TEACHER, AccountFormMixin

from .models import Teacher


class TeacherForm(AccountFormMixin, forms.ModelForm):
    account_role = ROLE_TEACHER

    class Meta:
        model = Teacher
        fields = [
            'name', 'surname', 'email', 'phone', 'address',
            'img', 'blood_type', 'sex', 'birthday',
        ]
        widgets = {
            'birthday': forms.DateInput(attrs={'type': 'date'}),
            'address': forms.Textarea(attrs={'rows': 2}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_account_fields()
