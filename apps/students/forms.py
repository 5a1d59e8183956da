from django import forms
from django.utils.translation import gettext_lazy as _

from apps.corecode.identity import ROLE_PARENT, ROLE_STUDENT, AccountFormMixin
from apps.corecode.models import Semester

from .models import Parent, Student


class StudentForm(AccountFormMixin, forms.ModelForm):
    account_role = ROLE_STUDENT

    class Meta:
        model = Student
        fields = [
            'name', 'surname', 'email', 'phone', 'address', 'img',
            'blood_type', 'sex', 'birthday', 'course', 'current_semester', 'parent',
        ]
        widgets = {
            'birthday': forms.DateInput(attrs={'type': 'date'}),
            'address': forms.Textarea(attrs={'rows': 2}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_account_fields()
        self.fields['current_semester'].queryset = Semester.objects.select_related('course')


class ParentForm(AccountFormMixin, forms.ModelForm):
    account_role = ROLE_PARENT

    class Meta:
        model = Parent
        fields = ['name', 'surname', 'email', 'phone', 'address']
        widgets = {
            'address': forms.Textarea(attrs={'rows': 2}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.add_account_fields()

    def clean_email(self):
        email = self.cleaned_data.get('email') or None
        if email and Parent.objects.filter(email__iexact=email).exclude(pk=self.instance.pk).exists():
            raise forms.ValidationError(_("A parent with this email already exists"))
        return email
