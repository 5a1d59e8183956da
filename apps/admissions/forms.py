import datetime

from django import forms
from django.utils.translation import gettext_lazy as _

from .models import AdmissionForm
from .services import AdmissionService


class AdmissionApplyForm(forms.ModelForm):
    """Public admission form"""

    has_existing_parent = forms.BooleanField(
        required=False,
        label=_("The parent already has an account")
    )
    parent_username = forms.CharField(
        required=False,
        max_length=150,
        label=_("Parent username")
    )
    receipt_url = forms.URLField(
        required=False,
        label=_("Payment receipt URL"),
        help_text=_("Link to the uploaded receipt of the admission fee")
    )

    class Meta:
        model = AdmissionForm
        fields = [
            'student_name', 'student_surname', 'email', 'phone', 'address',
            'birthday', 'blood_type', 'sex', 'img', 'course',
            'parent_name', 'parent_phone', 'parent_email', 'parent_address',
        ]
        widgets = {
            'birthday': forms.DateInput(attrs={'type': 'date'}),
            'address': forms.Textarea(attrs={'rows': 3}),
            'parent_address': forms.Textarea(attrs={'rows': 3}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.existing_parent = None
        # filled from the parent record when one is attached
        for name in ('parent_name', 'parent_phone', 'parent_email'):
            self.fields[name].required = False

    def clean_birthday(self):
        birthday = self.cleaned_data['birthday']
        if birthday > datetime.date.today():
            raise forms.ValidationError(_("Date of birth cannot be in the future"))
        return birthday

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('has_existing_parent'):
            username = (cleaned_data.get('parent_username') or '').strip()
            if not username:
                self.add_error('parent_username', _("Enter the parent's username"))
            else:
                self.existing_parent = AdmissionService.find_parent(username)
                if self.existing_parent is None:
                    self.add_error('parent_username', _("No parent found with this username"))
        else:
            for name in ('parent_name', 'parent_phone', 'parent_email'):
                if not cleaned_data.get(name):
                    self.add_error(name, _("This field is required."))
        return cleaned_data

    def admission_data(self):
        """Model field values of the validated form"""
        return {name: self.cleaned_data.get(name) for name in self.Meta.fields}


class RejectionForm(forms.Form):
    reason = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'rows': 3}),
        label=_("Reason")
    )
