from django import forms

from accounts.forms import YEAR_CHOICES
from accounts.models import User


class UserEditForm(forms.ModelForm):
    year = forms.TypedChoiceField(choices=[('', '---------')] + YEAR_CHOICES, coerce=int, required=False, empty_value=None)

    class Meta:
        model = User
        fields = ['name', 'college', 'year', 'role', 'primary_domain', 'points']

    def __init__(self, *args, **kwargs):
        super(UserEditForm, self).__init__(*args, **kwargs)
        for field in self.fields:
            self.fields[field].widget.attrs.update({'class': 'form-control mb-3'})


class EmailAttendeesForm(forms.Form):
    subject = forms.CharField(max_length=200, widget=forms.TextInput(attrs={'class': 'form-control mb-3'}))
    message = forms.CharField(widget=forms.Textarea(attrs={'class': 'form-control mb-3', 'rows': 5}))
