from django import forms

from events.utils import DOCUMENT_TYPES, validate_upload
from .models import DOMAIN_CHOICES, AmbassadorApplication, User

YEAR_CHOICES = [(i, f"Year {i}") for i in range(1, 6)]


class OnboardingForm(forms.ModelForm):
    year = forms.TypedChoiceField(choices=YEAR_CHOICES, coerce=int)
    college_id_file = forms.FileField(label="College ID", help_text="JPG, PNG or PDF, 5MB max.")
    domains = forms.MultipleChoiceField(choices=DOMAIN_CHOICES, widget=forms.CheckboxSelectMultiple)
    primary_domain = forms.ChoiceField(choices=DOMAIN_CHOICES)

    class Meta:
        model = User
        fields = ['name', 'college', 'year', 'student_id_number', 'domains', 'primary_domain']

    def __init__(self, *args, **kwargs):
        super(OnboardingForm, self).__init__(*args, **kwargs)
        self.fields['name'].required = True
        self.fields['college'].required = True
        for name, field in self.fields.items():
            if name != 'domains':
                field.widget.attrs.update({'class': 'form-control mb-3'})

    def clean_name(self):
        name = self.cleaned_data.get('name', '').strip()
        if len(name) < 2:
            raise forms.ValidationError("Name must be at least 2 characters.")
        return name

    def clean_college(self):
        college = self.cleaned_data.get('college', '').strip()
        if len(college) < 2:
            raise forms.ValidationError("College name is required.")
        return college

    def clean_college_id_file(self):
        return validate_upload(self.cleaned_data['college_id_file'], DOCUMENT_TYPES, ".jpg, .png, and .pdf")

    def clean_domains(self):
        domains = self.cleaned_data.get('domains') or []
        if not 1 <= len(domains) <= 3:
            raise forms.ValidationError("Please select between 1 and 3 domains.")
        return domains

    def clean(self):
        cleaned_data = super().clean()
        domains = cleaned_data.get('domains') or []
        primary = cleaned_data.get('primary_domain')
        if primary and domains and primary not in domains:
            self.add_error('primary_domain', "Primary domain must be one of the selected domains.")
        return cleaned_data


class AmbassadorApplicationForm(forms.ModelForm):
    video_file = forms.FileField(label="Introduction video", required=False)

    class Meta:
        model = AmbassadorApplication
        fields = ['why', 'what', 'experience']
        labels = {
            'why': "Why do you want to be an ambassador?",
            'what': "What would you do on your campus?",
            'experience': "Relevant experience",
        }
        widgets = {
            'why': forms.Textarea(attrs={'rows': 3}),
            'what': forms.Textarea(attrs={'rows': 3}),
            'experience': forms.Textarea(attrs={'rows': 3}),
        }

    def __init__(self, *args, **kwargs):
        super(AmbassadorApplicationForm, self).__init__(*args, **kwargs)
        for field in self.fields:
            self.fields[field].widget.attrs.update({'class': 'form-control mb-3'})

    def clean_video_file(self):
        video = self.cleaned_data.get('video_file')
        if video:
            validate_upload(video, None, "video")
            if not (video.content_type or '').startswith('video/'):
                raise forms.ValidationError("Please upload a video file.")
        return video
