from datetime import datetime
from decimal import Decimal

from django import forms
from django.core.validators import RegexValidator, URLValidator
from django.utils import timezone

from accounts.models import DOMAIN_CHOICES
from .models import Event, Workshop, WorkshopRegistration
from .utils import IMAGE_TYPES, validate_upload

MATERIAL_TYPES = ['slides', 'code', 'document', 'video', 'other']
TARGET_YEAR_CHOICES = [(str(i), f"Year {i}") for i in range(1, 6)]

time_validator = RegexValidator(r'^([01]\d|2[0-3]):[0-5]\d$', "Enter a time as HH:MM.")


def to_paise(rupees):
    return int((Decimal(rupees) * 100).quantize(Decimal('1')))


def split_lines(text):
    return [line.strip() for line in (text or '').splitlines() if line.strip()]


class WorkshopRegistrationForm(forms.ModelForm):
    class Meta:
        model = WorkshopRegistration
        fields = ['name', 'email', 'phone', 'organization', 'year']
        labels = {
            'organization': "College / Organization",
            'year': "Year / Role",
        }

    def __init__(self, *args, **kwargs):
        super(WorkshopRegistrationForm, self).__init__(*args, **kwargs)
        for field in self.fields:
            self.fields[field].widget.attrs.update({'class': 'form-control mb-3'})

    def clean_name(self):
        name = self.cleaned_data.get('name', '').strip()
        if len(name) < 2:
            raise forms.ValidationError("Name must be at least 2 characters.")
        return name

    def clean_phone(self):
        phone = self.cleaned_data.get('phone', '').strip()
        if len(phone) < 10:
            raise forms.ValidationError("Please enter a valid phone number.")
        return phone


class ScheduleFormMixin(forms.Form):
    """Banner upload plus separate date and HH:MM time inputs."""
    banner_file = forms.FileField(label="Banner image", help_text="JPG, PNG or WEBP, 5MB max.")
    day = forms.DateField(label="Date", widget=forms.DateInput(attrs={'type': 'date'}))
    time = forms.CharField(max_length=5, validators=[time_validator], widget=forms.TimeInput(attrs={'type': 'time'}))
    domain_list = forms.MultipleChoiceField(
        choices=DOMAIN_CHOICES, required=False, label="Domains", widget=forms.CheckboxSelectMultiple,
    )

    def clean_banner_file(self):
        return validate_upload(self.cleaned_data['banner_file'], IMAGE_TYPES, ".jpg, .png, and .webp")

    def clean_location(self):
        location = self.cleaned_data.get('location', '').strip()
        if len(location) < 5:
            raise forms.ValidationError("Location must be at least 5 characters.")
        return location

    def clean_title(self):
        title = self.cleaned_data.get('title', '').strip()
        if len(title) < 5:
            raise forms.ValidationError("Title must be at least 5 characters.")
        return title

    def clean_description(self):
        description = self.cleaned_data.get('description', '').strip()
        if len(description) < 20:
            raise forms.ValidationError("Description must be at least 20 characters.")
        return description

    def scheduled_at(self):
        hour, minute = (int(part) for part in self.cleaned_data['time'].split(':'))
        naive = datetime.combine(self.cleaned_data['day'], datetime.min.time()).replace(hour=hour, minute=minute)
        return timezone.make_aware(naive)

    def style_fields(self):
        for name, field in self.fields.items():
            if isinstance(field.widget, (forms.CheckboxInput, forms.CheckboxSelectMultiple)):
                continue
            field.widget.attrs.update({'class': 'form-control mb-3'})


class EventForm(ScheduleFormMixin, forms.ModelForm):
    price_rupees = forms.DecimalField(
        min_value=0, max_digits=10, decimal_places=2, required=False, initial=0, label="Price (₹)",
    )
    target_year_list = forms.MultipleChoiceField(
        choices=TARGET_YEAR_CHOICES, required=False, label="Target years", widget=forms.CheckboxSelectMultiple,
    )
    college_list = forms.CharField(
        required=False, label="Colleges", help_text="Comma separated, leave empty for all colleges.",
    )

    class Meta:
        model = Event
        fields = [
            'title', 'description', 'duration', 'location', 'capacity', 'meet_link',
            'is_free', 'is_recurring', 'recurrence_pattern', 'send_reminders', 'reminder_time', 'luma_url',
        ]
        widgets = {
            'description': forms.Textarea(attrs={'rows': 4}),
        }

    def __init__(self, *args, **kwargs):
        super(EventForm, self).__init__(*args, **kwargs)
        self.fields['capacity'].widget.attrs['min'] = 1
        self.style_fields()

    def clean_capacity(self):
        capacity = self.cleaned_data.get('capacity')
        if capacity is None or capacity < 1:
            raise forms.ValidationError("Capacity must be at least 1.")
        return capacity

    def clean(self):
        cleaned_data = super().clean()
        if cleaned_data.get('is_recurring') and not cleaned_data.get('recurrence_pattern'):
            self.add_error('recurrence_pattern', "Choose how often the event repeats.")
        if not cleaned_data.get('is_free') and not cleaned_data.get('price_rupees'):
            self.add_error('price_rupees', "Paid events need a price.")
        return cleaned_data

    def save(self, commit=True):
        event = super().save(commit=False)
        event.date = self.scheduled_at()
        event.price = 0 if event.is_free else to_paise(self.cleaned_data['price_rupees'])
        if not event.is_recurring:
            event.recurrence_pattern = ''
        event.domains = self.cleaned_data.get('domain_list') or []
        event.target_years = [int(year) for year in self.cleaned_data.get('target_year_list') or []]
        event.colleges = [c.strip() for c in self.cleaned_data.get('college_list', '').split(',') if c.strip()]
        if commit:
            event.save()
        return event


class WorkshopForm(ScheduleFormMixin, forms.ModelForm):
    price_rupees = forms.DecimalField(
        min_value=0, max_digits=10, decimal_places=2, initial=0, label="Price (₹)",
    )
    prerequisite_text = forms.CharField(
        required=False, label="Prerequisites", widget=forms.Textarea(attrs={'rows': 3}), help_text="One per line.",
    )
    outcome_text = forms.CharField(
        required=False, label="Learning outcomes", widget=forms.Textarea(attrs={'rows': 3}), help_text="One per line.",
    )
    material_text = forms.CharField(
        required=False, label="Materials", widget=forms.Textarea(attrs={'rows': 3}),
        help_text="One per line: title | url | type (slides, code, document, video, other).",
    )

    class Meta:
        model = Workshop
        fields = [
            'title', 'description', 'location', 'max_seats',
            'recording_enabled', 'certificates_enabled', 'feedback_enabled',
            'pre_assessment_enabled', 'post_assessment_enabled',
        ]
        widgets = {
            'description': forms.Textarea(attrs={'rows': 4}),
        }

    def __init__(self, *args, **kwargs):
        super(WorkshopForm, self).__init__(*args, **kwargs)
        self.style_fields()

    def clean_max_seats(self):
        seats = self.cleaned_data.get('max_seats')
        if seats is None or seats < 1:
            raise forms.ValidationError("A workshop needs at least 1 seat.")
        return seats

    def clean_material_text(self):
        materials = []
        url_validator = URLValidator()
        for line in split_lines(self.cleaned_data.get('material_text')):
            parts = [part.strip() for part in line.split('|')]
            if len(parts) == 2:
                parts.append('other')
            if len(parts) != 3 or not parts[0]:
                raise forms.ValidationError(f"Could not read material line: {line}")
            title, url, kind = parts
            try:
                url_validator(url)
            except forms.ValidationError:
                raise forms.ValidationError(f"Invalid material URL: {url}")
            if kind not in MATERIAL_TYPES:
                raise forms.ValidationError(f"Unknown material type: {kind}")
            materials.append({'title': title, 'url': url, 'type': kind})
        return materials

    def save(self, commit=True):
        workshop = super().save(commit=False)
        workshop.date = self.scheduled_at()
        workshop.price = to_paise(self.cleaned_data['price_rupees'])
        workshop.prerequisites = split_lines(self.cleaned_data.get('prerequisite_text'))
        workshop.learning_outcomes = split_lines(self.cleaned_data.get('outcome_text'))
        workshop.materials = self.cleaned_data.get('material_text') or []
        workshop.domains = self.cleaned_data.get('domain_list') or []
        if commit:
            workshop.save()
        return workshop
