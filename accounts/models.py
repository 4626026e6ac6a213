from django.db import models
from django.contrib.auth.models import AbstractUser
from django.conf import settings
from cloudinary.models import CloudinaryField


TIER_CHOICES = (
    ('Bronze', 'Bronze'),
    ('Silver', 'Silver'),
    ('Gold', 'Gold'),
    ('Platinum', 'Platinum'),
)

DOMAIN_CHOICES = (
    ('web-dev', 'Web Development'),
    ('mobile-dev', 'Mobile Development'),
    ('ai-ml', 'AI/ML'),
    ('data-science', 'Data Science'),
    ('cybersecurity', 'Cybersecurity'),
    ('product-management', 'Product Management'),
)


# 1. Custom User (student / ambassador / admin)
class User(AbstractUser):
    VERIFICATION_CHOICES = (
        ('pending', 'Pending'),
        ('verified', 'Verified'),
        ('rejected', 'Rejected'),
    )
    ROLE_CHOICES = (
        ('student', 'Student'),
        ('ambassador', 'Ambassador'),
        ('admin', 'Admin'),
    )

    name = models.CharField(max_length=150, blank=True)
    college = models.CharField(max_length=200, blank=True)
    year = models.PositiveSmallIntegerField(null=True, blank=True)
    verification_status = models.CharField(max_length=10, choices=VERIFICATION_CHOICES, default='pending')
    college_id = CloudinaryField('college id', resource_type='auto', blank=True, null=True)
    student_id_number = models.CharField(max_length=50, blank=True)

    primary_domain = models.CharField(max_length=30, choices=DOMAIN_CHOICES, blank=True)
    domains = models.JSONField(default=list, blank=True)

    points = models.PositiveIntegerField(default=0)
    tier = models.CharField(max_length=10, choices=TIER_CHOICES, default='Bronze')
    badges = models.JSONField(default=list, blank=True)
    streak = models.PositiveIntegerField(default=0)
    last_active_date = models.DateField(null=True, blank=True)

    role = models.CharField(max_length=15, choices=ROLE_CHOICES, default='student')
    photo_url = models.URLField(blank=True)
    onboarding_completed = models.BooleanField(default=False)

    class Meta:
        ordering = ['-date_joined']

    def save(self, *args, **kwargs):
        # Tier always follows the points counter
        from .gamification import tier_for_points
        self.tier = tier_for_points(self.points)
        super().save(*args, **kwargs)

    def __str__(self):
        return self.display_name

    @property
    def display_name(self):
        return self.name or self.get_full_name() or self.email or self.username

    @property
    def is_admin(self):
        if self.is_staff or self.is_superuser or self.role == 'admin':
            return True
        admin_email = settings.ADMIN_EMAIL
        return bool(admin_email) and self.email.lower() == admin_email.lower()

    @property
    def initials(self):
        names = self.display_name.split()
        if len(names) > 1:
            return f"{names[0][0]}{names[-1][0]}".upper()
        return self.display_name[:1].upper() or 'U'

    def campus_rank(self):
        if not self.college:
            return None
        ahead = User.objects.filter(college__iexact=self.college, points__gt=self.points).count()
        return ahead + 1


# 2. Ambassador programme
class AmbassadorApplication(models.Model):
    STATUS_CHOICES = (
        ('pending', 'Pending'),
        ('approved', 'Approved'),
        ('rejected', 'Rejected'),
    )

    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='ambassador_application')
    why = models.TextField()
    what = models.TextField()
    experience = models.TextField()
    video = CloudinaryField('video', resource_type='video', blank=True, null=True)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default='pending')
    applied_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user} - {self.status}"


# 3. Tier rewards and learning resources
class Perk(models.Model):
    title = models.CharField(max_length=200)
    description = models.TextField()
    tier = models.CharField(max_length=10, choices=TIER_CHOICES, default='Silver')

    class Meta:
        ordering = ['id']

    def __str__(self):
        return self.title


class Resource(models.Model):
    title = models.CharField(max_length=200)
    category = models.CharField(max_length=50)
    domain = models.CharField(max_length=30, choices=DOMAIN_CHOICES)
    url = models.URLField()

    class Meta:
        ordering = ['category', 'title']

    def __str__(self):
        return self.title
