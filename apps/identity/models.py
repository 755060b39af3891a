import uuid
from django.db import models
from django.contrib.auth.models import AbstractUser


class UserRole(models.TextChoices):
    STUDENT = 'student', 'Student'
    ADMIN = 'admin', 'Administrator'
    ASSISTANT_ADMIN = 'assistant_admin', 'Assistant Administrator'
    MENTOR = 'mentor', 'Mentor'
    COMPANY = 'company', 'Company'


class User(AbstractUser):
    """
    Custom User model carrying the student profile.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    role = models.CharField(
        max_length=20,
        choices=UserRole.choices,
        default=UserRole.STUDENT
    )

    # Profile
    profile_image_url = models.URLField(max_length=500, blank=True, null=True)
    university = models.CharField(max_length=255, blank=True, null=True)
    field = models.CharField(max_length=255, blank=True, null=True, help_text="Field of study")
    year_of_study = models.PositiveSmallIntegerField(null=True, blank=True)
    location = models.CharField(max_length=255, blank=True, null=True)
    bio = models.TextField(blank=True, null=True)
    skills = models.JSONField(default=list, blank=True)

    # Accepted connections, maintained by the network app
    connections = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['username']

    def __str__(self):
        return self.email or self.username

    @property
    def display_name(self):
        return self.get_full_name() or self.username

    @property
    def is_moderator(self):
        return self.role in (UserRole.ADMIN, UserRole.ASSISTANT_ADMIN)
