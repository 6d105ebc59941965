import uuid
from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager


class Plan(models.TextChoices):
    FREE = 'FREE', 'Free'
    PRO = 'PRO', 'Pro'


def default_reminder_days():
    return [7, 1]


class UserManager(BaseUserManager):
    """
    Manager for email-identified users.
    Emails are stored lower-cased so lookups are case-insensitive.
    """

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError("An email address is required")
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            # External OAuth accounts have no local password
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        return self._create_user(email, password, **extra_fields)


class User(AbstractUser):
    """
    LifeOps account. Identified by email; carries the subscription plan and
    reminder preferences.
    """
    username = None
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    name = models.CharField(max_length=255, blank=True, default='')
    plan = models.CharField(
        max_length=10,
        choices=Plan.choices,
        default=Plan.FREE
    )

    # Reminder preferences (delivery is handled outside this service)
    email_reminders = models.BooleanField(default=True)
    sms_reminders = models.BooleanField(default=False)
    phone_number = models.CharField(max_length=30, blank=True, null=True)
    reminder_days = models.JSONField(default=default_reminder_days)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        ordering = ['email']

    def __str__(self):
        return self.email

    @property
    def is_pro(self) -> bool:
        return self.plan == Plan.PRO
