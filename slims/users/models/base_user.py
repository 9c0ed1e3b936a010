from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.db import models
import uuid


class UserManager(BaseUserManager):
    def create_user(self, email, username=None, password=None, **extra_fields):
        """
        Create and save a User with the given email, username and password.
        A user created without a password (industry supervisors) can only
        sign in through a magic link.
        """
        if not email:
            raise ValueError("Users must have an email address")

        if username is None:
            # Generate a username from email if not provided
            username = email.split("@")[0]

        email = self.normalize_email(email)
        user = self.model(email=email, username=username, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, username=None, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("user_type", User.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, username, password, **extra_fields)


class User(AbstractUser):
    ADMIN = "ADMIN"
    STUDENT = "STUDENT"
    SCHOOL_SUPERVISOR = "SCHOOL_SUPERVISOR"
    INDUSTRY_SUPERVISOR = "INDUSTRY_SUPERVISOR"

    USER_TYPE_CHOICES = [
        (ADMIN, "Administrator"),
        (STUDENT, "Student"),
        (SCHOOL_SUPERVISOR, "School Supervisor"),
        (INDUSTRY_SUPERVISOR, "Industry Supervisor"),
    ]
    user_type = models.CharField(
        max_length=30,
        choices=USER_TYPE_CHOICES,
        default=STUDENT,
    )

    # Unique tracking ID for all users
    user_tag = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    email = models.EmailField(unique=True)
    email_verified = models.BooleanField(default=False)

    USERNAME_FIELD = "username"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["email"]

    objects = UserManager()

    @property
    def profile(self):
        """Returns the role profile matching ``user_type``."""
        attribute = {
            self.ADMIN: "admin_profile",
            self.STUDENT: "student_profile",
            self.SCHOOL_SUPERVISOR: "school_supervisor_profile",
            self.INDUSTRY_SUPERVISOR: "industry_supervisor_profile",
        }.get(self.user_type)
        return getattr(self, attribute, None) if attribute else None

    def get_full_name(self):
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name or self.username

    def get_short_name(self):
        return self.first_name

    def __str__(self):
        return self.username


from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model
from django.db.models import Q


class CustomUserModelBackend(ModelBackend):
    """
    Authentication backend that allows users to log in using either their
    username (matric number / staff id) or their email.
    """

    def authenticate(self, request, username=None, password=None, **kwargs):
        UserModel = get_user_model()
        if username is None:
            username = kwargs.get(UserModel.USERNAME_FIELD)

        if username is None or password is None:
            return None

        try:
            user = UserModel.objects.get(
                Q(username__iexact=username.strip()) | Q(email__iexact=username.strip())
            )
        except UserModel.DoesNotExist:
            # Run the default password hasher once to reduce the timing
            # difference between an existing and a nonexistent user
            UserModel().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user

        return None
