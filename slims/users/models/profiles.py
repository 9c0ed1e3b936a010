from django.conf import settings
from django.db import models


class Student(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="student_profile",
    )
    matric_number = models.CharField(max_length=30, unique=True)
    department = models.ForeignKey(
        "institutions.Department", on_delete=models.PROTECT, related_name="students"
    )
    level = models.CharField(max_length=10, default="400")
    current_siwes_session = models.ForeignKey(
        "siwes_sessions.SiwesSession",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["matric_number"]

    def __str__(self):
        return f"{self.user.get_full_name()} ({self.matric_number})"

    def save(self, *args, **kwargs):
        # Matric numbers double as usernames and are stored upper-cased
        self.matric_number = self.matric_number.strip().upper()
        super().save(*args, **kwargs)

    @property
    def full_name(self):
        return self.user.get_full_name()


class SchoolSupervisor(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="school_supervisor_profile",
    )
    staff_id = models.CharField(max_length=30, unique=True)
    department = models.ForeignKey(
        "institutions.Department",
        on_delete=models.PROTECT,
        related_name="school_supervisors",
    )
    phone = models.CharField(max_length=20, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["staff_id"]

    def __str__(self):
        return f"{self.user.get_full_name()} ({self.staff_id})"

    @property
    def full_name(self):
        return self.user.get_full_name()


class IndustrySupervisor(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="industry_supervisor_profile",
    )
    placement_organization = models.ForeignKey(
        "institutions.PlacementOrganization",
        on_delete=models.CASCADE,
        related_name="industry_supervisors",
    )
    phone = models.CharField(max_length=20, blank=True)
    position = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.user.get_full_name()} - {self.placement_organization}"

    @property
    def full_name(self):
        return self.user.get_full_name()


class AdminProfile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="admin_profile",
    )
    is_super_admin = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"Admin: {self.user.get_full_name()}"
