from django.core.exceptions import ValidationError
from django.db import models
from model_utils import Choices


class SiwesSession(models.Model):
    """An industrial training period, e.g. "2024/2025 SIWES" """

    STATUS = Choices(
        ("ACTIVE", "Active"),
        ("CLOSED", "Closed"),
    )

    name = models.CharField(max_length=100, unique=True)
    start_date = models.DateField()
    end_date = models.DateField()
    total_weeks = models.PositiveSmallIntegerField(default=24)
    status = models.CharField(max_length=10, choices=STATUS, default=STATUS.ACTIVE)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-start_date"]

    def __str__(self):
        return self.name

    def clean(self):
        if self.start_date and self.end_date and self.start_date >= self.end_date:
            raise ValidationError("Start date must be before end date")
        super().clean()

    @property
    def is_active(self):
        return self.status == self.STATUS.ACTIVE


class StudentSessionEnrollment(models.Model):
    student = models.ForeignKey(
        "users.Student", on_delete=models.CASCADE, related_name="session_enrollments"
    )
    siwes_session = models.ForeignKey(
        SiwesSession, on_delete=models.CASCADE, related_name="student_enrollments"
    )
    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-enrolled_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["student", "siwes_session"],
                name="unique_student_session_enrollment",
            )
        ]

    def __str__(self):
        return f"{self.student} in {self.siwes_session}"


class SupervisorSessionEnrollment(models.Model):
    school_supervisor = models.ForeignKey(
        "users.SchoolSupervisor",
        on_delete=models.CASCADE,
        related_name="session_enrollments",
    )
    siwes_session = models.ForeignKey(
        SiwesSession, on_delete=models.CASCADE, related_name="supervisor_enrollments"
    )
    enrolled_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-enrolled_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["school_supervisor", "siwes_session"],
                name="unique_supervisor_session_enrollment",
            )
        ]

    def __str__(self):
        return f"{self.school_supervisor} in {self.siwes_session}"
