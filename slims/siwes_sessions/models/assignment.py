from django.conf import settings
from django.db import models
from model_utils import Choices


class StudentSupervisorAssignment(models.Model):
    """Links a student to their school supervisor for one session"""

    METHOD = Choices(
        ("MANUAL", "Manual"),
        ("AUTOMATIC", "Automatic"),
    )

    student = models.ForeignKey(
        "users.Student",
        on_delete=models.CASCADE,
        related_name="supervisor_assignments",
    )
    school_supervisor = models.ForeignKey(
        "users.SchoolSupervisor",
        on_delete=models.CASCADE,
        related_name="student_assignments",
    )
    siwes_session = models.ForeignKey(
        "siwes_sessions.SiwesSession",
        on_delete=models.CASCADE,
        related_name="assignments",
    )
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    assignment_method = models.CharField(
        max_length=10, choices=METHOD, default=METHOD.MANUAL
    )
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-assigned_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["student", "siwes_session"],
                name="unique_student_assignment_per_session",
            )
        ]

    def __str__(self):
        return f"{self.student} -> {self.school_supervisor} ({self.siwes_session})"
