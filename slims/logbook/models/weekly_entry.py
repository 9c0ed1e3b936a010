from django.core.exceptions import ValidationError
from django.db import models
from model_utils import Choices


class WeeklyEntry(models.Model):
    """One week of a student's logbook for a SIWES session"""

    DAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

    LOCKED_BY = Choices(
        ("INDUSTRY_SUPERVISOR", "Industry Supervisor"),
        ("SCHOOL_SUPERVISOR", "School Supervisor"),
        ("MANUAL", "Manual"),
    )

    student = models.ForeignKey(
        "users.Student", on_delete=models.CASCADE, related_name="weekly_entries"
    )
    siwes_session = models.ForeignKey(
        "siwes_sessions.SiwesSession",
        on_delete=models.CASCADE,
        related_name="weekly_entries",
    )
    week_number = models.PositiveSmallIntegerField()

    monday_entry = models.TextField(null=True, blank=True)
    tuesday_entry = models.TextField(null=True, blank=True)
    wednesday_entry = models.TextField(null=True, blank=True)
    thursday_entry = models.TextField(null=True, blank=True)
    friday_entry = models.TextField(null=True, blank=True)
    saturday_entry = models.TextField(null=True, blank=True)

    is_locked = models.BooleanField(default=False)
    locked_by = models.CharField(
        max_length=20, choices=LOCKED_BY, null=True, blank=True
    )
    locked_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["week_number"]
        verbose_name_plural = "Weekly entries"
        constraints = [
            models.UniqueConstraint(
                fields=["student", "siwes_session", "week_number"],
                name="unique_week_per_student_session",
            )
        ]
        indexes = [
            models.Index(
                fields=["siwes_session", "is_locked"], name="week_session_locked_idx"
            )
        ]

    def __str__(self):
        return f"Week {self.week_number} - {self.student}"

    def clean(self):
        if self.is_locked and (self.locked_by is None or self.locked_at is None):
            raise ValidationError("A locked week must record who locked it and when")
        if not self.is_locked and (
            self.locked_by is not None or self.locked_at is not None
        ):
            raise ValidationError("An unlocked week cannot carry lock details")
        super().clean()

    @classmethod
    def day_field(cls, day):
        """Model field holding ``day``'s text, or None for an unknown day"""
        day = (day or "").strip().lower()
        return f"{day}_entry" if day in cls.DAYS else None

    @property
    def day_entries(self):
        return {day: getattr(self, f"{day}_entry") for day in self.DAYS}

    @property
    def has_entries(self):
        return any(
            value and value.strip() for value in self.day_entries.values()
        )
