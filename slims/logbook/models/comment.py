from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


class WeeklyComment(models.Model):
    comment = models.TextField()
    commented_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["commented_at"]


class IndustrySupervisorWeeklyComment(WeeklyComment):
    weekly_entry = models.ForeignKey(
        "logbook.WeeklyEntry", on_delete=models.CASCADE, related_name="industry_comments"
    )
    industry_supervisor = models.ForeignKey(
        "users.IndustrySupervisor",
        on_delete=models.CASCADE,
        related_name="weekly_comments",
    )

    class Meta(WeeklyComment.Meta):
        pass

    def __str__(self):
        return f"Industry comment on {self.weekly_entry}"


class SchoolSupervisorWeeklyComment(WeeklyComment):
    weekly_entry = models.ForeignKey(
        "logbook.WeeklyEntry", on_delete=models.CASCADE, related_name="school_comments"
    )
    school_supervisor = models.ForeignKey(
        "users.SchoolSupervisor",
        on_delete=models.CASCADE,
        related_name="weekly_comments",
    )

    class Meta(WeeklyComment.Meta):
        pass

    def __str__(self):
        return f"School comment on {self.weekly_entry}"


class FinalComment(models.Model):
    """End-of-session assessment; one per supervisor type per student/session"""

    comment = models.TextField()
    rating = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1), MaxValueValidator(5)],
    )
    commented_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        abstract = True
        ordering = ["-commented_at"]


class IndustrySupervisorFinalComment(FinalComment):
    student = models.ForeignKey(
        "users.Student", on_delete=models.CASCADE, related_name="industry_final_comments"
    )
    siwes_session = models.ForeignKey(
        "siwes_sessions.SiwesSession",
        on_delete=models.CASCADE,
        related_name="industry_final_comments",
    )
    industry_supervisor = models.ForeignKey(
        "users.IndustrySupervisor",
        on_delete=models.CASCADE,
        related_name="final_comments",
    )

    class Meta(FinalComment.Meta):
        constraints = [
            models.UniqueConstraint(
                fields=["student", "siwes_session"],
                name="unique_industry_final_comment",
            )
        ]

    def __str__(self):
        return f"Industry final comment for {self.student}"


class SchoolSupervisorFinalComment(FinalComment):
    student = models.ForeignKey(
        "users.Student", on_delete=models.CASCADE, related_name="school_final_comments"
    )
    siwes_session = models.ForeignKey(
        "siwes_sessions.SiwesSession",
        on_delete=models.CASCADE,
        related_name="school_final_comments",
    )
    school_supervisor = models.ForeignKey(
        "users.SchoolSupervisor",
        on_delete=models.CASCADE,
        related_name="final_comments",
    )

    class Meta(FinalComment.Meta):
        constraints = [
            models.UniqueConstraint(
                fields=["student", "siwes_session"],
                name="unique_school_final_comment",
            )
        ]

    def __str__(self):
        return f"School final comment for {self.student}"
