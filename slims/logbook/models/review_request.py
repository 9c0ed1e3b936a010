from django.db import models
from model_utils import Choices


class IndustrySupervisorReviewRequest(models.Model):
    STATUS = Choices(
        ("PENDING", "Pending"),
        ("REVIEWED", "Reviewed"),
        ("EXPIRED", "Expired"),
    )

    weekly_entry = models.ForeignKey(
        "logbook.WeeklyEntry", on_delete=models.CASCADE, related_name="review_requests"
    )
    student = models.ForeignKey(
        "users.Student", on_delete=models.CASCADE, related_name="review_requests"
    )
    industry_supervisor = models.ForeignKey(
        "users.IndustrySupervisor",
        on_delete=models.CASCADE,
        related_name="review_requests",
    )
    status = models.CharField(max_length=10, choices=STATUS, default=STATUS.PENDING)
    requested_at = models.DateTimeField(auto_now_add=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-requested_at"]
        indexes = [
            models.Index(
                fields=["industry_supervisor", "status"],
                name="review_supervisor_status_idx",
            )
        ]

    def __str__(self):
        return f"Review of {self.weekly_entry} ({self.status})"
