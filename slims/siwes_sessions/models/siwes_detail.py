from django.db import models


class StudentSiwesDetail(models.Model):
    """Where a student is placed for a session and who supervises them there"""

    student = models.ForeignKey(
        "users.Student", on_delete=models.CASCADE, related_name="siwes_details"
    )
    siwes_session = models.ForeignKey(
        "siwes_sessions.SiwesSession",
        on_delete=models.CASCADE,
        related_name="siwes_details",
    )
    placement_organization = models.ForeignKey(
        "institutions.PlacementOrganization",
        on_delete=models.PROTECT,
        related_name="siwes_details",
    )
    industry_supervisor = models.ForeignKey(
        "users.IndustrySupervisor",
        on_delete=models.PROTECT,
        related_name="siwes_details",
    )
    training_start_date = models.DateField()
    training_end_date = models.DateField()
    job_title = models.CharField(max_length=150, blank=True)
    department_at_organization = models.CharField(max_length=150, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Student SIWES Detail"
        constraints = [
            models.UniqueConstraint(
                fields=["student", "siwes_session"],
                name="unique_siwes_detail_per_session",
            )
        ]

    def __str__(self):
        return f"{self.student} at {self.placement_organization}"
