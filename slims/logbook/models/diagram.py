from django.db import models


def diagram_upload_path(instance, filename):
    entry = instance.weekly_entry
    return (
        f"diagrams/{entry.siwes_session_id}/{entry.student_id}/"
        f"week-{entry.week_number}/{filename}"
    )


class Diagram(models.Model):
    weekly_entry = models.ForeignKey(
        "logbook.WeeklyEntry", on_delete=models.CASCADE, related_name="diagrams"
    )
    file = models.FileField(upload_to=diagram_upload_path)
    file_name = models.CharField(max_length=255)
    file_size = models.PositiveIntegerField()
    mime_type = models.CharField(max_length=100)
    caption = models.CharField(max_length=255, blank=True)
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["uploaded_at"]

    def __str__(self):
        return self.file_name
