from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
import slims.logbook.models.diagram


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("siwes_sessions", "0001_initial"),
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="WeeklyEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("week_number", models.PositiveSmallIntegerField()),
                ("monday_entry", models.TextField(blank=True, null=True)),
                ("tuesday_entry", models.TextField(blank=True, null=True)),
                ("wednesday_entry", models.TextField(blank=True, null=True)),
                ("thursday_entry", models.TextField(blank=True, null=True)),
                ("friday_entry", models.TextField(blank=True, null=True)),
                ("saturday_entry", models.TextField(blank=True, null=True)),
                ("is_locked", models.BooleanField(default=False)),
                (
                    "locked_by",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("INDUSTRY_SUPERVISOR", "Industry Supervisor"),
                            ("SCHOOL_SUPERVISOR", "School Supervisor"),
                            ("MANUAL", "Manual"),
                        ],
                        max_length=20,
                        null=True,
                    ),
                ),
                ("locked_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "siwes_session",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="weekly_entries",
                        to="siwes_sessions.siwessession",
                    ),
                ),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="weekly_entries",
                        to="users.student",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "Weekly entries",
                "ordering": ["week_number"],
                "indexes": [
                    models.Index(
                        fields=["siwes_session", "is_locked"],
                        name="week_session_locked_idx",
                    )
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("student", "siwes_session", "week_number"),
                        name="unique_week_per_student_session",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Diagram",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("file", models.FileField(upload_to=slims.logbook.models.diagram.diagram_upload_path)),
                ("file_name", models.CharField(max_length=255)),
                ("file_size", models.PositiveIntegerField()),
                ("mime_type", models.CharField(max_length=100)),
                ("caption", models.CharField(blank=True, max_length=255)),
                ("uploaded_at", models.DateTimeField(auto_now_add=True)),
                (
                    "weekly_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="diagrams",
                        to="logbook.weeklyentry",
                    ),
                ),
            ],
            options={
                "ordering": ["uploaded_at"],
            },
        ),
        migrations.CreateModel(
            name="IndustrySupervisorWeeklyComment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("comment", models.TextField()),
                ("commented_at", models.DateTimeField(auto_now_add=True)),
                (
                    "industry_supervisor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="weekly_comments",
                        to="users.industrysupervisor",
                    ),
                ),
                (
                    "weekly_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="industry_comments",
                        to="logbook.weeklyentry",
                    ),
                ),
            ],
            options={
                "ordering": ["commented_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="SchoolSupervisorWeeklyComment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("comment", models.TextField()),
                ("commented_at", models.DateTimeField(auto_now_add=True)),
                (
                    "school_supervisor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="weekly_comments",
                        to="users.schoolsupervisor",
                    ),
                ),
                (
                    "weekly_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="school_comments",
                        to="logbook.weeklyentry",
                    ),
                ),
            ],
            options={
                "ordering": ["commented_at"],
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="IndustrySupervisorFinalComment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("comment", models.TextField()),
                (
                    "rating",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ],
                    ),
                ),
                ("commented_at", models.DateTimeField(auto_now_add=True)),
                (
                    "industry_supervisor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="final_comments",
                        to="users.industrysupervisor",
                    ),
                ),
                (
                    "siwes_session",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="industry_final_comments",
                        to="siwes_sessions.siwessession",
                    ),
                ),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="industry_final_comments",
                        to="users.student",
                    ),
                ),
            ],
            options={
                "ordering": ["-commented_at"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        fields=("student", "siwes_session"),
                        name="unique_industry_final_comment",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="SchoolSupervisorFinalComment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("comment", models.TextField()),
                (
                    "rating",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(5),
                        ],
                    ),
                ),
                ("commented_at", models.DateTimeField(auto_now_add=True)),
                (
                    "school_supervisor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="final_comments",
                        to="users.schoolsupervisor",
                    ),
                ),
                (
                    "siwes_session",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="school_final_comments",
                        to="siwes_sessions.siwessession",
                    ),
                ),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="school_final_comments",
                        to="users.student",
                    ),
                ),
            ],
            options={
                "ordering": ["-commented_at"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        fields=("student", "siwes_session"),
                        name="unique_school_final_comment",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="IndustrySupervisorReviewRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("REVIEWED", "Reviewed"),
                            ("EXPIRED", "Expired"),
                        ],
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                ("requested_at", models.DateTimeField(auto_now_add=True)),
                ("reviewed_at", models.DateTimeField(blank=True, null=True)),
                (
                    "industry_supervisor",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="review_requests",
                        to="users.industrysupervisor",
                    ),
                ),
                (
                    "student",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="review_requests",
                        to="users.student",
                    ),
                ),
                (
                    "weekly_entry",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="review_requests",
                        to="logbook.weeklyentry",
                    ),
                ),
            ],
            options={
                "ordering": ["-requested_at"],
                "indexes": [
                    models.Index(
                        fields=["industry_supervisor", "status"],
                        name="review_supervisor_status_idx",
                    )
                ],
            },
        ),
    ]
