import os
from celery import Celery

os.environ.setdefault(
    "DJANGO_SETTINGS_MODULE", "slims.slims_main.settings.base"
)  # Change based on the environment

app = Celery("slims")

# Load task modules from all registered Django app configs.
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks(
    [
        "slims.users",
        "slims.action_logs",
        "slims.logbook",
        "slims.notifications",
    ]
)
