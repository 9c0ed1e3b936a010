# slims/siwes_sessions/services/siwes_detail.py
import logging
from django.db import transaction
from slims.core.exceptions import BusinessError, ConflictError, NotFoundError
from slims.institutions.models.institution import PlacementOrganization
from slims.notifications.tasks import notify_industry_supervisor_linked
from slims.siwes_sessions.models.session import StudentSessionEnrollment
from slims.siwes_sessions.models.siwes_detail import StudentSiwesDetail
from slims.users.models.base_user import User
from slims.users.models.profiles import IndustrySupervisor

logger = logging.getLogger(__name__)


def get_siwes_details(student_id, session_id=None):
    """SIWES details for a student, newest session first, or one session's"""
    details = StudentSiwesDetail.objects.filter(student_id=student_id).select_related(
        "placement_organization",
        "industry_supervisor__user",
        "siwes_session",
    )
    if session_id is not None:
        return details.filter(siwes_session_id=session_id).first()
    return details.order_by("-siwes_session__start_date")


def _split_name(name):
    parts = name.strip().split(" ", 1)
    return parts[0], parts[1] if len(parts) > 1 else ""


def create_industry_supervisor_from_details(organization, supervisor_data):
    """
    Returns the industry supervisor with this email, creating a passwordless
    account when none exists. Industry supervisors sign in by magic link.
    """
    email = supervisor_data["email"].strip().lower()
    existing = (
        IndustrySupervisor.objects.select_related("user")
        .filter(user__email__iexact=email)
        .first()
    )
    if existing is not None:
        logger.info(f"Industry supervisor {existing.pk} already exists")
        return existing, False

    if User.objects.filter(email__iexact=email).exists():
        raise ConflictError(f"User with email {email} already exists with different role")

    first_name, last_name = _split_name(supervisor_data["name"])
    user = User.objects.create_user(
        email=email,
        username=email,
        first_name=first_name,
        last_name=last_name,
        user_type=User.INDUSTRY_SUPERVISOR,
    )
    supervisor = IndustrySupervisor.objects.create(
        user=user,
        placement_organization=organization,
        phone=supervisor_data.get("phone") or "",
        position=supervisor_data.get("position") or "",
    )
    logger.info(
        f"Created industry supervisor {supervisor.pk} for magic link authentication"
    )
    return supervisor, True


def create_or_update_siwes_details(student_id, session_id, data):
    """
    ``data`` keys: placement_organization_id, training_start_date,
    training_end_date, job_title, department_at_organization and
    industry_supervisor ({name, email, phone, position}).
    """
    logger.info(
        f"Creating/updating SIWES details for student {student_id} "
        f"in session {session_id}"
    )
    if not StudentSessionEnrollment.objects.filter(
        student_id=student_id, siwes_session_id=session_id
    ).exists():
        raise BusinessError("Student not enrolled in this session")

    if data["training_start_date"] >= data["training_end_date"]:
        raise BusinessError("Training start date must be before training end date")

    try:
        organization = PlacementOrganization.objects.get(
            pk=data["placement_organization_id"]
        )
    except PlacementOrganization.DoesNotExist:
        raise NotFoundError("Placement organization not found")

    with transaction.atomic():
        supervisor, _ = create_industry_supervisor_from_details(
            organization, data["industry_supervisor"]
        )
        detail, created = StudentSiwesDetail.objects.select_for_update().get_or_create(
            student_id=student_id,
            siwes_session_id=session_id,
            defaults={
                "placement_organization": organization,
                "industry_supervisor": supervisor,
                "training_start_date": data["training_start_date"],
                "training_end_date": data["training_end_date"],
            },
        )
        supervisor_changed = created or detail.industry_supervisor_id != supervisor.pk

        detail.placement_organization = organization
        detail.industry_supervisor = supervisor
        detail.training_start_date = data["training_start_date"]
        detail.training_end_date = data["training_end_date"]
        detail.job_title = data.get("job_title") or ""
        detail.department_at_organization = data.get("department_at_organization") or ""
        detail.save()

    if supervisor_changed:
        notify_industry_supervisor_linked.delay(detail.id)
    return detail
