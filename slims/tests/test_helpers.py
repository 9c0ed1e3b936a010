from datetime import date
import factory
from django.conf import settings
from django.contrib.auth import get_user_model
from faker import Faker
from slims.institutions.models.institution import (
    Faculty,
    Department,
    PlacementOrganization,
)
from slims.logbook.models.weekly_entry import WeeklyEntry
from slims.siwes_sessions.models.assignment import StudentSupervisorAssignment
from slims.siwes_sessions.models.session import (
    SiwesSession,
    SupervisorSessionEnrollment,
)
from slims.siwes_sessions.models.siwes_detail import StudentSiwesDetail
from slims.siwes_sessions.services.enrollment import add_student_to_session
from slims.users.models.profiles import (
    AdminProfile,
    Student,
    SchoolSupervisor,
    IndustrySupervisor,
)
from slims.users.utils.sessions import create_session

fake = Faker()
User = get_user_model()

TEST_PASSWORD = "testpass123"


class FacultyFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Faculty

    name = factory.Sequence(lambda n: f"Faculty {n}")
    code = factory.Sequence(lambda n: f"FAC{n:03d}")


class DepartmentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Department

    faculty = factory.SubFactory(FacultyFactory)
    name = factory.Sequence(lambda n: f"Department {n}")
    code = factory.Sequence(lambda n: f"DEP{n:03d}")


class PlacementOrganizationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = PlacementOrganization

    name = factory.Sequence(lambda n: f"Organization {n}")
    address = factory.LazyAttribute(lambda _: fake.street_address())
    city = factory.LazyAttribute(lambda _: fake.city())
    email = factory.LazyAttribute(lambda _: fake.company_email())


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User
        skip_postgeneration_save = True

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    first_name = factory.LazyAttribute(lambda _: fake.first_name())
    last_name = factory.LazyAttribute(lambda _: fake.last_name())
    user_type = User.STUDENT
    is_active = True

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        obj.set_password(extracted or TEST_PASSWORD)
        if create:
            obj.save(update_fields=["password"])


class AdminProfileFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = AdminProfile

    user = factory.SubFactory(UserFactory, user_type=User.ADMIN, is_staff=True)


class StudentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Student

    user = factory.SubFactory(UserFactory, user_type=User.STUDENT)
    matric_number = factory.Sequence(lambda n: f"CSC/2020/{n:03d}")
    department = factory.SubFactory(DepartmentFactory)
    level = "400"


class SchoolSupervisorFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SchoolSupervisor

    user = factory.SubFactory(UserFactory, user_type=User.SCHOOL_SUPERVISOR)
    staff_id = factory.Sequence(lambda n: f"STAFF{n:04d}")
    department = factory.SubFactory(DepartmentFactory)
    phone = factory.LazyAttribute(lambda _: fake.numerify(text="080########"))


class IndustrySupervisorFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = IndustrySupervisor

    user = factory.SubFactory(UserFactory, user_type=User.INDUSTRY_SUPERVISOR)
    placement_organization = factory.SubFactory(PlacementOrganizationFactory)
    position = "Engineering Lead"


class SiwesSessionFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SiwesSession

    name = factory.Sequence(lambda n: f"{2020 + n}/{2021 + n} SIWES")
    start_date = date(2025, 1, 6)
    end_date = date(2025, 6, 27)
    total_weeks = 4
    status = SiwesSession.STATUS.ACTIVE


def create_test_enrolled_student(session=None, **kwargs):
    """Student enrolled in ``session`` with an empty logbook"""
    session = session or SiwesSessionFactory()
    student = StudentFactory(**kwargs)
    add_student_to_session(student.pk, session.pk)
    student.refresh_from_db()
    return student, session


def create_test_school_supervisor_link(student, session, supervisor=None):
    """Enroll a school supervisor in ``session`` and assign ``student`` to them"""
    supervisor = supervisor or SchoolSupervisorFactory(department=student.department)
    SupervisorSessionEnrollment.objects.get_or_create(
        school_supervisor=supervisor, siwes_session=session
    )
    StudentSupervisorAssignment.objects.create(
        student=student, school_supervisor=supervisor, siwes_session=session
    )
    return supervisor


def create_test_siwes_detail(student, session, supervisor=None, **kwargs):
    supervisor = supervisor or IndustrySupervisorFactory()
    return StudentSiwesDetail.objects.create(
        student=student,
        siwes_session=session,
        placement_organization=supervisor.placement_organization,
        industry_supervisor=supervisor,
        training_start_date=kwargs.get("training_start_date", session.start_date),
        training_end_date=kwargs.get("training_end_date", session.end_date),
        job_title=kwargs.get("job_title", "Software Intern"),
    )


def create_test_supervised_student(session=None):
    """
    Enrolled student with both supervisors linked. Returns
    ``(student, session, school_supervisor, industry_supervisor)``.
    """
    student, session = create_test_enrolled_student(session)
    school_supervisor = create_test_school_supervisor_link(student, session)
    detail = create_test_siwes_detail(student, session)
    return student, session, school_supervisor, detail.industry_supervisor


def get_test_week(student, session, week_number=1):
    return WeeklyEntry.objects.get(
        student=student, siwes_session=session, week_number=week_number
    )


def fill_test_week(week, days=WeeklyEntry.DAYS, text="Worked on the deployment pipeline"):
    for day in days:
        setattr(week, f"{day}_entry", text)
    week.save()
    return week


def authenticate(client, user):
    """Sign ``client`` in through a real session cookie"""
    session = create_session(user)
    client.cookies[settings.SESSION_TOKEN_COOKIE_NAME] = session.token
    return session
