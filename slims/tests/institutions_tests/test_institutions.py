from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from slims.institutions.models.institution import (
    Department,
    Faculty,
    PlacementOrganization,
)
from slims.tests.test_helpers import (
    AdminProfileFactory,
    DepartmentFactory,
    FacultyFactory,
    PlacementOrganizationFactory,
    SchoolSupervisorFactory,
    StudentFactory,
    authenticate,
    create_test_enrolled_student,
    create_test_siwes_detail,
)


class InstitutionAdminTestCase(APITestCase):
    def setUp(self):
        self.admin = AdminProfileFactory().user
        authenticate(self.client, self.admin)


class FacultyViewSetTest(InstitutionAdminTestCase):
    def test_create_normalizes_code(self):
        response = self.client.post(
            reverse("faculty-list"), {"name": "Engineering", "code": " eng "}
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Faculty.objects.get(pk=response.data["id"]).code, "ENG")

    def test_duplicate_code_is_a_conflict(self):
        FacultyFactory(code="SCI")
        response = self.client.post(
            reverse("faculty-list"), {"name": "Science Again", "code": "sci"}
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["message"], "Faculty with code SCI already exists")

    def test_lists_departments(self):
        department = DepartmentFactory()
        response = self.client.get(reverse("faculty-detail", args=[department.faculty_id]))
        self.assertEqual(response.data["departments"][0]["code"], department.code)

    def test_cannot_delete_faculty_with_students(self):
        student = StudentFactory()
        response = self.client.delete(
            reverse("faculty-detail", args=[student.department.faculty_id])
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        empty = FacultyFactory()
        response = self.client.delete(reverse("faculty-detail", args=[empty.id]))
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_students_are_refused(self):
        self.client.cookies.clear()
        authenticate(self.client, StudentFactory().user)
        response = self.client.get(reverse("faculty-list"))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class DepartmentViewSetTest(InstitutionAdminTestCase):
    def setUp(self):
        super().setUp()
        self.faculty = FacultyFactory()

    def test_code_unique_within_faculty(self):
        DepartmentFactory(faculty=self.faculty, code="CSC")
        response = self.client.post(
            reverse("department-list"),
            {"faculty": self.faculty.id, "name": "Computing", "code": "csc"},
        )
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

        response = self.client.post(
            reverse("department-list"),
            {"faculty": FacultyFactory().id, "name": "Computing", "code": "csc"},
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Department.objects.get(pk=response.data["id"]).code, "CSC")

    def test_filter_by_faculty_with_student_counts(self):
        department = DepartmentFactory(faculty=self.faculty)
        StudentFactory(department=department)
        StudentFactory(department=department)
        DepartmentFactory()

        response = self.client.get(reverse("department-list"), {"faculty": self.faculty.id})
        self.assertEqual(len(response.data["results"]), 1)
        self.assertEqual(response.data["results"][0]["student_count"], 2)
        self.assertEqual(response.data["results"][0]["faculty_name"], self.faculty.name)

    def test_filter_rejects_non_numeric_faculty(self):
        response = self.client.get(reverse("department-list"), {"faculty": "eng"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "VALIDATION_ERROR")
        self.assertIn("faculty", response.data["details"])

    def test_stats(self):
        department = DepartmentFactory(faculty=self.faculty)
        create_test_enrolled_student(department=department)
        SchoolSupervisorFactory(department=department)

        response = self.client.get(reverse("department-stats", args=[department.id]))
        self.assertEqual(
            response.data,
            {"total_students": 1, "active_sessions": 1, "total_supervisors": 1},
        )

    def test_cannot_delete_department_with_students(self):
        student = StudentFactory()
        response = self.client.delete(
            reverse("department-detail", args=[student.department_id])
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            response.data["message"], "Cannot delete department with enrolled students"
        )


class PlacementOrganizationViewSetTest(InstitutionAdminTestCase):
    def test_create_and_duplicate(self):
        response = self.client.post(
            reverse("organization-list"), {"name": " Acme Networks ", "city": "Lagos"}
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["name"], "Acme Networks")

        response = self.client.post(reverse("organization-list"), {"name": "ACME networks"})
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(PlacementOrganization.objects.count(), 1)

    def test_update_keeps_own_name(self):
        organization = PlacementOrganizationFactory(name="Globex")
        response = self.client.patch(
            reverse("organization-detail", args=[organization.id]),
            {"name": "Globex", "state": "Oyo"},
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["state"], "Oyo")

    def test_search(self):
        PlacementOrganizationFactory(name="Zenith Bank")
        PlacementOrganizationFactory(name="Zenith Labs")
        PlacementOrganizationFactory(name="Andela")

        response = self.client.get(reverse("organization-search"), {"q": "zenith"})
        self.assertEqual(response.data, ["Zenith Bank", "Zenith Labs"])

        response = self.client.get(reverse("organization-search"), {"q": "zenith", "limit": 1})
        self.assertEqual(response.data, ["Zenith Bank"])

        response = self.client.get(reverse("organization-search"))
        self.assertEqual(response.data, [])

    def test_search_rejects_bad_limit(self):
        for limit in ["ten", 0]:
            response = self.client.get(
                reverse("organization-search"), {"q": "zenith", "limit": limit}
            )
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertIn("limit", response.data["details"])

    def test_stats(self):
        student, session = create_test_enrolled_student()
        create_test_siwes_detail(student, session)
        PlacementOrganizationFactory()

        response = self.client.get(reverse("organization-stats"))
        self.assertEqual(
            response.data, {"total_organizations": 2, "students_with_placement": 1}
        )
