import shutil
import tempfile
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase
from slims.logbook.models.diagram import Diagram
from slims.logbook.models.review_request import IndustrySupervisorReviewRequest
from slims.logbook.models.weekly_entry import WeeklyEntry
from slims.logbook.services import review
from slims.tests.test_helpers import (
    IndustrySupervisorFactory,
    SchoolSupervisorFactory,
    StudentFactory,
    authenticate,
    create_test_supervised_student,
    fill_test_week,
    get_test_week,
)

MEDIA_ROOT = tempfile.mkdtemp()


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class StudentLogbookViewSetTest(APITestCase):
    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)
        super().tearDownClass()

    def setUp(self):
        (
            self.student,
            self.session,
            self.school_supervisor,
            self.industry_supervisor,
        ) = create_test_supervised_student()
        self.week = get_test_week(self.student, self.session)
        authenticate(self.client, self.student.user)

    def test_list_current_session_weeks(self):
        fill_test_week(self.week, days=["monday"])
        response = self.client.get(reverse("student-logbook-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([w["week_number"] for w in response.data], [1, 2, 3, 4])
        self.assertTrue(response.data[0]["has_entries"])
        self.assertFalse(response.data[1]["has_entries"])

    def test_list_without_session(self):
        student = StudentFactory()
        self.client.cookies.clear()
        authenticate(self.client, student.user)
        response = self.client.get(reverse("student-logbook-list"))
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_rejects_non_numeric_session(self):
        response = self.client.get(reverse("student-logbook-list"), {"session_id": "abc"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "VALIDATION_ERROR")
        self.assertIn("session_id", response.data["details"])

    def test_retrieve_own_week_only(self):
        response = self.client.get(reverse("student-logbook-detail", args=[self.week.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["matric_number"], self.student.matric_number)
        self.assertIsNone(response.data["review_status"])

        other, _, _, _ = create_test_supervised_student(self.session)
        other_week = get_test_week(other, self.session)
        response = self.client.get(reverse("student-logbook-detail", args=[other_week.id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_lock_status(self):
        url = reverse("student-logbook-lock-status", args=[self.week.id])
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"week_id": self.week.id, "is_locked": False})

        review.lock_week(self.week.pk, self.school_supervisor.pk, review.MANUAL)
        response = self.client.get(url)
        self.assertTrue(response.data["is_locked"])

        other, _, _, _ = create_test_supervised_student(self.session)
        other_week = get_test_week(other, self.session)
        response = self.client.get(
            reverse("student-logbook-lock-status", args=[other_week.id])
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_put_and_delete_day(self):
        url = reverse("student-logbook-day", args=[self.week.id, "tuesday"])
        response = self.client.put(url, {"content": "Crimped patch cables"})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["tuesday_entry"], "Crimped patch cables")

        response = self.client.delete(url)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data["tuesday_entry"])

    def test_put_rejects_script(self):
        url = reverse("student-logbook-day", args=[self.week.id, "monday"])
        response = self.client.put(url, {"content": "<script>alert(1)</script>"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "BUSINESS_ERROR")

    def test_put_on_locked_week(self):
        review.lock_week(self.week.pk, self.school_supervisor.pk, review.MANUAL)
        url = reverse("student-logbook-day", args=[self.week.id, "monday"])
        response = self.client.put(url, {"content": "Too late"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "WEEK_LOCKED")

    def test_request_review(self):
        url = reverse("student-logbook-request-review", args=[self.week.id])
        response = self.client.post(url)
        self.assertEqual(response.data["code"], "NO_ENTRIES")

        fill_test_week(self.week, days=["monday"])
        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["status"], "PENDING")
        self.assertEqual(response.data["week_number"], 1)

        response = self.client.post(url)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "REVIEW_ALREADY_REQUESTED")

        response = self.client.get(reverse("student-logbook-detail", args=[self.week.id]))
        self.assertEqual(response.data["review_status"], "PENDING")

    def test_diagram_upload_list_and_delete(self):
        upload = SimpleUploadedFile("rack.png", b"\x89PNG fake", content_type="image/png")
        response = self.client.post(
            reverse("student-logbook-diagrams", args=[self.week.id]),
            {"file": upload, "caption": "Server rack"},
            format="multipart",
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["caption"], "Server rack")
        diagram_id = response.data["id"]

        response = self.client.get(reverse("student-logbook-diagrams", args=[self.week.id]))
        self.assertEqual([d["id"] for d in response.data], [diagram_id])

        response = self.client.delete(
            reverse("student-logbook-delete-diagram", args=[self.week.id, diagram_id])
        )
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Diagram.objects.exists())

    def test_diagram_wrong_type(self):
        upload = SimpleUploadedFile("notes.txt", b"plain", content_type="text/plain")
        response = self.client.post(
            reverse("student-logbook-diagrams", args=[self.week.id]),
            {"file": upload},
            format="multipart",
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_final_comments(self):
        response = self.client.get(reverse("student-logbook-final-comments"))
        self.assertEqual(response.data, {"industry": None, "school": None})

        review.add_final_comment(
            self.student.pk,
            self.session.pk,
            self.school_supervisor.pk,
            "Diligent",
            review.SCHOOL_SUPERVISOR,
            rating=4,
        )
        response = self.client.get(reverse("student-logbook-final-comments"))
        self.assertEqual(response.data["school"]["rating"], 4)
        self.assertEqual(response.data["school"]["supervisor_type"], "SCHOOL_SUPERVISOR")
        self.assertIsNone(response.data["industry"])


class SchoolSupervisorWeekViewSetTest(APITestCase):
    def setUp(self):
        (
            self.student,
            self.session,
            self.school_supervisor,
            self.industry_supervisor,
        ) = create_test_supervised_student()
        self.week = fill_test_week(get_test_week(self.student, self.session))
        authenticate(self.client, self.school_supervisor.user)

    def test_list_requires_link(self):
        url = reverse("school-supervisor-week-list")
        response = self.client.get(url)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.get(
            url, {"student_id": self.student.id, "session_id": self.session.id}
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 4)

        stranger = StudentFactory()
        response = self.client.get(
            url, {"student_id": stranger.id, "session_id": self.session.id}
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "UNAUTHORIZED")

    def test_list_rejects_non_numeric_ids(self):
        response = self.client.get(
            reverse("school-supervisor-week-list"),
            {"student_id": "x", "session_id": self.session.id},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "VALIDATION_ERROR")
        self.assertEqual(list(response.data["details"]), ["student_id"])

    def test_comment_then_industry_comment_locks(self):
        response = self.client.post(
            reverse("school-supervisor-week-comments", args=[self.week.id]),
            {"comment": "Well documented"},
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["comment"]["supervisor_type"], "SCHOOL_SUPERVISOR")
        self.assertFalse(response.data["week"]["is_locked"])

        review.add_industry_comment(self.week.pk, self.industry_supervisor.pk, "Agreed")
        response = self.client.get(
            reverse("school-supervisor-week-detail", args=[self.week.id])
        )
        self.assertTrue(response.data["is_locked"])
        self.assertEqual(response.data["locked_by"], "INDUSTRY_SUPERVISOR")
        self.assertEqual(len(response.data["comments"]), 2)

    def test_lock_and_unlock(self):
        response = self.client.post(reverse("school-supervisor-week-lock", args=[self.week.id]))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["locked_by"], "MANUAL")

        response = self.client.post(
            reverse("school-supervisor-week-unlock", args=[self.week.id])
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(response.data["is_locked"])

        response = self.client.post(
            reverse("school-supervisor-week-unlock", args=[self.week.id])
        )
        self.assertEqual(response.data["code"], "WEEK_NOT_LOCKED")

    def test_unassigned_supervisor_cannot_touch_week(self):
        other = SchoolSupervisorFactory()
        self.client.cookies.clear()
        authenticate(self.client, other.user)
        response = self.client.post(reverse("school-supervisor-week-lock", args=[self.week.id]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(WeeklyEntry.objects.get(pk=self.week.pk).is_locked)

    def test_final_comment(self):
        url = reverse("school-supervisor-week-final-comments")
        payload = {
            "student_id": self.student.id,
            "session_id": self.session.id,
            "comment": "Ready for defence",
            "rating": 5,
        }
        response = self.client.post(url, payload)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["rating"], 5)

        response = self.client.post(url, payload)
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["code"], "FINAL_COMMENT_EXISTS")

    def test_students_are_refused(self):
        self.client.cookies.clear()
        authenticate(self.client, self.student.user)
        response = self.client.get(
            reverse("school-supervisor-week-detail", args=[self.week.id])
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)


class IndustrySupervisorWeekViewSetTest(APITestCase):
    def setUp(self):
        (
            self.student,
            self.session,
            self.school_supervisor,
            self.industry_supervisor,
        ) = create_test_supervised_student()
        self.week = fill_test_week(get_test_week(self.student, self.session))
        authenticate(self.client, self.industry_supervisor.user)

    def test_comment_reviews_pending_request(self):
        review.create_review_request(
            self.week.pk, self.student.pk, self.industry_supervisor.pk
        )
        response = self.client.post(
            reverse("industry-supervisor-week-comments", args=[self.week.id]),
            {"comment": "Good progress"},
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["week"]["review_status"], "REVIEWED")

    def test_blank_comment(self):
        response = self.client.post(
            reverse("industry-supervisor-week-comments", args=[self.week.id]),
            {"comment": "  "},
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_unlinked_supervisor(self):
        other = IndustrySupervisorFactory()
        self.client.cookies.clear()
        authenticate(self.client, other.user)
        response = self.client.get(
            reverse("industry-supervisor-week-detail", args=[self.week.id])
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_final_comment_rating_range(self):
        response = self.client.post(
            reverse("industry-supervisor-week-final-comments"),
            {
                "student_id": self.student.id,
                "session_id": self.session.id,
                "comment": "Punctual",
                "rating": 9,
            },
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Rating must be between 1 and 5")


class ReviewRequestViewSetTest(APITestCase):
    def setUp(self):
        (
            self.student,
            self.session,
            _,
            self.industry_supervisor,
        ) = create_test_supervised_student()
        week = get_test_week(self.student, self.session)
        self.pending = review.create_review_request(
            week.pk, self.student.pk, self.industry_supervisor.pk
        )
        other_week = get_test_week(self.student, self.session, 2)
        self.reviewed = review.create_review_request(
            other_week.pk, self.student.pk, self.industry_supervisor.pk
        )
        IndustrySupervisorReviewRequest.objects.filter(pk=self.reviewed.pk).update(
            status=IndustrySupervisorReviewRequest.STATUS.REVIEWED
        )
        other, session, _, stranger = create_test_supervised_student()
        review.create_review_request(
            get_test_week(other, session).pk, other.pk, stranger.pk
        )
        authenticate(self.client, self.industry_supervisor.user)

    def test_only_own_requests(self):
        response = self.client.get(reverse("review-request-list"))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            {r["id"] for r in response.data["results"]},
            {self.pending.id, self.reviewed.id},
        )

    def test_filter_by_status(self):
        response = self.client.get(reverse("review-request-list"), {"status": "PENDING"})
        self.assertEqual([r["id"] for r in response.data["results"]], [self.pending.id])

    def test_detail(self):
        response = self.client.get(reverse("review-request-detail", args=[self.pending.id]))
        self.assertEqual(response.data["matric_number"], self.student.matric_number)
