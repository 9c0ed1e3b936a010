import json
from django.core.exceptions import PermissionDenied
from django.http import Http404
from django.test import TestCase
from rest_framework import exceptions, status
from rest_framework.response import Response
from slims.core.exception_handler import api_exception_handler
from slims.core.exceptions import (
    AppError,
    BusinessError,
    FinalCommentExistsError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedSupervisorError,
    WeekLockedError,
)
from slims.core.renderers import EnvelopeJSONRenderer, build_envelope


class AppErrorTest(TestCase):
    def test_defaults(self):
        error = WeekLockedError()
        self.assertEqual(error.status_code, 400)
        self.assertEqual(error.code, "WEEK_LOCKED")
        self.assertIn("locked week", error.message)

    def test_custom_message_keeps_code(self):
        error = NotFoundError("Week not found")
        self.assertEqual(error.message, "Week not found")
        self.assertEqual(error.code, "NOT_FOUND")
        self.assertEqual(str(error), "Week not found")

    def test_subclass_status_codes(self):
        self.assertEqual(UnauthorizedSupervisorError().status_code, 403)
        self.assertIsInstance(UnauthorizedSupervisorError(), ForbiddenError)
        self.assertEqual(FinalCommentExistsError().status_code, 409)

    def test_to_dict_includes_details_only_when_given(self):
        self.assertEqual(
            BusinessError("Bad").to_dict(), {"message": "Bad", "code": "BUSINESS_ERROR"}
        )
        self.assertEqual(
            AppError("Oops", status_code=502, code="UPSTREAM", details={"a": 1}).to_dict(),
            {"message": "Oops", "code": "UPSTREAM", "details": {"a": 1}},
        )


class ApiExceptionHandlerTest(TestCase):
    context = {"view": None}

    def test_app_error(self):
        response = api_exception_handler(WeekLockedError(), self.context)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "WEEK_LOCKED")

    def test_validation_error_carries_field_details(self):
        exc = exceptions.ValidationError({"comment": ["This field is required."]})
        response = api_exception_handler(exc, self.context)
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["code"], "VALIDATION_ERROR")
        self.assertEqual(response.data["message"], "Validation failed")
        self.assertIn("comment", response.data["details"])

    def test_not_authenticated(self):
        response = api_exception_handler(exceptions.NotAuthenticated(), self.context)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["code"], "NOT_AUTHENTICATED")

    def test_django_exceptions_are_translated(self):
        response = api_exception_handler(Http404(), self.context)
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["code"], "NOT_FOUND")

        response = api_exception_handler(PermissionDenied(), self.context)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["code"], "PERMISSION_DENIED")

    def test_unexpected_error_is_masked(self):
        response = api_exception_handler(ValueError("db password leaked"), self.context)
        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.data["message"], "Internal server error")
        self.assertEqual(response.data["code"], "INTERNAL_ERROR")


class EnvelopeRendererTest(TestCase):
    def render(self, data, status_code=200):
        response = Response(data, status=status_code)
        rendered = EnvelopeJSONRenderer().render(
            data, renderer_context={"response": response}
        )
        return json.loads(rendered)

    def test_success_envelope(self):
        body = self.render({"id": 1})
        self.assertTrue(body["success"])
        self.assertEqual(body["data"], {"id": 1})
        self.assertIn("timestamp", body["meta"])
        self.assertNotIn("error", body)

    def test_error_envelope(self):
        body = self.render({"message": "Week not found", "code": "NOT_FOUND"}, 404)
        self.assertFalse(body["success"])
        self.assertEqual(body["error"]["code"], "NOT_FOUND")
        self.assertNotIn("data", body)

    def test_paginated_list_moves_paging_into_meta(self):
        body = self.render(
            {"count": 2, "next": None, "previous": None, "results": [{"id": 1}, {"id": 2}]}
        )
        self.assertEqual(body["data"], [{"id": 1}, {"id": 2}])
        self.assertEqual(body["meta"]["count"], 2)
        self.assertIsNone(body["meta"]["next"])

    def test_build_envelope_merges_meta(self):
        envelope = build_envelope([], 200, {"page": 1})
        self.assertEqual(envelope["meta"]["page"], 1)
        self.assertIn("timestamp", envelope["meta"])
