"""Tests for the shared error taxonomy and the HTTP error boundary."""

import pytest
from httpx import ASGITransport, AsyncClient

from openclass.core.exceptions import (
    AppError,
    ErrorKind,
    authentication_error,
    authorization_error,
    conflict_error,
    internal_error,
    not_found_error,
    rate_limit_error,
    validation_error,
)

EXPECTED = [
    (ErrorKind.VALIDATION, 400, "VALIDATION_ERROR"),
    (ErrorKind.AUTHENTICATION, 401, "AUTHENTICATION_ERROR"),
    (ErrorKind.AUTHORIZATION, 403, "AUTHORIZATION_ERROR"),
    (ErrorKind.NOT_FOUND, 404, "NOT_FOUND_ERROR"),
    (ErrorKind.CONFLICT, 409, "CONFLICT_ERROR"),
    (ErrorKind.RATE_LIMIT, 429, "RATE_LIMIT_ERROR"),
    (ErrorKind.INTERNAL, 500, "INTERNAL_ERROR"),
]


class TestErrorKind:
    """Each kind fixes its status code and wire code."""

    @pytest.mark.parametrize("kind,status,code", EXPECTED)
    def test_status_and_code(self, kind, status, code):
        assert kind.status_code == status
        assert kind.code == code

    @pytest.mark.parametrize("kind,status,code", EXPECTED)
    def test_classified_back_from_code_and_status(self, kind, status, code):
        assert ErrorKind.from_code(code) is kind
        assert ErrorKind.from_status(status) is kind

    def test_unknown_code_is_internal(self):
        assert ErrorKind.from_code("TEAPOT") is ErrorKind.INTERNAL
        assert ErrorKind.from_code(None) is ErrorKind.INTERNAL

    def test_unknown_status_is_internal(self):
        assert ErrorKind.from_status(418) is ErrorKind.INTERNAL
        assert ErrorKind.from_status(502) is ErrorKind.INTERNAL

    def test_explicit_status_overrides_kind(self):
        error = AppError(ErrorKind.INTERNAL, status_code=405)
        assert error.status_code == 405
        assert error.code == "INTERNAL_ERROR"
        assert AppError(ErrorKind.INTERNAL).status_code == 500

    def test_framework_422_is_validation(self):
        assert ErrorKind.from_status(422) is ErrorKind.VALIDATION


class TestAppError:
    """Factories and the error envelope."""

    def test_default_message(self):
        error = AppError(ErrorKind.CONFLICT)
        assert error.message == "Resource already exists"
        assert str(error) == error.message

    def test_not_found_message_names_resource(self):
        error = not_found_error("Classroom", "c1")
        assert error.message == "Classroom not found with id: c1"
        assert error.status_code == 404

    def test_only_validation_keeps_details(self):
        details = [{"field": "name", "message": "required"}]
        assert validation_error("bad", details).to_envelope()["details"] == details
        assert "details" not in AppError(ErrorKind.CONFLICT, "dup", details).to_envelope()

    def test_envelope_shape(self):
        assert conflict_error("Already a member").to_envelope() == {
            "success": False,
            "error": "Already a member",
            "code": "CONFLICT_ERROR",
        }

    @pytest.mark.parametrize("factory,kind", [
        (authentication_error, ErrorKind.AUTHENTICATION),
        (authorization_error, ErrorKind.AUTHORIZATION),
        (rate_limit_error, ErrorKind.RATE_LIMIT),
        (internal_error, ErrorKind.INTERNAL),
    ])
    def test_factories(self, factory, kind):
        assert factory().kind is kind


class TestErrorBoundary:
    """Every raised kind reaches the wire with its status and code."""

    @pytest.mark.parametrize("kind,status,code", EXPECTED)
    async def test_raised_kind_maps_to_response(self, app, kind, status, code):
        async def fail():
            raise AppError(kind)

        app.add_api_route(f"/_fail/{code}", fail)
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            response = await client.get(f"/_fail/{code}")

        assert response.status_code == status
        body = response.json()
        assert body["success"] is False
        assert body["code"] == code
        assert body["error"] == kind.default_message

    async def test_unexpected_exception_does_not_leak(self, app):
        async def explode():
            raise RuntimeError("connection string with secrets")

        app.add_api_route("/_explode", explode)
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/_explode")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Internal server error",
            "code": "INTERNAL_ERROR",
        }

    async def test_unknown_route_is_not_found(self, http):
        response = await http.get("/api/nothing-here")
        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND_ERROR"

    async def test_unclassified_framework_status_is_kept(self, http):
        response = await http.delete("/api/classrooms")
        assert response.status_code == 405
        body = response.json()
        assert body["code"] == "INTERNAL_ERROR"
        assert body["error"] == "Method Not Allowed"

    async def test_body_validation_reports_fields(self, http, alice):
        response = await http.post("/api/classrooms", json={"category": "Programming"}, headers={"X-User-Id": alice})
        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        assert [detail["field"] for detail in body["details"]] == ["name"]
