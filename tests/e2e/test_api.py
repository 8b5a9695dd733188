"""
End-to-end tests through the HTTP API.
"""

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from src.core.models import PROBLEM_TITLE, PROBLEM_TYPE

pytestmark = pytest.mark.e2e


class TestUserEndpoint:
    """POST /api/test-user"""

    def test_valid_user_is_echoed(self, client, valid_user):
        response = client.post("/api/test-user", json=valid_user)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == valid_user

    def test_invalid_name(self, client):
        response = client.post("/api/test-user", json={"name": "ArthurDent_42", "age": 42})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert list(body["errors"]) == ["Name"]
        assert len(body["errors"]["Name"]) == 1
        message = body["errors"]["Name"][0]
        assert "^[a-zA-Z]*$" in message
        assert "ArthurDent_42" in message

    def test_underage(self, client):
        response = client.post("/api/test-user", json={"name": "Arthur", "age": 16})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert list(body["errors"]) == ["Age"]
        assert len(body["errors"]["Age"]) == 1
        message = body["errors"]["Age"][0]
        assert "18" in message
        assert "16" in message

    def test_failure_body_shape(self, client):
        response = client.post("/api/test-user", json={"name": "Arthur", "age": 16})

        body = response.json()
        assert set(body) == {"type", "title", "status", "traceId", "errors"}
        assert body["type"] == PROBLEM_TYPE
        assert body["title"] == PROBLEM_TITLE
        assert body["status"] == 400
        assert body["traceId"]

    def test_all_failures_in_one_response(self, client):
        response = client.post("/api/test-user", json={"name": "Ford Prefect", "age": 3})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert set(response.json()["errors"]) == {"Name", "Age"}

    def test_missing_fields_are_invalid(self, client):
        response = client.post("/api/test-user", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert set(response.json()["errors"]) == {"Name", "Age"}

    def test_wrong_type_is_a_binding_error(self, client):
        response = client.post("/api/test-user", json={"name": "Arthur", "age": "old"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"] == {"Age": ["The value 'old' is not valid for Age."]}

    @pytest.mark.parametrize("age, shown", [(18.0, "18.0"), (True, "True"), ("42", "42")])
    def test_age_must_be_a_json_integer(self, client, age, shown):
        response = client.post("/api/test-user", json={"name": "Arthur", "age": age})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"] == {"Age": [f"The value '{shown}' is not valid for Age."]}

    def test_malformed_json(self, client):
        response = client.post(
            "/api/test-user",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "$" in response.json()["errors"]

    def test_trace_id_header_is_used(self, client):
        response = client.post(
            "/api/test-user",
            json={"name": "Arthur", "age": 16},
            headers={"X-Request-ID": "trace-from-client"},
        )

        assert response.json()["traceId"] == "trace-from-client"
        assert response.headers["X-Request-ID"] == "trace-from-client"

    def test_generated_trace_id_is_echoed(self, client):
        response = client.post("/api/test-user", json={"name": "Arthur", "age": 16})

        assert response.headers["X-Request-ID"] == response.json()["traceId"]


class TestLettersOnlyEndpoint:
    """POST /api/test-letters-only"""

    def test_letters_are_echoed(self, client):
        response = client.post("/api/test-letters-only", params={"text": "Zaphod"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == "Zaphod"

    def test_empty_text_is_valid(self, client):
        response = client.post("/api/test-letters-only", params={"text": ""})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == ""

    @pytest.mark.parametrize("text", ["Zaphod Beeblebrox", "zaphod_2", "42"])
    def test_non_letters_rejected(self, client, text):
        response = client.post("/api/test-letters-only", params={"text": text})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert text in response.json()["errors"]["text"][0]

    def test_missing_text_rejected(self, client):
        response = client.post("/api/test-letters-only")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "text" in response.json()["errors"]


class TestLegalAgeEndpoint:
    """POST /api/test-of-legal-age"""

    def test_adult_is_echoed(self, client):
        response = client.post("/api/test-of-legal-age", params={"value": 18})

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == 18

    def test_minor_rejected(self, client):
        response = client.post("/api/test-of-legal-age", params={"value": 17})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        message = response.json()["errors"]["value"][0]
        assert "'17'" in message
        assert "'18'" in message

    def test_non_integer_rejected(self, client):
        response = client.post("/api/test-of-legal-age", params={"value": "eighteen"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"] == {
            "value": ["The value 'eighteen' is not valid for value."]
        }


class TestServiceEndpoints:
    """Health and metrics"""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["status"] == "healthy"
        assert data["schemas"] == ["LegalAgeQuery", "LettersOnlyQuery", "User"]

    def test_metrics_count_outcomes(self, client):
        client.post("/api/test-user", json={"name": "Arthur", "age": 16})

        response = client.get("/metrics")

        assert response.status_code == status.HTTP_200_OK
        assert "validation_requests_total" in response.text
        assert 'outcome="rejected"' in response.text
        assert 'field="Age"' in response.text

    def test_swagger_enabled_in_tests(self, client):
        response = client.get("/swagger/v1/swagger.json")

        assert response.status_code == status.HTTP_200_OK
        paths = response.json()["paths"]
        assert "/api/test-user" in paths

    def test_swagger_describes_request_inputs(self, client):
        paths = client.get("/swagger/v1/swagger.json").json()["paths"]

        user_body = paths["/api/test-user"]["post"]["requestBody"]
        schema = user_body["content"]["application/json"]["schema"]
        assert set(schema["properties"]) == {"name", "age"}

        letters = paths["/api/test-letters-only"]["post"]["parameters"]
        assert [(p["name"], p["in"]) for p in letters] == [("text", "query")]

        legal_age = paths["/api/test-of-legal-age"]["post"]["parameters"]
        assert [(p["name"], p["schema"]["type"]) for p in legal_age] == [("value", "integer")]


class TestErrorHandlers:
    """Framework validation errors and unhandled exceptions"""

    def test_declared_parameter_error_is_problem_details(self, app):
        async def count(number: int) -> int:
            return number

        app.add_api_route("/api/count", count, methods=["POST"])

        with TestClient(app) as client:
            response = client.post(
                "/api/count", params={"number": "abc"}, headers={"X-Request-ID": "trace-422"}
            )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.headers["content-type"] == "application/problem+json"
        body = response.json()
        assert body["title"] == PROBLEM_TITLE
        assert body["traceId"] == "trace-422"
        assert list(body["errors"]) == ["number"]

    def test_unhandled_error_keeps_trace_id(self, app):
        async def explode():
            raise RuntimeError("boom")

        app.add_api_route("/api/explode", explode, methods=["POST"])

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.post("/api/explode", headers={"X-Request-ID": "trace-500"})

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.headers["X-Request-ID"] == "trace-500"
        assert response.json()["error"] == "internal_error"
        assert "boom" not in response.text
