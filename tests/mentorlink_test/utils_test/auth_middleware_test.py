import unittest
from unittest.mock import MagicMock
from http import HTTPStatus
from starlette.applications import Starlette
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from mentorlink.utils.auth_middleware import AuthMiddleware


class TestAuthMiddleware(unittest.TestCase):
    def setUp(self):
        self.mock_auth_service = MagicMock()

        async def protected_endpoint(request):
            return JSONResponse({"user": request.state.user})

        async def health_check(request):
            return PlainTextResponse("OK")

        self.app = Starlette(
            routes=[
                Route("/protected", protected_endpoint),
                Route("/fastapi/health", health_check),
            ]
        )
        self.app.add_middleware(AuthMiddleware, auth_service=self.mock_auth_service)
        self.client = TestClient(self.app)

    def test_authentication_success(self):
        """The user context is stored on request.state.user and the request continues."""
        expected_user_context = {"sub": "user_123", "roles": ["mentorship"]}
        self.mock_auth_service.authenticate_request.return_value = expected_user_context

        response = self.client.get(
            "/protected", headers={"Authorization": "Bearer valid_token"}
        )

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.json(), {"user": expected_user_context})
        self.mock_auth_service.authenticate_request.assert_called_once()

    def test_authentication_value_error_returns_401(self):
        self.mock_auth_service.authenticate_request.side_effect = ValueError(
            "Missing authentication credentials"
        )

        response = self.client.get("/protected")

        self.assertEqual(response.status_code, HTTPStatus.UNAUTHORIZED)
        self.assertEqual(
            response.json()["message"], "Missing authentication credentials"
        )
        self.assertFalse(response.json()["success"])

    def test_authentication_unexpected_error_returns_403(self):
        self.mock_auth_service.authenticate_request.side_effect = RuntimeError(
            "JWT_SECRET must be set"
        )

        response = self.client.get(
            "/protected", headers={"Authorization": "Bearer valid_token"}
        )

        self.assertEqual(response.status_code, HTTPStatus.FORBIDDEN)
        self.assertEqual(response.json()["message"], "Authentication failed")

    def test_public_path_skips_authentication(self):
        response = self.client.get("/fastapi/health")

        self.assertEqual(response.status_code, HTTPStatus.OK)
        self.assertEqual(response.text, "OK")
        self.mock_auth_service.authenticate_request.assert_not_called()


if __name__ == "__main__":
    unittest.main()
