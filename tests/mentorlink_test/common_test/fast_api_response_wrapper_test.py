from unittest import TestCase, main
from datetime import datetime, timezone
from http import HTTPStatus
from starlette.applications import Starlette
from starlette.routing import Route
from starlette.testclient import TestClient

from mentorlink.common.fast_api_response_wrapper import api_response
from mentorlink.common.mentorship_enums import MentorshipStatus
from mentorlink.dto.mentorship_stats_dto import ParticipationStatsDto


def route_success(request):
    return api_response("OK", True, {"a": 1}, HTTPStatus.OK)


def route_empty(request):
    return api_response("Empty", True)


def route_error(request):
    return api_response("Fail", False, status_code=HTTPStatus.BAD_REQUEST)


def route_dto(request):
    return api_response(
        "DTO",
        data={
            "stats": ParticipationStatsDto(total=1, meeting_hours=0.5),
            "status": MentorshipStatus.ACTIVE,
            "at": datetime(2025, 1, 1, tzinfo=timezone.utc),
        },
        status_code=HTTPStatus.CREATED,
    )


class TestApiResponseWrapper(TestCase):
    def setUp(self):
        self.app = Starlette(
            routes=[
                Route("/test_success", route_success),
                Route("/test_empty", route_empty),
                Route("/test_error", route_error),
                Route("/test_dto", route_dto),
            ]
        )
        self.client = TestClient(self.app)

    def test_success_with_data(self):
        res = self.client.get("/test_success")
        self.assertEqual(res.status_code, HTTPStatus.OK)
        payload = res.json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["data"], {"a": 1})
        self.assertEqual(payload["message"], "OK")

    def test_success_with_empty_data(self):
        payload = self.client.get("/test_empty").json()
        self.assertIsNone(payload["data"])
        self.assertEqual(payload["message"], "Empty")

    def test_error_response(self):
        res = self.client.get("/test_error")
        self.assertEqual(res.status_code, HTTPStatus.BAD_REQUEST)
        self.assertFalse(res.json()["success"])

    def test_dto_is_serialized_with_camel_case(self):
        res = self.client.get("/test_dto")
        data = res.json()["data"]

        self.assertEqual(res.status_code, HTTPStatus.CREATED)
        self.assertEqual(data["stats"]["meetingHours"], 0.5)
        self.assertEqual(data["status"], "active")
        self.assertTrue(data["at"].startswith("2025-01-01T00:00:00"))


if __name__ == "__main__":
    main()
