from http import HTTPStatus
from fastapi import APIRouter, Query

from mentorlink.common.api_endpoints import (
    ACTIVE_MENTORS_ENDPOINT,
    MENTOR_PROFILE_ENDPOINT,
    MY_MENTEE_PROFILE_ENDPOINT,
    MY_MENTOR_PROFILE_ENDPOINT,
)
from mentorlink.common.fast_api_response_wrapper import api_response
from mentorlink.common.mentorship_enums import FocusArea, MentorshipStyle
from mentorlink.dto.mentee_profile_dto import MenteeProfileDto
from mentorlink.dto.mentor_profile_dto import MentorListDto, MentorProfileDto
from mentorlink.dto.profile_request_dto import (
    MenteeProfileRequestDto,
    MentorProfileCreateDto,
    MentorProfileUpdateDto,
)
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.utils.permission_decorators import authenticate


class ProfileController:
    """
    FastAPI controller exposing mentor and mentee profile endpoints.

    Handles authentication, request parsing, and transaction boundaries,
    delegating all business logic to ProfileService.
    """

    def __init__(self, profile_service, database):
        """
        Initialize the ProfileController with its dependencies and register routes.

        Args:
            profile_service (ProfileService): Service handling profile business logic.
            database (Database): Database access object providing async session management.
        """
        self.router = APIRouter(tags=["profile"])
        self.profile_service = profile_service
        self.database = database

        # "/profiles/mentor/me" must be registered before "/profiles/mentor/{userId}".
        self.router.add_api_route(
            MY_MENTOR_PROFILE_ENDPOINT,
            endpoint=authenticate()(self.get_my_mentor_profile),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MY_MENTOR_PROFILE_ENDPOINT,
            endpoint=authenticate()(self.create_my_mentor_profile),
            methods=["PUT"],
            response_model=None,
        )
        self.router.add_api_route(
            MY_MENTOR_PROFILE_ENDPOINT,
            endpoint=authenticate()(self.update_my_mentor_profile),
            methods=["PATCH"],
            response_model=None,
        )
        self.router.add_api_route(
            ACTIVE_MENTORS_ENDPOINT,
            endpoint=authenticate()(self.list_active_mentors),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MENTOR_PROFILE_ENDPOINT,
            endpoint=authenticate()(self.get_mentor_profile),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MY_MENTEE_PROFILE_ENDPOINT,
            endpoint=authenticate()(self.get_my_mentee_profile),
            methods=["GET"],
            response_model=None,
        )
        self.router.add_api_route(
            MY_MENTEE_PROFILE_ENDPOINT,
            endpoint=authenticate()(self.upsert_my_mentee_profile),
            methods=["PUT"],
            response_model=None,
        )

    async def get_my_mentor_profile(self, current_user: UserContextDto):
        async with self.database.session() as session:
            profile: MentorProfileDto = (
                await self.profile_service.get_my_mentor_profile(session, current_user)
            )

        return api_response(
            message="Mentor profile retrieved successfully",
            data={"profile": profile},
        )

    async def create_my_mentor_profile(
        self, body: MentorProfileCreateDto, current_user: UserContextDto
    ):
        """
        Create the current user's mentor profile.

        Returns 409 if the user already has one; use PATCH to change it.
        """
        async with self.database.session() as session:
            profile: MentorProfileDto = (
                await self.profile_service.create_mentor_profile(
                    session=session, user_context=current_user, data=body
                )
            )

        return api_response(
            message="Mentor profile created successfully",
            data={"profile": profile},
            status_code=HTTPStatus.CREATED,
        )

    async def update_my_mentor_profile(
        self, body: MentorProfileUpdateDto, current_user: UserContextDto
    ):
        """
        Partially update the current user's mentor profile.

        Only fields present in the body are changed. Capacity counters,
        testimonials and ratings are not accepted here.
        """
        async with self.database.session() as session:
            profile: MentorProfileDto = (
                await self.profile_service.update_mentor_profile(
                    session=session, user_context=current_user, data=body
                )
            )

        return api_response(
            message="Mentor profile updated successfully",
            data={"profile": profile},
        )

    async def get_mentor_profile(self, userId: int):
        async with self.database.session() as session:
            profile: MentorProfileDto = await self.profile_service.get_mentor_profile(
                session=session, user_id=userId
            )

        return api_response(
            message="Mentor profile retrieved successfully",
            data={"profile": profile},
        )

    async def list_active_mentors(
        self,
        specialization: FocusArea | None = Query(None),
        industry: str | None = Query(None),
        mentorshipStyle: MentorshipStyle | None = Query(None),
        page: int = Query(1, ge=1),
        limit: int = Query(10, ge=1, le=100),
    ):
        """
        List active mentors, best rated first.

        Query Parameters:
            specialization (FocusArea | None): Focus area the mentor specializes in.
            industry (str | None): Mentor's primary or related industry.
            mentorshipStyle (MentorshipStyle | None): Mentorship style.
            page (int): 1-based page number.
            limit (int): Page size, at most 100.
        """
        async with self.database.session() as session:
            mentors: MentorListDto = await self.profile_service.list_active_mentors(
                session=session,
                specialization=specialization.value if specialization else None,
                industry=industry,
                mentorship_style=mentorshipStyle,
                page=page,
                limit=limit,
            )

        return api_response(
            message="Mentors retrieved successfully",
            data=mentors,
        )

    async def get_my_mentee_profile(self, current_user: UserContextDto):
        async with self.database.session() as session:
            profile: MenteeProfileDto = (
                await self.profile_service.get_my_mentee_profile(session, current_user)
            )

        return api_response(
            message="Mentee profile retrieved successfully",
            data={"profile": profile},
        )

    async def upsert_my_mentee_profile(
        self, body: MenteeProfileRequestDto, current_user: UserContextDto
    ):
        async with self.database.session() as session:
            profile: MenteeProfileDto = (
                await self.profile_service.upsert_mentee_profile(
                    session=session, user_context=current_user, data=body
                )
            )

        return api_response(
            message="Mentee profile saved successfully",
            data={"profile": profile},
        )
