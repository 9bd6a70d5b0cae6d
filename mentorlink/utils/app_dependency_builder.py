from mentorlink.common.database import Database
from mentorlink.common.logger import get_logger
from mentorlink.utils.date_time_util import DateTimeUtil
from mentorlink.utils.fast_app_factory import FastAppFactory
from mentorlink.authentication.authentication_service import AuthenticationService
from mentorlink.repository.users_repository import UsersRepository
from mentorlink.repository.mentor_profile_repository import MentorProfileRepository
from mentorlink.repository.mentee_profile_repository import MenteeProfileRepository
from mentorlink.repository.mentorship_repository import MentorshipRepository
from mentorlink.user_identity.user_identity_service import UserIdentityService
from mentorlink.profile.profile_mapper import ProfileMapper
from mentorlink.profile.profile_service import ProfileService
from mentorlink.profile.profile_controller import ProfileController
from mentorlink.mentorship.mentorship_mapper import MentorshipMapper
from mentorlink.mentorship.mentor_ranking_service import MentorRankingService
from mentorlink.mentorship.mentorship_workflow_service import (
    MentorshipWorkflowService,
)
from mentorlink.mentorship.mentorship_activity_service import (
    MentorshipActivityService,
)
from mentorlink.mentorship.mentorship_controller import MentorshipController


class AppDependencyBuilder:
    """
    Wires together the logger, database, repositories, services and controllers.

    Example:
        builder = AppDependencyBuilder()
        app = builder.fast_app_factory.create_app()
    """

    def __init__(self, database: Database | None = None):
        self.logger = get_logger()
        self.database = database or Database()
        self.date_time_util = DateTimeUtil(logger=self.logger)

        self.users_repository = UsersRepository()
        self.mentor_profile_repository = MentorProfileRepository()
        self.mentee_profile_repository = MenteeProfileRepository()
        self.mentorship_repository = MentorshipRepository()

        self.profile_mapper = ProfileMapper()
        self.mentorship_mapper = MentorshipMapper()

        self.user_identity_service = UserIdentityService(
            logger=self.logger, users_repository=self.users_repository
        )
        self.profile_service = ProfileService(
            logger=self.logger,
            mentor_profile_repository=self.mentor_profile_repository,
            mentee_profile_repository=self.mentee_profile_repository,
            user_identity_service=self.user_identity_service,
            profile_mapper=self.profile_mapper,
            date_time_util=self.date_time_util,
        )
        self.mentor_ranking_service = MentorRankingService(
            logger=self.logger,
            user_identity_service=self.user_identity_service,
            mentor_profile_repository=self.mentor_profile_repository,
            mentee_profile_repository=self.mentee_profile_repository,
            profile_mapper=self.profile_mapper,
        )
        self.mentorship_workflow_service = MentorshipWorkflowService(
            logger=self.logger,
            user_identity_service=self.user_identity_service,
            mentorship_repository=self.mentorship_repository,
            mentor_profile_repository=self.mentor_profile_repository,
            mentee_profile_repository=self.mentee_profile_repository,
            mentorship_mapper=self.mentorship_mapper,
            date_time_util=self.date_time_util,
        )
        self.mentorship_activity_service = MentorshipActivityService(
            logger=self.logger,
            user_identity_service=self.user_identity_service,
            mentorship_repository=self.mentorship_repository,
            mentor_profile_repository=self.mentor_profile_repository,
            profile_service=self.profile_service,
            mentorship_mapper=self.mentorship_mapper,
            date_time_util=self.date_time_util,
        )

        self.profile_controller = ProfileController(
            profile_service=self.profile_service, database=self.database
        )
        self.mentorship_controller = MentorshipController(
            mentor_ranking_service=self.mentor_ranking_service,
            mentorship_workflow_service=self.mentorship_workflow_service,
            mentorship_activity_service=self.mentorship_activity_service,
            database=self.database,
        )

        self.authentication_service = AuthenticationService(logger=self.logger)
        self.fast_app_factory = FastAppFactory(
            authentication_service=self.authentication_service,
            mentorship_controller=self.mentorship_controller,
            profile_controller=self.profile_controller,
        )
