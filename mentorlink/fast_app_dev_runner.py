"""
Development ASGI entry point.

1. Builds application dependencies via AppDependencyBuilder.
2. Replaces token verification with a fixed development user.
3. Runs the application using Uvicorn.
"""

import uvicorn
from mentorlink.utils.app_dependency_builder import AppDependencyBuilder
from starlette.datastructures import Headers
from mentorlink.authentication.authentication_service import AuthenticationService
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.common.user_role import UserRole


class DevAuthenticationService(AuthenticationService):
    """
    Authentication service used exclusively in development mode.

    Skips token validation and always returns the same dev user. Never use it
    in production.
    """

    def authenticate_request(self, headers: Headers) -> UserContextDto:
        return UserContextDto(
            sub="dev_superuser",
            primary_email="dev@dev.local",
            roles=[UserRole.MENTORSHIP],
        )


builder = AppDependencyBuilder()

builder.fast_app_factory.authentication_service = DevAuthenticationService(
    logger=builder.logger
)

app = builder.fast_app_factory.create_app()

if __name__ == "__main__":
    uvicorn.run(
        "mentorlink.fast_app_dev_runner:app", host="0.0.0.0", port=5001, reload=True
    )
