from fastapi import FastAPI
from mentorlink.common.fast_api_error_handler import register_exception_handlers
from mentorlink.utils.auth_middleware import AuthMiddleware


class FastAppFactory:
    """
    Factory class for creating and configuring the FastAPI application.
    """

    def __init__(
        self,
        authentication_service,
        mentorship_controller,
        profile_controller,
    ):
        """
        Initialize the factory.

        Args:
            authentication_service: AuthenticationService instance used by middleware to validate requests.
            mentorship_controller: MentorshipController exposing matching and mentorship lifecycle routes.
            profile_controller: ProfileController exposing mentor and mentee profile routes.
        """
        self.authentication_service = authentication_service
        self.mentorship_controller = mentorship_controller
        self.profile_controller = profile_controller

    def create_app(self, is_prod: bool = False) -> FastAPI:
        """
        Create and configure a FastAPI application instance.

        This method performs the following setup steps:
            1. Initializes the FastAPI application. In production mode the Swagger
               UI, ReDoc and OpenAPI schema endpoints are disabled.
            2. Registers global exception handlers.
            3. Adds authentication middleware using AuthMiddleware.
            4. Registers the controller routes under the '/api' prefix.
            5. Adds a health check endpoint at '/fastapi/health'.

        Args:
            is_prod (bool): Whether the application is running in production mode.

        Returns:
            FastAPI: A fully configured FastAPI application instance.
        """
        app = FastAPI(
            title="MentorLink",
            docs_url=None if is_prod else "/docs",
            redoc_url=None if is_prod else "/redoc",
            openapi_url=None if is_prod else "/openapi.json",
        )

        register_exception_handlers(app)

        app.add_middleware(AuthMiddleware, auth_service=self.authentication_service)

        app.include_router(self.mentorship_controller.router, prefix="/api")
        app.include_router(self.profile_controller.router, prefix="/api")

        @app.get("/fastapi/health")
        def health_check():
            """Report that the application is running."""
            return {"status": "ok"}

        return app
