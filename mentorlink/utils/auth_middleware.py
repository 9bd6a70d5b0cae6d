from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from mentorlink.common.fast_api_response_wrapper import api_response
from http import HTTPStatus

# Reachable without a token.
PUBLIC_PATHS = frozenset({"/fastapi/health", "/docs", "/redoc", "/openapi.json"})


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware for authenticating incoming HTTP requests.

    Delegates bearer token verification to `AuthenticationService` and stores the
    resulting `UserContextDto` on `request.state.user` for the route decorators.

    Usage:
        app.add_middleware(AuthMiddleware, auth_service=auth_service)

    Exception Handling:
        - ValueError: Returns HTTP 401 UNAUTHORIZED with the error message.
        - Other exceptions: Returns HTTP 403 FORBIDDEN with "Authentication failed".
    """

    def __init__(self, app, auth_service):
        super().__init__(app)
        self.auth_service = auth_service

    async def dispatch(self, request: Request, call_next):
        if request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        try:
            user_context = self.auth_service.authenticate_request(request.headers)
            request.state.user = user_context

        except ValueError as e:
            return api_response(
                success=False,
                message=str(e),
                status_code=HTTPStatus.UNAUTHORIZED,
                data=None,
            )
        except Exception:
            return api_response(
                success=False,
                message="Authentication failed",
                status_code=HTTPStatus.FORBIDDEN,
                data=None,
            )

        return await call_next(request)
