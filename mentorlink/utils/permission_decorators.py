import functools
import inspect
from http import HTTPStatus
from starlette.requests import Request
from mentorlink.common.fast_api_response_wrapper import api_response
from enum import Enum


class ApiParamName(str, Enum):
    REQUEST = "request"
    CURRENT_USER = "current_user"
    USER_SUB = "user_sub"


def authenticate(roles: list | None = None):
    """
    Authentication and authorization decorator for controller endpoints.

    The wrapped endpoint's signature is rewritten so FastAPI injects the Request,
    while `current_user`, `user_sub` and `request` are filled from
    `request.state.user` only when the endpoint declares them.

    Args:
        roles: Roles allowed to call the endpoint. When None, any authenticated
            user is accepted.

    Returns:
        The decorated async function. It answers 401 when no user context is
        present and 403 when none of `roles` is held.

    Example:
        self.router.add_api_route(
            MENTORSHIP_REQUESTS_ENDPOINT,
            endpoint=authenticate(roles=[UserRole.MENTORSHIP])(self.request_mentorship),
            methods=["POST"],
        )

        async def request_mentorship(self, body: MentorshipCreateDto, current_user: UserContextDto):
            ...
    """

    def decorator(func):
        sig = inspect.signature(func)
        original_params = sig.parameters

        api_params = [
            p
            for name, p in original_params.items()
            if name
            not in {
                ApiParamName.USER_SUB.value,
                ApiParamName.CURRENT_USER.value,
                ApiParamName.REQUEST.value,
            }
        ]

        # FastAPI only injects the Request when the signature asks for it.
        api_params.insert(
            0,
            inspect.Parameter(
                "request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Request
            ),
        )

        @functools.wraps(func)
        async def wrapper(request: Request, *args, **kwargs):
            user = getattr(request.state, "user", None)
            if not user:
                return api_response(
                    success=False,
                    message="Unauthorized: User context missing",
                    status_code=HTTPStatus.UNAUTHORIZED,
                )

            if roles is not None:
                user_roles = getattr(user, "roles", None) or []
                if not any(role in user_roles for role in roles):
                    return api_response(
                        success=False,
                        message="Forbidden: Insufficient permissions",
                        status_code=HTTPStatus.FORBIDDEN,
                    )

            business_kwargs = {
                k: v for k, v in kwargs.items() if k != ApiParamName.REQUEST.value
            }

            if ApiParamName.REQUEST.value in original_params:
                business_kwargs[ApiParamName.REQUEST.value] = request

            if ApiParamName.CURRENT_USER.value in original_params:
                business_kwargs[ApiParamName.CURRENT_USER.value] = user

            if ApiParamName.USER_SUB.value in original_params:
                business_kwargs[ApiParamName.USER_SUB.value] = getattr(
                    user, "sub", None
                )

            return await func(*args, **business_kwargs)

        wrapper.__signature__ = sig.replace(parameters=api_params)
        return wrapper

    return decorator
