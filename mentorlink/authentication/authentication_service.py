import jwt
from typing import Any
from starlette.datastructures import Headers
from mentorlink.common.environment_constants import (
    JWT_ALGORITHM,
    JWT_AUDIENCE,
    JWT_SECRET,
)
from mentorlink.dto.user_context_dto import UserContextDto
from mentorlink.common.user_role import UserRole


class AuthenticationService:
    """
    Service responsible for authenticating HTTP requests carrying a bearer JWT.

    Tokens are signed with a shared secret. The subject is read from `sub`, falling
    back to the `userId` or `id` claims issued by older clients.
    """

    def __init__(
        self,
        logger,
        secret: str | None = JWT_SECRET,
        algorithm: str = JWT_ALGORITHM,
        audience: str | None = JWT_AUDIENCE,
    ):
        """
        Initialize the AuthenticationService.

        Args:
            logger: A logger instance.
            secret (str | None): Shared signing secret.
            algorithm (str): Expected signing algorithm, e.g. "HS256".
            audience (str | None): Expected `aud` claim; not checked when None.
        """
        self.logger = logger
        self.secret = secret
        self.algorithm = algorithm
        self.audience = audience

    def authenticate_request(self, headers: Headers) -> UserContextDto:
        """
        Authenticate an incoming request from its Authorization header.

        Args:
            headers (Headers): The request headers containing authentication information.

        Returns:
            UserContextDto: Contains the user's sub, primary_email, and roles.

        Raises:
            ValueError: If the header is missing or the token is invalid.
        """
        auth_header = headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            raise ValueError("Missing authentication credentials")

        token = auth_header.split(" ", 1)[1].strip()
        return self._build_context(self._verify_token(token))

    def _verify_token(self, token: str) -> dict[str, Any]:
        if not self.secret:
            raise RuntimeError("JWT_SECRET must be set")

        try:
            return jwt.decode(
                token,
                key=self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options={"verify_aud": self.audience is not None},
            )
        except jwt.PyJWTError as e:
            self.logger.warning("[AuthenticationService] rejected token: %s", e)
            raise ValueError(f"Token Invalid: {str(e)}")

    def _build_context(self, payload: dict[str, Any]) -> UserContextDto:
        """
        Build the UserContextDto from a decoded token payload.

        Every authenticated user may take part in mentorships, so each context
        carries the `mentorship` role regardless of the token's `roles` claim.
        """
        sub = payload.get("sub") or payload.get("userId") or payload.get("id")
        if not sub:
            raise ValueError("Token Invalid: missing subject")

        return UserContextDto(
            sub=str(sub),
            primary_email=payload.get("email", ""),
            roles=[UserRole.MENTORSHIP],
        )
