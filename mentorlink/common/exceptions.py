from http import HTTPStatus


class MentorshipError(ValueError):
    """
    Base class for expected business-rule failures.

    These are caller or state errors rather than transient faults, so they are
    surfaced with their original message and a 4xx status and are never retried.
    """

    status_code: HTTPStatus = HTTPStatus.BAD_REQUEST


class NotFoundError(MentorshipError):
    """Referenced user, profile, mentorship, meeting or goal does not exist."""

    status_code = HTTPStatus.NOT_FOUND


class ForbiddenError(MentorshipError):
    """Caller is not allowed to act on the resource."""

    status_code = HTTPStatus.FORBIDDEN


class ConflictError(MentorshipError):
    """The resource already exists in a state that blocks the request."""

    status_code = HTTPStatus.CONFLICT


class InvalidOperationError(MentorshipError):
    """The request is malformed for the domain, e.g. self-mentorship."""

    status_code = HTTPStatus.BAD_REQUEST


class InvalidStateError(MentorshipError):
    """The transition is not allowed from the mentorship's current status."""

    status_code = HTTPStatus.BAD_REQUEST


class CapacityExceededError(MentorshipError):
    """The mentor has reached the maximum number of mentees."""

    status_code = HTTPStatus.CONFLICT
