from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseRequestDto(BaseModel):
    """
    Base class for API request bodies.

    Unknown fields are rejected, so a request DTO is the complete allow-list of
    what a caller may write.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
        validate_assignment=True,
    )

    def to_db_dict(self) -> dict:
        """Return only the fields the caller actually sent, keyed by column name."""
        return self.model_dump(
            mode="json",
            by_alias=False,
            exclude_unset=True,
        )
