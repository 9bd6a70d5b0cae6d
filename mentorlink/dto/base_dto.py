from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseDto(BaseModel):
    """
    Base class for response DTOs.

    Field names are snake_case in Python and camelCase on the wire, and DTOs can
    be validated straight from ORM entities or plain objects.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
