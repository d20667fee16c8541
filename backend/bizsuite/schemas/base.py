from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base for every wire schema. Fields are snake_case in Python and camelCase
    on the wire (the upstream API and the frontend both speak camelCase).
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RecordModel(CamelModel):
    """Business records from the upstream API; unknown columns are kept, not rejected."""
    model_config = ConfigDict(extra="allow")
