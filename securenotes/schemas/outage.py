"""Schemas for the outage toggle."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ToggleResponse(BaseModel):
    """isDown is true while reads are served from the fallback collection."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_down: bool = Field(..., description="Primary collection simulated as down")
