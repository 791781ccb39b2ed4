from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

from ..core.time_utils import isoformat_utc


class APIModel(BaseModel):
    """camelCase on the wire, snake_case in Python; readable from ORM rows."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Stored timestamps are naive UTC; on the wire they carry a "Z"
UTCDateTime = Annotated[datetime, PlainSerializer(isoformat_utc, return_type=str, when_used="json")]
