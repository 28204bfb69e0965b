from typing import Literal

from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr
from pydantic.alias_generators import to_camel


class InteractionRequest(BaseModel):
    """Like or dislike submitted from the swipe stack"""

    from_user_id: StrictStr | StrictInt
    to_user_id: StrictInt
    action: Literal["like", "dislike"]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InteractionResponse(BaseModel):
    """Whether the like formed a mutual match"""

    match: bool
