from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


class Profile(BaseModel):
    """Candidate profile shown in the swipe stack"""

    id: StrictInt = Field(..., gt=0)
    name: StrictStr
    age: StrictInt = Field(..., ge=18, le=100)
    image: StrictStr = Field(..., min_length=1)
    bio: str | None = None
    images: list[str] | None = None
    location: str | None = None
    interests: list[str] | None = None

    model_config = ConfigDict(frozen=True)

    @field_validator("bio", "location", mode="before")
    @classmethod
    def drop_mistyped_text(cls, value):
        return value if isinstance(value, str) else None

    @field_validator("images", "interests", mode="before")
    @classmethod
    def drop_mistyped_list(cls, value):
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return value
        return None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("name must not be blank")
        return value


class ProfilesResponse(BaseModel):
    """Profile listing returned by the API"""

    data: list[Profile]
