"""Wire models for the LINE Messaging API."""

from pydantic import BaseModel, ConfigDict, Field


class LineProfileResponse(BaseModel):
    """Body of GET /v2/bot/profile/{userId}."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    user_id: str = Field(alias="userId")
    display_name: str = Field(alias="displayName")
    picture_url: str | None = Field(default=None, alias="pictureUrl")
    status_message: str | None = Field(default=None, alias="statusMessage")
    language: str | None = None
