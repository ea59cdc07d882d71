"""Response schemas for the Recoup HTTP APIs."""
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LaunchResponseSchema(_ApiModel):
    run_id: str | None = Field(default=None, alias="runId")
    dataset_id: str | None = Field(default=None, alias="datasetId")
    error: str | None = None


class RunStatusSchema(_ApiModel):
    status: str | None = None
    dataset_id: str | None = Field(default=None, alias="datasetId")
    data: list[Any] | None = None


class SocialSchema(_ApiModel):
    social_id: str
    username: str = ""
    profile_url: str
    platform: str | None = None


class ArtistSocialsResponseSchema(_ApiModel):
    status: Literal["success"]
    socials: list[SocialSchema]


class ProArtistsResponseSchema(_ApiModel):
    status: Literal["success"]
    artists: list[str]


class JobSchema(_ApiModel):
    id: str
    title: str
    prompt: str
    schedule: str
    account_id: str
    artist_account_id: str
    enabled: bool | None = None


class JobsResponseSchema(_ApiModel):
    status: Literal["success"]
    jobs: list[JobSchema]


class ChatTextPartSchema(_ApiModel):
    type: str
    text: str | None = None


class ChatResponseSchema(_ApiModel):
    text: list[ChatTextPartSchema] = Field(default_factory=list)
    reasoning_text: str | None = Field(default=None, alias="reasoningText")
    finish_reason: str | None = Field(default=None, alias="finishReason")
    usage: dict[str, Any] | None = None

    def combined_text(self) -> str:
        return "\n\n".join(p.text for p in self.text if p.type == "text" and isinstance(p.text, str))
