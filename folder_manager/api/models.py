from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.folders import BranchFolder


class CreateFoldersRequest(BaseModel):
    """Client id to create the folder pair for."""

    model_config = ConfigDict(populate_by_name=True)

    client_id: Optional[str] = Field(None, alias="clientId")

    @field_validator("client_id", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Optional[str]:
        # Numbers and other JSON values reach the parser as text so they
        # get the same 400 as any other bad id.
        if value is None or isinstance(value, str):
            return value
        return str(value)


class FoldersResponse(BaseModel):
    """A client's folders, unrestricted first."""

    folders: list[BranchFolder]


class ErrorDetail(BaseModel):
    """Body of the `detail` field on every error response."""

    error_code: str
    error_message: str


class ErrorResponse(BaseModel):
    """Error envelope as FastAPI renders an HTTPException."""

    detail: ErrorDetail
