"""Request payloads for the HTTP API."""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ListFilter(BaseModel):
    since: Optional[datetime] = None
    variant: Optional[str] = None


class ListRequest(BaseModel):
    mode: Literal["list"]
    offset: Optional[int] = None
    limit: Optional[int] = None
    filter: Optional[ListFilter] = None


class UpdateItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    new_profile: Dict[str, Any] = Field(alias="newProfile")
    old_profile: Optional[Dict[str, Any]] = Field(default=None, alias="oldProfile")


class ApplyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mode: Literal["apply"]
    dry_run: bool = Field(default=False, alias="dryRun")
    operation_id: Optional[str] = Field(default=None, alias="operationId")
    items: List[UpdateItem] = Field(default_factory=list)


class ProfileRequest(BaseModel):
    responses: Any = None
    overrides: Optional[Dict[str, Any]] = None
