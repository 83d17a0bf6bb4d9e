from pydantic import BaseModel, Field
from datetime import datetime
from typing import Annotated, Optional
from devconnector.schemas.validators import required


class PostCreate(BaseModel):
    text: Annotated[Optional[str], Field(validate_default=True), required("Text is required")] = None


class PostResponse(BaseModel):
    id: str
    user: str = Field(validation_alias="user_id")
    text: str
    name: Optional[str] = None
    avatar: Optional[str] = None
    date: Optional[datetime] = None

    class Config:
        from_attributes = True
