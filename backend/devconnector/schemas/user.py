from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Annotated, Optional
from devconnector.schemas.validators import required, min_length


class UserRegister(BaseModel):
    name: Annotated[Optional[str], Field(validate_default=True), required("Name is Required")] = None
    email: Annotated[Optional[EmailStr], Field(validate_default=True), required("Please include valid email")] = None
    password: Annotated[
        Optional[str],
        Field(validate_default=True),
        min_length(6, "Please enter a password with 6 or more characters"),
    ] = None


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    date: Optional[datetime] = None

    class Config:
        from_attributes = True
