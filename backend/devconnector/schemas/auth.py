from pydantic import BaseModel, EmailStr, Field
from typing import Annotated, Optional
from devconnector.schemas.validators import required


class LoginRequest(BaseModel):
    email: Annotated[Optional[EmailStr], Field(validate_default=True), required("Please include valid email")] = None
    password: Annotated[Optional[str], Field(validate_default=True), required("Password is required")] = None


class TokenResponse(BaseModel):
    token: str
