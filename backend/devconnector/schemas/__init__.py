from devconnector.schemas.profile import (
    CreateOrUpdateFields,
    ProfileRequest,
    ExperienceInput,
    EducationInput,
    ProfileResponse,
)
from devconnector.schemas.user import UserRegister, UserResponse
from devconnector.schemas.auth import LoginRequest, TokenResponse
from devconnector.schemas.post import PostCreate, PostResponse

__all__ = [
    "CreateOrUpdateFields",
    "ProfileRequest",
    "ExperienceInput",
    "EducationInput",
    "ProfileResponse",
    "UserRegister",
    "UserResponse",
    "LoginRequest",
    "TokenResponse",
    "PostCreate",
    "PostResponse",
]
