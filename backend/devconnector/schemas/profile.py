from pydantic import BaseModel, Field
from datetime import datetime
from typing import Annotated, Optional
from devconnector.schemas.validators import required


class CreateOrUpdateFields(BaseModel):
    """
    Scalar profile fields to merge.

    Only fields that were explicitly set (and are not None) are written;
    everything else keeps its stored value.
    """

    university: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None

    def supplied(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ProfileRequest(CreateOrUpdateFields):
    """
    Body of POST /api/profiles.

    status and skills must be present but are not stored.
    """

    status: Annotated[Optional[str], Field(validate_default=True), required("Status is required")] = None
    skills: Annotated[Optional[str], Field(validate_default=True), required("Skills is required")] = None

    def to_fields(self) -> CreateOrUpdateFields:
        return CreateOrUpdateFields(
            **self.model_dump(include={"university", "location", "bio"}, exclude_unset=True)
        )


class ExperienceInput(BaseModel):
    title: Annotated[Optional[str], Field(validate_default=True), required("Title is required")] = None
    university: Annotated[Optional[str], Field(validate_default=True), required("university is required")] = None
    location: Optional[str] = None
    from_: Annotated[
        Optional[str], Field(alias="from", validate_default=True), required("From date is required")
    ] = None
    to: Optional[str] = None
    current: bool = False
    description: Optional[str] = None

    class Config:
        populate_by_name = True


class EducationInput(BaseModel):
    school: Annotated[Optional[str], Field(validate_default=True), required("School is required")] = None
    degree: Annotated[Optional[str], Field(validate_default=True), required("Degree is required")] = None
    fieldofstudy: Annotated[
        Optional[str], Field(validate_default=True), required("Field of study is required")
    ] = None
    from_: Annotated[
        Optional[str], Field(alias="from", validate_default=True), required("From date is required")
    ] = None
    to: Optional[str] = None
    current: bool = False
    description: Optional[str] = None

    class Config:
        populate_by_name = True


class ProfileUser(BaseModel):
    id: str
    name: str
    avatar: Optional[str] = None

    class Config:
        from_attributes = True


class ExperienceResponse(BaseModel):
    id: str
    title: str
    university: str
    location: Optional[str] = None
    from_: str = Field(alias="from")
    to: Optional[str] = None
    current: bool = False
    description: Optional[str] = None

    class Config:
        populate_by_name = True


class EducationResponse(BaseModel):
    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_: str = Field(alias="from")
    to: Optional[str] = None
    current: bool = False
    description: Optional[str] = None

    class Config:
        populate_by_name = True


class ProfileResponse(BaseModel):
    id: str
    user: ProfileUser
    university: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    date: Optional[datetime] = None

    class Config:
        from_attributes = True
