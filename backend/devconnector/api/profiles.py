from typing import Any, List
from fastapi import APIRouter, Depends, HTTPException, status
from devconnector.api.deps import get_github_client, get_profile_store
from devconnector.auth import get_current_user_id
from devconnector.schemas import (
    EducationInput,
    ExperienceInput,
    ProfileRequest,
    ProfileResponse,
)
from devconnector.services import GitHubClient, ProfileStore
from devconnector.services.errors import ProfileNotFoundError
from devconnector.services.github import GitHubLookupError

router = APIRouter()


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_id: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    try:
        profile = await store.get_by_user(user_id)
    except ProfileNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="There is no profile for this user",
        )
    return ProfileResponse.model_validate(profile)


@router.post("", response_model=ProfileResponse)
async def create_or_update_profile(
    request: ProfileRequest,
    user_id: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    profile = await store.create_or_update(user_id, request.to_fields())
    return ProfileResponse.model_validate(profile)


@router.get("", response_model=List[ProfileResponse])
async def list_profiles(store: ProfileStore = Depends(get_profile_store)):
    profiles = await store.list_all()
    return [ProfileResponse.model_validate(profile) for profile in profiles]


@router.get("/user/{user_id}", response_model=ProfileResponse)
async def get_profile_by_user(
    user_id: str,
    store: ProfileStore = Depends(get_profile_store),
):
    try:
        profile = await store.get_by_user(user_id)
    except ProfileNotFoundError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Profile not found")
    return ProfileResponse.model_validate(profile)


@router.delete("")
async def delete_account(
    user_id: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    await store.delete_account(user_id)
    return {"msg": "User deleted"}


@router.put("/experience", response_model=ProfileResponse)
async def add_experience(
    experience: ExperienceInput,
    user_id: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    profile = await store.add_experience(user_id, experience)
    return ProfileResponse.model_validate(profile)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
async def remove_experience(
    exp_id: str,
    user_id: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    profile = await store.remove_experience(user_id, exp_id)
    return ProfileResponse.model_validate(profile)


@router.put("/education", response_model=ProfileResponse)
async def add_education(
    education: EducationInput,
    user_id: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    profile = await store.add_education(user_id, education)
    return ProfileResponse.model_validate(profile)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
async def remove_education(
    edu_id: str,
    user_id: str = Depends(get_current_user_id),
    store: ProfileStore = Depends(get_profile_store),
):
    profile = await store.remove_education(user_id, edu_id)
    return ProfileResponse.model_validate(profile)


@router.get("/github/{username}")
async def get_github_repos(
    username: str,
    github: GitHubClient = Depends(get_github_client),
) -> Any:
    try:
        return await github.list_repos(username)
    except GitHubLookupError:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Github lookup failed")
