from typing import List
from fastapi import APIRouter, Depends
from devconnector.api.deps import get_post_service
from devconnector.auth import get_current_user_id
from devconnector.schemas import PostCreate, PostResponse
from devconnector.services import PostService

router = APIRouter()


@router.post("", response_model=PostResponse)
async def create_post(
    data: PostCreate,
    user_id: str = Depends(get_current_user_id),
    posts: PostService = Depends(get_post_service),
):
    post = await posts.create(user_id, data.text)
    return PostResponse.model_validate(post)


@router.get("", response_model=List[PostResponse])
async def list_posts(
    _: str = Depends(get_current_user_id),
    posts: PostService = Depends(get_post_service),
):
    return [PostResponse.model_validate(post) for post in await posts.list_recent()]


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: str,
    _: str = Depends(get_current_user_id),
    posts: PostService = Depends(get_post_service),
):
    return PostResponse.model_validate(await posts.get(post_id))


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    user_id: str = Depends(get_current_user_id),
    posts: PostService = Depends(get_post_service),
):
    await posts.delete(user_id, post_id)
    return {"msg": "Post removed"}
