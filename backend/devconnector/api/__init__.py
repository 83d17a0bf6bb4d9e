from fastapi import APIRouter
from devconnector.api import auth, posts, profiles, users

api_router = APIRouter(prefix="/api")
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(profiles.router, prefix="/profiles", tags=["profiles"])
api_router.include_router(posts.router, prefix="/posts", tags=["posts"])
