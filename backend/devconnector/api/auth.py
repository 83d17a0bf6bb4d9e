from fastapi import APIRouter, Depends, HTTPException, status
from devconnector.api.deps import get_account_service
from devconnector.auth import create_access_token, get_current_user_id
from devconnector.schemas import LoginRequest, TokenResponse, UserResponse
from devconnector.services import AccountService
from devconnector.services.accounts import InvalidCredentialsError

router = APIRouter()


@router.get("", response_model=UserResponse)
async def current_user(
    user_id: str = Depends(get_current_user_id),
    accounts: AccountService = Depends(get_account_service),
):
    user = await accounts.get_user(user_id)
    return UserResponse.model_validate(user)


@router.post("", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    accounts: AccountService = Depends(get_account_service),
):
    try:
        user = await accounts.authenticate(str(request.email), request.password)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"errors": [{"msg": "Invalid Credentials"}]},
        )

    return TokenResponse(token=create_access_token(user.id))
