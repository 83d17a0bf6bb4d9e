from fastapi import APIRouter, Depends, HTTPException, status
from devconnector.api.deps import get_account_service
from devconnector.auth import create_access_token
from devconnector.schemas import TokenResponse, UserRegister
from devconnector.services import AccountService
from devconnector.services.errors import UserExistsError

router = APIRouter()


@router.post("", response_model=TokenResponse)
async def register(
    data: UserRegister,
    accounts: AccountService = Depends(get_account_service),
):
    try:
        user = await accounts.register(data)
    except UserExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"errors": [{"msg": e.message}]},
        )

    return TokenResponse(token=create_access_token(user.id))
