from fastapi import APIRouter, Depends
from shared.core import auth
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from ..schemas import authschema
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Inventory Auth"])


@router.post("/login", response_model=authschema.AuthenticationResponse)
def login(req: authschema.UserAuthRequest):
    return authservices.login(req)


@router.get("/me", response_model=authschema.UserResponse)
def me(current_user: UserToken = Depends(auth.validate_current_token)):
    return authservices.current_user(current_user)


@router.post("/logout")
def logout(current_user: UserToken = Depends(auth.validate_current_token)):
    # Tokens are stateless; the client discards it
    return success_response(data=None, message="Logout successful")
