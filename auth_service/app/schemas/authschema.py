from pydantic import BaseModel
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class UserAuthRequest(EmptyStringModel):
    username: str
    password: str


class UserResponse(BaseModel):
    username: str
    role: str


class AuthenticationResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserResponse
