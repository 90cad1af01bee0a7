from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# ----- Auth Schemas -----
class LoginRequest(BaseModel):
    # plain str: a malformed email is just another failed login
    email: str = Field(..., description="Admin email, matched exactly")
    password: str = Field(..., description="Admin password")


class AdminCreate(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


# ----- Response Schemas -----
class AdminSummary(BaseModel):
    id: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    session_id: str
    admin: AdminSummary

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SessionStatus(BaseModel):
    authenticated: bool


class Message(BaseModel):
    message: str
