from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

# bcrypt only hashes the first 72 bytes and newer releases refuse longer input
PASSWORD_MAX_BYTES = 72


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=PASSWORD_MAX_BYTES)
    display_name: Optional[str] = Field(default=None, max_length=100)

    @field_validator("password")
    @classmethod
    def _fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class ProvidersResponse(BaseModel):
    providers: list[str]
