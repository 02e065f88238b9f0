"""Auth Schemas — login payload."""

from pydantic import BaseModel, field_validator

from votecerto.schemas.validators import normalize_email, require_text


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def password_present(cls, v: str) -> str:
        require_text(v, "Senha é obrigatória")
        return v
