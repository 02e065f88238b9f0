"""User Schemas — signup and account update payloads.

Invariants:
    - Passwords >= 6 chars; emails validated and normalized
    - CPF stored as 11 digits (punctuation stripped); blank means "no CPF"
    - tipo defaults to PARTICIPANTE; elevating it is an authorization question
      (core/user_rules.py), not a validation one
"""

from pydantic import BaseModel, Field, field_validator

from votecerto.core.domain_types import UserRole
from votecerto.schemas.validators import (
    check_password, normalize_cpf_field, normalize_email, optional_text,
)


class UserCreate(BaseModel):
    """Signup (public) or admin-driven account creation."""
    email: str
    password: str
    tipo: UserRole = UserRole.PARTICIPANTE
    nome: str | None = Field(None, max_length=255)
    cpf: str | None = None

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str) -> str:
        return normalize_email(v)

    @field_validator("password")
    @classmethod
    def valid_password(cls, v: str) -> str:
        return check_password(v)

    @field_validator("nome")
    @classmethod
    def strip_nome(cls, v: str | None) -> str | None:
        return optional_text(v)

    @field_validator("cpf")
    @classmethod
    def valid_cpf(cls, v: str | None) -> str | None:
        return normalize_cpf_field(v)


class UserUpdate(BaseModel):
    """Partial update — only fields present in the body are applied."""
    email: str | None = None
    password: str | None = None
    tipo: UserRole | None = None
    nome: str | None = Field(None, max_length=255)
    cpf: str | None = None
    senha_atual: str | None = None

    @field_validator("email")
    @classmethod
    def valid_email(cls, v: str | None) -> str | None:
        return normalize_email(v) if v is not None else None

    @field_validator("password")
    @classmethod
    def valid_password(cls, v: str | None) -> str | None:
        return check_password(v) if v is not None else None

    @field_validator("nome")
    @classmethod
    def strip_nome(cls, v: str | None) -> str | None:
        return optional_text(v)

    @field_validator("cpf")
    @classmethod
    def valid_cpf(cls, v: str | None) -> str | None:
        return normalize_cpf_field(v)
