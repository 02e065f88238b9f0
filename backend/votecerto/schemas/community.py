"""Community Schemas — create, update and join-by-code payloads."""

from pydantic import BaseModel, Field, field_validator

from votecerto.core.invite_codes import MIN_CODE_LENGTH, normalize_invite_code
from votecerto.schemas.validators import optional_text, require_text


class CommunityCreate(BaseModel):
    nome: str = Field(max_length=100)
    descricao: str | None = None

    @field_validator("nome")
    @classmethod
    def strip_nome(cls, v: str) -> str:
        return require_text(v, "Nome da comunidade é obrigatório")

    @field_validator("descricao")
    @classmethod
    def strip_descricao(cls, v: str | None) -> str | None:
        return optional_text(v)


class CommunityUpdate(BaseModel):
    nome: str | None = Field(None, max_length=100)
    descricao: str | None = None

    @field_validator("nome")
    @classmethod
    def strip_nome(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return require_text(v, "Nome da comunidade é obrigatório")

    @field_validator("descricao")
    @classmethod
    def strip_descricao(cls, v: str | None) -> str | None:
        return optional_text(v)


class CommunityJoin(BaseModel):
    """Join by invite code — normalized (strip + upper) before lookup."""
    codigo: str

    @field_validator("codigo")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        v = normalize_invite_code(v)
        if len(v) < MIN_CODE_LENGTH:
            raise ValueError(
                f"Código deve ter pelo menos {MIN_CODE_LENGTH} caracteres",
            )
        return v
