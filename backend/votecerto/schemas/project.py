"""Project Schemas — candidate options inside a session."""

from pydantic import BaseModel, Field, field_validator

from votecerto.schemas.validators import optional_text, require_text


class ProjectCreate(BaseModel):
    titulo: str = Field(max_length=255)
    descricao_detalhada: str | None = None
    autor_responsavel: str | None = Field(None, max_length=255)
    sessao_id: int = Field(gt=0)

    @field_validator("titulo")
    @classmethod
    def strip_titulo(cls, v: str) -> str:
        return require_text(v, "Título é obrigatório")

    @field_validator("descricao_detalhada", "autor_responsavel")
    @classmethod
    def strip_optional(cls, v: str | None) -> str | None:
        return optional_text(v)


class ProjectUpdate(BaseModel):
    titulo: str | None = Field(None, max_length=255)
    descricao_detalhada: str | None = None
    autor_responsavel: str | None = Field(None, max_length=255)

    @field_validator("titulo")
    @classmethod
    def strip_titulo(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return require_text(v, "Título é obrigatório")

    @field_validator("descricao_detalhada", "autor_responsavel")
    @classmethod
    def strip_optional(cls, v: str | None) -> str | None:
        return optional_text(v)
