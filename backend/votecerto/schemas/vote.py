"""Vote Schemas — cast and edit payloads."""

from pydantic import BaseModel, Field, field_validator

from votecerto.schemas.validators import optional_text


class VoteCreate(BaseModel):
    sessao_id: int = Field(gt=0)
    projeto_id: int = Field(gt=0)
    comentario: str | None = Field(None, max_length=2000)

    @field_validator("comentario")
    @classmethod
    def strip_comentario(cls, v: str | None) -> str | None:
        return optional_text(v)


class VoteUpdate(BaseModel):
    """Change comment and/or project (same session). Omitted fields stay as they are."""
    projeto_id: int | None = Field(None, gt=0)
    comentario: str | None = Field(None, max_length=2000)

    @field_validator("comentario")
    @classmethod
    def strip_comentario(cls, v: str | None) -> str | None:
        return optional_text(v)
