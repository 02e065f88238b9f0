"""Voting Session Schemas — create/update payloads with time-window validation.

Invariants:
    - data_fim >= data_inicio whenever both are present in the same payload
    - Timestamps accepted as ISO-8601; naive values are read as UTC downstream
    - comunidade_id absent/null means a global session

Design Decisions:
    - Partial updates re-check the window in the service against the stored values,
      since the body may carry only one of the two bounds
"""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

from votecerto.core.session_lifecycle import as_utc
from votecerto.schemas.validators import optional_text, require_text

_WINDOW_MESSAGE = "Data de fim deve ser posterior à data de início"


class SessionCreate(BaseModel):
    titulo: str = Field(max_length=255)
    descricao: str | None = None
    comunidade_id: int | None = Field(None, gt=0)
    data_inicio: datetime
    data_fim: datetime
    ativa: bool = True

    @field_validator("titulo")
    @classmethod
    def strip_titulo(cls, v: str) -> str:
        return require_text(v, "Título é obrigatório")

    @field_validator("descricao")
    @classmethod
    def strip_descricao(cls, v: str | None) -> str | None:
        return optional_text(v)

    @model_validator(mode="after")
    def check_window(self) -> "SessionCreate":
        if as_utc(self.data_fim) < as_utc(self.data_inicio):
            raise ValueError(_WINDOW_MESSAGE)
        return self


class SessionUpdate(BaseModel):
    titulo: str | None = Field(None, max_length=255)
    descricao: str | None = None
    data_inicio: datetime | None = None
    data_fim: datetime | None = None
    ativa: bool | None = None

    @field_validator("titulo")
    @classmethod
    def strip_titulo(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return require_text(v, "Título é obrigatório")

    @field_validator("descricao")
    @classmethod
    def strip_descricao(cls, v: str | None) -> str | None:
        return optional_text(v)

    @model_validator(mode="after")
    def check_window(self) -> "SessionUpdate":
        if self.data_inicio is not None and self.data_fim is not None:
            if as_utc(self.data_fim) < as_utc(self.data_inicio):
                raise ValueError(_WINDOW_MESSAGE)
        return self
