"""Shared field validators — reusable transforms for request schemas.

Invariants:
    - Every helper raises ValueError with a pt-BR message (surfaced as a 400)
    - Helpers are side-effect free
"""

from email_validator import EmailNotValidError, validate_email

from votecerto.core.vote_report import normalize_cpf

MIN_PASSWORD_LENGTH = 6


def require_text(value: str, message: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


def optional_text(value: str | None) -> str | None:
    """Blank strings collapse to None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def normalize_email(value: str) -> str:
    try:
        result = validate_email(value.strip(), check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Email inválido")
    return result.normalized


def check_password(value: str) -> str:
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"Senha deve ter no mínimo {MIN_PASSWORD_LENGTH} caracteres",
        )
    return value


def normalize_cpf_field(value: str | None) -> str | None:
    """"123.456.789-01" -> "12345678901"; blank -> None."""
    if value is None or not value.strip():
        return None
    digits = normalize_cpf(value)
    if len(digits) != 11:
        raise ValueError("CPF deve conter 11 dígitos")
    return digits
