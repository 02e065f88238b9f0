"""Vote Report — masked-PII per-session/per-project vote listings and spreadsheet rows.

Invariants:
    - CPF is never emitted unmasked: 12345678901 -> 123.456.789-** (last two digits always hidden)
    - Missing CPF -> "-"; malformed CPF (not 11 digits) -> fully masked placeholder
    - Reports are Admin/Manager only; Managers see only sessions they manage
    - All functions are PURE: no IO, no async, no DB

Design Decisions:
    - Report shape built here from flat joined rows, so the service does one query per level
    - Spreadsheet rows derived from the report dict (single source), written by infrastructure/spreadsheet.py
"""

import re
from datetime import datetime

from votecerto.core.access_policy import Capability, require_capability
from votecerto.core.domain_types import Identity
from votecerto.core.repository_protocols import VotingSessionLike
from votecerto.core.session_lifecycle import as_utc

CPF_MASK_TOKEN = "**"
CPF_FULLY_MASKED = "***.***.***-**"
ANONYMOUS_NAME = "Anônimo"
EMPTY_REPORT_NOTE = "Nenhum voto registrado"

SPREADSHEET_COLUMNS = [
    "Sessão", "Projeto", "Projeto Descrição", "Participante",
    "CPF", "Data", "Hora", "Comentário",
]

_NON_DIGIT = re.compile(r"\D")


def normalize_cpf(cpf: str) -> str:
    """Strip punctuation ("123.456.789-01" -> "12345678901")."""
    return _NON_DIGIT.sub("", cpf)


def mask_national_id(cpf: str | None) -> str:
    if not cpf:
        return "-"
    digits = normalize_cpf(cpf)
    if len(digits) != 11:
        return CPF_FULLY_MASKED
    return f"{digits[0:3]}.{digits[3:6]}.{digits[6:9]}-{CPF_MASK_TOKEN}"


def check_report_access(identity: Identity) -> None:
    require_capability(
        identity, Capability.VIEW_REPORTS,
        "Apenas administradores e gestores podem acessar relatórios",
    )


def _format_vote(vote: dict) -> dict:
    return {
        "id": vote["id"],
        "nome_participante": vote.get("nome") or ANONYMOUS_NAME,
        "cpf_mascarado": mask_national_id(vote.get("cpf")),
        "data_voto": as_utc(vote["data_voto"]).isoformat(),
        "comentario": vote.get("comentario"),
    }


def build_session_report(
    session: VotingSessionLike, projects: list[dict], votes: list[dict],
) -> dict:
    """Group flat vote rows under their projects.

    projects: [{"id", "titulo", "descricao_detalhada"}]
    votes: [{"id", "projeto_id", "nome", "cpf", "data_voto", "comentario"}],
           expected newest first.
    """
    by_project: dict[int, list[dict]] = {p["id"]: [] for p in projects}
    for vote in votes:
        if vote["projeto_id"] in by_project:
            by_project[vote["projeto_id"]].append(_format_vote(vote))

    project_rows = [
        {
            "id": p["id"],
            "titulo": p["titulo"],
            "descricao": p.get("descricao_detalhada") or None,
            "votos": by_project[p["id"]],
            "total_votos": len(by_project[p["id"]]),
        }
        for p in projects
    ]
    return {
        "id": session.id,
        "titulo": session.titulo,
        "data_inicio": as_utc(session.data_inicio).isoformat(),
        "data_fim": as_utc(session.data_fim).isoformat(),
        "ativa": session.ativa,
        "projetos": project_rows,
        "total_projetos": len(project_rows),
        "total_votos": sum(p["total_votos"] for p in project_rows),
    }


def _split_timestamp(iso_value: str) -> tuple[str, str]:
    moment = datetime.fromisoformat(iso_value)
    return moment.strftime("%d/%m/%Y"), moment.strftime("%H:%M:%S")


def build_spreadsheet_rows(report: dict) -> list[list[str]]:
    """Flatten one session report into spreadsheet rows (header excluded)."""
    rows = []
    for project in report["projetos"]:
        for vote in project["votos"]:
            date_str, time_str = _split_timestamp(vote["data_voto"])
            rows.append([
                report["titulo"],
                project["titulo"],
                project["descricao"] or "",
                vote["nome_participante"],
                vote["cpf_mascarado"],
                date_str,
                time_str,
                vote["comentario"] or "",
            ])
    if not rows:
        rows.append([report["titulo"], "", "", "", "", "", "", EMPTY_REPORT_NOTE])
    return rows


def export_filename(titulo: str) -> str:
    return f"votacao_{re.sub(r'[^a-zA-Z0-9]', '_', titulo)}.xlsx"
