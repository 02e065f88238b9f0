"""Vote Results — pure aggregation of per-project counts into ranked percentages.

Invariants:
    - Every project of the session appears, zero-vote projects included
    - percentual = round(count / total * 100, 1); total == 0 yields 0.0 for all (no division)
    - Sorted by descending count; ties keep the incoming project order (stable sort)
    - Participants see results only after voting; Managers only for sessions they manage

Design Decisions:
    - Counting happens in SQL (GROUP BY), ranking here: the service passes a {projeto_id: count} map
    - Votes pointing at projects absent from the list still count toward the total, matching
      what the database holds
"""

from votecerto.core.access_policy import RecordScope, Resource, scope_for
from votecerto.core.domain_types import Identity
from votecerto.core.errors import AuthorizationError


def compute_percentual(count: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(count / total * 100, 1)


def aggregate_results(projects: list[dict], counts: dict[int, int]) -> dict:
    """Rank projects by vote count.

    projects: [{"id", "titulo", "descricao_detalhada", "autor_responsavel"}] in display order.
    counts: {projeto_id: number_of_votes}.
    """
    total = sum(counts.values())
    rows = [
        {
            "projeto_id": p["id"],
            "titulo": p["titulo"],
            "descricao": p.get("descricao_detalhada"),
            "autor": p.get("autor_responsavel"),
            "votos": counts.get(p["id"], 0),
            "percentual": compute_percentual(counts.get(p["id"], 0), total),
        }
        for p in projects
    ]
    rows.sort(key=lambda r: r["votos"], reverse=True)
    return {"total_votos": total, "resultados": rows}


def check_results_access(
    identity: Identity, has_voted: bool, manages_session: bool,
) -> None:
    """Gate the results view per role."""
    scope = scope_for(identity, Resource.VOTE)
    if scope == RecordScope.ALL:
        return
    if scope == RecordScope.MANAGED:
        if not manages_session:
            raise AuthorizationError(
                "Você não tem permissão para ver os resultados desta sessão",
            )
        return
    if not has_voted:
        raise AuthorizationError("Você ainda não votou nesta sessão")
