"""Vote Results — percentages, ranking and access gate.

Tests cover:
    - 3:1 split gives 75.0 / 25.0
    - Zero votes: every project at 0, no division error
    - Zero-vote projects still listed; ties keep incoming order
    - Results gate per role
"""

import pytest

from votecerto.core.errors import AuthorizationError
from votecerto.core.vote_results import (
    aggregate_results, check_results_access, compute_percentual,
)

PROJECTS = [
    {"id": 1, "titulo": "P1", "descricao_detalhada": "d1", "autor_responsavel": "a1"},
    {"id": 2, "titulo": "P2", "descricao_detalhada": None, "autor_responsavel": None},
    {"id": 3, "titulo": "P3", "descricao_detalhada": None, "autor_responsavel": None},
]


def test_three_to_one_split():
    result = aggregate_results(PROJECTS[:2], {1: 3, 2: 1})
    assert result["total_votos"] == 4
    by_id = {r["projeto_id"]: r for r in result["resultados"]}
    assert by_id[1]["percentual"] == 75.0
    assert by_id[2]["percentual"] == 25.0


def test_zero_votes_everywhere():
    result = aggregate_results(PROJECTS, {})
    assert result["total_votos"] == 0
    assert all(r["votos"] == 0 and r["percentual"] == 0 for r in result["resultados"])
    assert len(result["resultados"]) == 3


def test_sorted_descending_with_stable_ties():
    result = aggregate_results(PROJECTS, {3: 2, 2: 2})
    assert [r["projeto_id"] for r in result["resultados"]] == [2, 3, 1]


def test_result_row_shape():
    row = aggregate_results(PROJECTS[:1], {1: 1})["resultados"][0]
    assert row == {
        "projeto_id": 1, "titulo": "P1", "descricao": "d1", "autor": "a1",
        "votos": 1, "percentual": 100.0,
    }


def test_percentual_rounds_to_one_decimal():
    assert compute_percentual(1, 3) == 33.3
    assert compute_percentual(0, 0) == 0.0


# ─── access ──────────────────────────────────────────────────────

def test_admin_always_sees_results(admin):
    check_results_access(admin, has_voted=False, manages_session=False)


def test_participant_must_have_voted(participant):
    check_results_access(participant, has_voted=True, manages_session=False)
    with pytest.raises(AuthorizationError) as exc:
        check_results_access(participant, has_voted=False, manages_session=True)
    assert exc.value.message == "Você ainda não votou nesta sessão"


def test_manager_must_manage_session(manager):
    check_results_access(manager, has_voted=False, manages_session=True)
    with pytest.raises(AuthorizationError):
        check_results_access(manager, has_voted=False, manages_session=False)
