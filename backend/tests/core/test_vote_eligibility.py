"""Vote Eligibility — ordered precondition chain for cast, edit and withdraw.

Tests cover:
    - Each step of the cast chain, in order (first violation wins)
    - Global sessions skip the membership check
    - Edit: owner only, live session, same-session project
    - Withdraw: owner while live, Admin any time
"""

from dataclasses import replace
from datetime import timedelta
from types import SimpleNamespace

import pytest

from votecerto.core.errors import (
    AuthorizationError, ResourceNotFoundError, SessionNotLiveError,
)
from votecerto.core.vote_eligibility import (
    check_vote_edit, check_vote_eligibility, check_vote_withdraw,
)


@pytest.fixture
def closed_session(live_session, now):
    return SimpleNamespace(**{**vars(live_session), "data_fim": now - timedelta(minutes=1)})


@pytest.fixture
def vote(participant, live_session, project):
    return SimpleNamespace(
        id=1000, usuario_id=participant.user_id,
        sessao_id=live_session.id, projeto_id=project.id,
    )


# ─── cast ────────────────────────────────────────────────────────

def test_eligible_vote_returns_session(participant, live_session, project, now):
    assert check_vote_eligibility(participant, live_session, True, project, now) is live_session


def test_role_checked_first(manager, now):
    # Even with no session at all, a Manager is told only participants vote.
    with pytest.raises(AuthorizationError) as exc:
        check_vote_eligibility(manager, None, False, None, now)
    assert exc.value.message == "Apenas participantes podem votar"


def test_missing_session_is_404(participant, now):
    with pytest.raises(ResourceNotFoundError):
        check_vote_eligibility(participant, None, True, None, now)


def test_not_live_before_membership(participant, closed_session, project, now):
    with pytest.raises(SessionNotLiveError) as exc:
        check_vote_eligibility(participant, closed_session, False, project, now)
    assert exc.value.http_status == 400


def test_non_member_rejected(participant, live_session, project, now):
    with pytest.raises(AuthorizationError) as exc:
        check_vote_eligibility(participant, live_session, False, project, now)
    assert exc.value.message == "Você não é membro desta comunidade"


def test_global_session_skips_membership(participant, live_session, project, now):
    global_session = SimpleNamespace(**{**vars(live_session), "comunidade_id": None})
    check_vote_eligibility(participant, global_session, False, project, now)


def test_project_from_other_session_is_404(participant, live_session, now):
    foreign = SimpleNamespace(id=200, titulo="Outro", sessao_id=99)
    with pytest.raises(ResourceNotFoundError) as exc:
        check_vote_eligibility(participant, live_session, True, foreign, now)
    assert exc.value.message == "Projeto não encontrado nesta sessão"


# ─── edit ────────────────────────────────────────────────────────

def test_owner_edits_while_live(participant, vote, live_session, project, now):
    check_vote_edit(participant, vote, live_session, project, now)


def test_other_participant_cannot_edit(participant, vote, live_session, project, now):
    with pytest.raises(AuthorizationError):
        check_vote_edit(replace(participant, user_id=99), vote, live_session, project, now)


def test_edit_after_close_rejected(participant, vote, closed_session, project, now):
    with pytest.raises(SessionNotLiveError):
        check_vote_edit(participant, vote, closed_session, project, now)


def test_edit_to_foreign_project_rejected(participant, vote, live_session, now):
    foreign = SimpleNamespace(id=200, titulo="Outro", sessao_id=99)
    with pytest.raises(ResourceNotFoundError):
        check_vote_edit(participant, vote, live_session, foreign, now)


def test_edit_missing_vote(participant, live_session, project, now):
    with pytest.raises(ResourceNotFoundError):
        check_vote_edit(participant, None, live_session, project, now)


# ─── withdraw ────────────────────────────────────────────────────

def test_admin_withdraws_any_time(admin, vote, closed_session, now):
    check_vote_withdraw(admin, vote, closed_session, now)


def test_owner_withdraws_only_while_live(participant, vote, live_session, closed_session, now):
    check_vote_withdraw(participant, vote, live_session, now)
    with pytest.raises(SessionNotLiveError):
        check_vote_withdraw(participant, vote, closed_session, now)


def test_stranger_cannot_withdraw(participant, vote, live_session, now):
    with pytest.raises(AuthorizationError):
        check_vote_withdraw(replace(participant, user_id=99), vote, live_session, now)
