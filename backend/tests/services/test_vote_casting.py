"""Vote Casting — POST /api/votos through the full stack.

Invariants:
    - A member participant votes once per live session (201), a second time 409
    - Two concurrent submissions: exactly one 201 and one 409
    - Session before start, after end, or inactive: 400
    - Non-member: 403; after joining by code: 201
    - Managers and Admins never vote (403)
"""

import asyncio
from datetime import timedelta

from sqlalchemy import func, select

from votecerto.models.vote import Vote


def _body(session, project, comentario=None):
    return {"sessao_id": session.id, "projeto_id": project.id, "comentario": comentario}


async def test_member_casts_vote(client, auth, participant, live_session, projects):
    res = await client.post(
        "/api/votos", json=_body(live_session, projects[0], "Boa ideia"),
        headers=auth(participant),
    )
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Voto registrado com sucesso"
    assert body["data"]["projeto"]["titulo"] == "Praça nova"
    assert body["data"]["sessao"]["titulo"] == live_session.titulo
    assert body["data"]["comentario"] == "Boa ideia"


async def test_second_vote_conflicts(client, auth, participant, live_session, projects):
    first = await client.post(
        "/api/votos", json=_body(live_session, projects[0]), headers=auth(participant),
    )
    second = await client.post(
        "/api/votos", json=_body(live_session, projects[1]), headers=auth(participant),
    )
    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json() == {"error": "Este participante já votou nesta sessão"}


async def test_concurrent_votes_one_wins(
    client, auth, participant, live_session, projects, test_db,
):
    results = await asyncio.gather(
        client.post("/api/votos", json=_body(live_session, projects[0]), headers=auth(participant)),
        client.post("/api/votos", json=_body(live_session, projects[1]), headers=auth(participant)),
    )
    assert sorted(r.status_code for r in results) == [201, 409]
    count = await test_db.scalar(
        select(func.count(Vote.id)).where(Vote.usuario_id == participant.id),
    )
    assert count == 1


async def test_session_not_started(client, auth, seed, manager, participant, community):
    session = await seed.session(
        manager, community, starts_in=timedelta(hours=1), ends_in=timedelta(hours=2),
    )
    project = await seed.project(session)
    res = await client.post("/api/votos", json=_body(session, project), headers=auth(participant))
    assert res.status_code == 400
    assert res.json()["error"] == "A sessão de votação não está ativa"


async def test_session_already_ended(client, auth, seed, manager, participant, community):
    session = await seed.session(
        manager, community, starts_in=timedelta(hours=-2), ends_in=timedelta(minutes=-1),
    )
    project = await seed.project(session)
    res = await client.post("/api/votos", json=_body(session, project), headers=auth(participant))
    assert res.status_code == 400


async def test_session_inactive(client, auth, seed, manager, participant, community):
    session = await seed.session(manager, community, ativa=False)
    project = await seed.project(session)
    res = await client.post("/api/votos", json=_body(session, project), headers=auth(participant))
    assert res.status_code == 400


async def test_non_member_then_join(client, auth, seed, manager, live_session, projects, community):
    outsider = await seed.user("PARTICIPANTE")

    denied = await client.post(
        "/api/votos", json=_body(live_session, projects[0]), headers=auth(outsider),
    )
    assert denied.status_code == 403
    assert denied.json()["error"] == "Você não é membro desta comunidade"

    joined = await client.post(
        "/api/communities/ingressar",
        json={"codigo": community.codigo.lower()},
        headers=auth(outsider),
    )
    assert joined.status_code == 201

    accepted = await client.post(
        "/api/votos", json=_body(live_session, projects[0]), headers=auth(outsider),
    )
    assert accepted.status_code == 201


async def test_global_session_skips_membership_but_stays_unlisted(client, auth, seed, admin):
    voter = await seed.user("PARTICIPANTE")
    session = await seed.session(admin)
    project = await seed.project(session)

    listed = await client.get("/api/sessoes", headers=auth(voter))
    assert session.id not in {s["id"] for s in listed.json()["data"]}

    res = await client.post("/api/votos", json=_body(session, project), headers=auth(voter))
    assert res.status_code == 201


async def test_manager_cannot_vote(client, auth, manager, live_session, projects):
    res = await client.post(
        "/api/votos", json=_body(live_session, projects[0]), headers=auth(manager),
    )
    assert res.status_code == 403
    assert res.json()["error"] == "Apenas participantes podem votar"


async def test_project_from_other_session(client, auth, seed, manager, participant, live_session, community):
    other = await seed.session(manager, community)
    foreign = await seed.project(other)
    res = await client.post(
        "/api/votos", json=_body(live_session, foreign), headers=auth(participant),
    )
    assert res.status_code == 404
    assert res.json()["error"] == "Projeto não encontrado nesta sessão"


async def test_unknown_session(client, auth, participant, projects):
    res = await client.post(
        "/api/votos", json={"sessao_id": 9999, "projeto_id": projects[0].id},
        headers=auth(participant),
    )
    assert res.status_code == 404


async def test_unauthenticated(client, live_session, projects):
    res = await client.post("/api/votos", json=_body(live_session, projects[0]))
    assert res.status_code == 401


async def test_invalid_body_is_400(client, auth, participant):
    res = await client.post("/api/votos", json={"sessao_id": "x"}, headers=auth(participant))
    assert res.status_code == 400
    assert "error" in res.json()
