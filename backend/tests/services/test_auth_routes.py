"""Auth Routes — cookie login, logout, current user, and token failure modes."""

from votecerto.config import get_settings
from votecerto.infrastructure.security import create_access_token

PASSWORD = "senha123"


async def test_login_sets_http_only_cookie(client, participant):
    res = await client.post(
        "/api/auth/login",
        json={"email": participant.email, "password": PASSWORD},
    )
    assert res.status_code == 200
    assert res.json()["data"] == {
        "id": participant.id, "email": participant.email, "tipo": "PARTICIPANTE",
    }
    cookie = res.headers["set-cookie"]
    assert cookie.startswith(f"{get_settings().auth_cookie_name}=")
    assert "HttpOnly" in cookie
    assert "samesite=lax" in cookie.lower()


async def test_login_cookie_authenticates_next_request(client, participant):
    login = await client.post(
        "/api/auth/login",
        json={"email": participant.email, "password": PASSWORD},
    )
    name = get_settings().auth_cookie_name
    token = login.headers["set-cookie"].split(";")[0].split("=", 1)[1]
    client.cookies.clear()
    res = await client.get("/api/auth/me", headers={"Cookie": f"{name}={token}"})
    assert res.status_code == 200
    assert res.json()["data"]["id"] == participant.id
    assert res.json()["data"]["ultimo_acesso"] is not None


async def test_wrong_password_is_generic_401(client, participant):
    res = await client.post(
        "/api/auth/login", json={"email": participant.email, "password": "errada1"},
    )
    assert res.status_code == 401
    assert res.json() == {"error": "Email ou senha inválidos"}


async def test_unknown_email_is_same_401(client):
    res = await client.post(
        "/api/auth/login", json={"email": "ninguem@example.com", "password": "qualquer"},
    )
    assert res.status_code == 401
    assert res.json() == {"error": "Email ou senha inválidos"}


async def test_me_never_exposes_password_hash(client, auth, participant):
    res = await client.get("/api/auth/me", headers=auth(participant))
    data = res.json()["data"]
    assert "password_hash" not in data
    assert data["cpf"] == "12345678901"


async def test_me_without_cookie(client):
    res = await client.get("/api/auth/me")
    assert res.status_code == 401


async def test_garbage_token(client):
    name = get_settings().auth_cookie_name
    res = await client.get("/api/auth/me", headers={"Cookie": f"{name}=nao-e-um-jwt"})
    assert res.status_code == 401


async def test_token_of_deleted_user(client, auth, admin, seed):
    doomed = await seed.user("PARTICIPANTE")
    headers = auth(doomed)
    res = await client.delete(f"/api/usuarios/{doomed.id}", headers=auth(admin))
    assert res.status_code == 200
    res = await client.get("/api/auth/me", headers=headers)
    assert res.status_code == 401


async def test_role_read_from_database(client, seed):
    participant = await seed.user("PARTICIPANTE")
    forged = create_access_token(participant.id, participant.email, "ADMIN")
    name = get_settings().auth_cookie_name
    res = await client.get("/api/usuarios", headers={"Cookie": f"{name}={forged}"})
    assert res.status_code == 403


async def test_logout_clears_cookie(client):
    res = await client.delete("/api/auth/logout")
    assert res.status_code == 200
    assert get_settings().auth_cookie_name in res.headers["set-cookie"]
    assert 'Max-Age=0' in res.headers["set-cookie"]
