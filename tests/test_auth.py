import pytest

from helpers import auth_headers
from trivo.core.security import create_access_token

pytestmark = pytest.mark.api


async def test_login_correcto(client, admin):
    response = await client.post(
        "/auth/login", json={"email": "ADMIN@trivo.com", "password": "secreto123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["access_token"]
    assert data["user"]["email"] == "admin@trivo.com"
    assert data["user"]["rol"] == "admin"
    assert "password_hash" not in data["user"]


async def test_login_password_incorrecta(client, admin):
    response = await client.post(
        "/auth/login", json={"email": "admin@trivo.com", "password": "incorrecta"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Email o contraseña incorrectos"}


async def test_login_sin_campos(client):
    response = await client.post("/auth/login", json={"email": "admin@trivo.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "Faltan campos requeridos"


async def test_me(client, alumno):
    response = await client.get("/auth/me", headers=auth_headers(alumno))
    assert response.status_code == 200
    assert response.json()["id"] == alumno.id


async def test_me_sin_token(client):
    response = await client.get("/auth/me")
    assert response.status_code == 401
    assert response.json() == {"error": "No autorizado"}


async def test_token_de_usuario_inexistente(client):
    token = create_access_token(subject=9999)
    response = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
