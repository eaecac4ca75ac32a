import pytest

from helpers import auth_headers, contar
from trivo.models.usuario import Usuario

pytestmark = pytest.mark.api

NUEVO = {
    "email": "Nueva@Trivo.com",
    "password": "clave123",
    "firstname": "Nueva",
    "lastname": "Corredora",
    "rol": "profe",
}


async def test_admin_lista_usuarios(client, admin, alumno):
    response = await client.get("/api/v1/users", headers=auth_headers(admin))
    assert response.status_code == 200
    assert {u["email"] for u in response.json()} == {"admin@trivo.com", "alumno@trivo.com"}


async def test_listado_solo_admin(client, dueno):
    response = await client.get("/api/v1/users", headers=auth_headers(dueno))
    assert response.status_code == 403


async def test_busqueda_para_duenos(client, dueno, alumno, crear_usuario):
    await crear_usuario("lucia@trivo.com", firstname="Lucía")

    response = await client.get("/api/v1/users?search=luc", headers=auth_headers(dueno))
    assert response.status_code == 200
    assert [u["email"] for u in response.json()] == ["lucia@trivo.com"]

    response = await client.get("/api/v1/users?search=luc", headers=auth_headers(alumno))
    assert response.status_code == 403


async def test_crear_usuario(client, admin):
    response = await client.post("/api/v1/users", json=NUEVO, headers=auth_headers(admin))
    assert response.status_code == 201
    assert response.json()["email"] == "nueva@trivo.com"
    assert response.json()["rol"] == "profe"

    login = await client.post(
        "/auth/login", json={"email": "nueva@trivo.com", "password": "clave123"}
    )
    assert login.status_code == 200

    response = await client.post("/api/v1/users", json=NUEVO, headers=auth_headers(admin))
    assert response.status_code == 400
    assert response.json()["error"] == "El email ya está registrado"


async def test_password_corta(client, admin):
    response = await client.post(
        "/api/v1/users", json={**NUEVO, "password": "123"}, headers=auth_headers(admin)
    )
    assert response.status_code == 400
    assert await contar(Usuario) == 1


async def test_actualizar_password(client, admin, alumno):
    response = await client.put(
        f"/api/v1/users/{alumno.id}", json={"password": "nueva-clave"}, headers=auth_headers(admin)
    )
    assert response.status_code == 200

    login = await client.post(
        "/auth/login", json={"email": "alumno@trivo.com", "password": "nueva-clave"}
    )
    assert login.status_code == 200


async def test_admin_no_se_elimina(client, admin, alumno):
    response = await client.delete(f"/api/v1/users/{admin.id}", headers=auth_headers(admin))
    assert response.status_code == 400

    response = await client.delete(f"/api/v1/users/{alumno.id}", headers=auth_headers(admin))
    assert response.status_code == 200
    assert await contar(Usuario) == 1
