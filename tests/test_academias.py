import pytest

from helpers import ACADEMIA_RUNCLUB, auth_headers, contar
from trivo.core.constantes import Rol
from trivo.models.academia import Academia
from trivo.models.pago import Pago

pytestmark = pytest.mark.api

DUPLICADA = "Ya tienes una academia registrada. Solo puedes tener una academia por usuario."


async def test_runclub_una_academia_por_dueno(client, dueno):
    headers = auth_headers(dueno)

    response = await client.post("/api/v1/academias", json=ACADEMIA_RUNCLUB, headers=headers)
    assert response.status_code == 201
    data = response.json()
    assert data["nombre_academia"] == "RunClub"
    assert data["dueno_id"] == dueno.id
    assert data["dueno"]["email"] == "dueno@trivo.com"

    response = await client.post(
        "/api/v1/academias",
        json={**ACADEMIA_RUNCLUB, "nombre_academia": "RunClub 2"},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["error"] == DUPLICADA
    assert await contar(Academia) == 1


async def test_alumno_no_crea_academias(client, alumno):
    response = await client.post(
        "/api/v1/academias", json=ACADEMIA_RUNCLUB, headers=auth_headers(alumno)
    )
    assert response.status_code == 403
    assert await contar(Academia) == 0


async def test_sin_sesion_no_crea_nada(client):
    response = await client.post("/api/v1/academias", json=ACADEMIA_RUNCLUB)
    assert response.status_code == 401
    assert await contar(Academia) == 0


async def test_campos_requeridos(client, dueno):
    response = await client.post(
        "/api/v1/academias", json={"nombre_academia": "Sin datos"}, headers=auth_headers(dueno)
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Faltan campos requeridos"


async def test_disciplina_invalida(client, dueno):
    response = await client.post(
        "/api/v1/academias",
        json={**ACADEMIA_RUNCLUB, "tipo_disciplina": "Natación"},
        headers=auth_headers(dueno),
    )
    assert response.status_code == 400


async def test_listar_solo_propias(client, dueno, profe):
    await client.post("/api/v1/academias", json=ACADEMIA_RUNCLUB, headers=auth_headers(dueno))
    await client.post(
        "/api/v1/academias",
        json={**ACADEMIA_RUNCLUB, "nombre_academia": "Trekkers"},
        headers=auth_headers(profe),
    )

    response = await client.get("/api/v1/academias", headers=auth_headers(dueno))
    assert response.status_code == 200
    assert [a["nombre_academia"] for a in response.json()] == ["RunClub"]


async def test_academia_ajena(client, dueno, crear_usuario):
    otro = await crear_usuario("otro@trivo.com", Rol.DUENO_ACADEMIA)
    creada = await client.post("/api/v1/academias", json=ACADEMIA_RUNCLUB, headers=auth_headers(dueno))
    academia_id = creada.json()["id"]

    response = await client.get(f"/api/v1/academias/{academia_id}", headers=auth_headers(otro))
    assert response.status_code == 404

    response = await client.put(
        f"/api/v1/academias/{academia_id}",
        json={"nombre_academia": "Robada"},
        headers=auth_headers(otro),
    )
    assert response.status_code == 403


async def test_admin_edita_cualquier_academia(client, dueno, admin):
    creada = await client.post("/api/v1/academias", json=ACADEMIA_RUNCLUB, headers=auth_headers(dueno))
    response = await client.put(
        f"/api/v1/academias/{creada.json()['id']}",
        json={"precio": "$20000"},
        headers=auth_headers(admin),
    )
    assert response.status_code == 200
    assert response.json()["precio"] == "$20000"
    assert response.json()["nombre_academia"] == "RunClub"


async def test_eliminar_academia_con_grupos(client, dueno):
    headers = auth_headers(dueno)
    creada = await client.post("/api/v1/academias", json=ACADEMIA_RUNCLUB, headers=headers)
    academia_id = creada.json()["id"]
    await client.post(
        "/api/v1/grupos",
        json={"academia_id": academia_id, "nombre_grupo": "Principiantes", "dias": ["Lun", "Mie"]},
        headers=headers,
    )

    response = await client.delete(f"/api/v1/academias/{academia_id}", headers=headers)
    assert response.status_code == 409
    assert response.json()["details"]["grupos"] == 1
    assert await contar(Academia) == 1


async def test_eliminar_academia_conserva_pagos(client, dueno, alumno):
    headers = auth_headers(dueno)
    creada = await client.post("/api/v1/academias", json=ACADEMIA_RUNCLUB, headers=headers)
    academia_id = creada.json()["id"]
    await client.post(
        "/api/v1/pagos",
        json={"academia_id": academia_id, "amount": 15000},
        headers=auth_headers(alumno),
    )

    response = await client.delete(f"/api/v1/academias/{academia_id}", headers=headers)
    assert response.status_code == 200
    assert await contar(Academia) == 0
    assert await contar(Pago, Pago.academia_nombre == "RunClub", Pago.academia_id.is_(None)) == 1


async def test_editar_academia_con_campo_nulo(client, dueno):
    creada = await client.post("/api/v1/academias", json=ACADEMIA_RUNCLUB, headers=auth_headers(dueno))

    response = await client.put(
        f"/api/v1/academias/{creada.json()['id']}",
        json={"pais": None},
        headers=auth_headers(dueno),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "El campo 'pais' no puede ser nulo"

    response = await client.get(f"/api/v1/academias/{creada.json()['id']}", headers=auth_headers(dueno))
    assert response.json()["pais"] == "Argentina"
