import pytest

from helpers import auth_headers

pytestmark = pytest.mark.api

TEAM = {
    "nombre": "Fútbol 5 de los jueves",
    "ubicacion": "Club Estudiantes",
    "precio": "$3000",
    "deporte": "Fútbol",
    "fecha": "2025-06-05",
    "hora": "20:00",
    "duracion": "1 hora",
    "cupo": 10,
}


async def test_crear_y_listar_teams(client, profe, alumno):
    response = await client.post("/api/v1/teams", json=TEAM, headers=auth_headers(profe))
    assert response.status_code == 201
    assert response.json()["creador"]["id"] == profe.id

    response = await client.get("/api/v1/teams", headers=auth_headers(alumno))
    assert response.status_code == 200
    assert [t["nombre"] for t in response.json()] == [TEAM["nombre"]]


async def test_alumno_no_crea_teams(client, alumno):
    response = await client.post("/api/v1/teams", json=TEAM, headers=auth_headers(alumno))
    assert response.status_code == 403


async def test_team_con_campos_faltantes(client, profe):
    datos = {k: v for k, v in TEAM.items() if k != "hora"}
    response = await client.post("/api/v1/teams", json=datos, headers=auth_headers(profe))
    assert response.status_code == 400
    assert response.json()["error"] == "Faltan campos requeridos"


async def test_editar_y_eliminar_team(client, profe):
    team = (await client.post("/api/v1/teams", json=TEAM, headers=auth_headers(profe))).json()

    response = await client.put(
        f"/api/v1/teams/{team['id']}", json={"cupo": 12}, headers=auth_headers(profe)
    )
    assert response.json()["cupo"] == 12

    response = await client.delete(f"/api/v1/teams/{team['id']}", headers=auth_headers(profe))
    assert response.status_code == 200

    response = await client.get(f"/api/v1/teams/{team['id']}", headers=auth_headers(profe))
    assert response.status_code == 404
