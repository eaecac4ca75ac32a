import pytest

from helpers import ACADEMIA_RUNCLUB, auth_headers, contar
from trivo.core.constantes import Rol
from trivo.models.grupo import Grupo
from trivo.models.miembro_academia import MiembroAcademia

pytestmark = pytest.mark.api


@pytest.fixture
async def academia(client, dueno):
    response = await client.post("/api/v1/academias", json=ACADEMIA_RUNCLUB, headers=auth_headers(dueno))
    return response.json()


async def test_crear_grupo(client, dueno, profe, academia):
    response = await client.post(
        "/api/v1/grupos",
        json={
            "academia_id": academia["id"],
            "nombre_grupo": "Avanzados",
            "dias": ["Mar", "Jue"],
            "profesor_id": profe.id,
            "location_coords": {"lat": -34.92, "lng": -57.95},
        },
        headers=auth_headers(dueno),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["dias"] == ["Mar", "Jue"]
    assert data["profesor"]["id"] == profe.id
    assert data["location_coords"] == {"lat": -34.92, "lng": -57.95}


async def test_grupo_sin_dias(client, dueno, academia):
    response = await client.post(
        "/api/v1/grupos",
        json={"academia_id": academia["id"], "nombre_grupo": "Vacío", "dias": []},
        headers=auth_headers(dueno),
    )
    assert response.status_code == 400
    assert await contar(Grupo) == 0


async def test_grupos_de_academia_ajena(client, academia, crear_usuario):
    otro = await crear_usuario("otro.dueno@trivo.com", Rol.DUENO_ACADEMIA)
    response = await client.get(
        f"/api/v1/grupos?academia_id={academia['id']}", headers=auth_headers(otro)
    )
    assert response.status_code == 404

    response = await client.post(
        "/api/v1/grupos",
        json={"academia_id": academia["id"], "nombre_grupo": "Intrusos", "dias": ["Lun"]},
        headers=auth_headers(otro),
    )
    assert response.status_code == 403


async def test_un_miembro_por_academia(client, dueno, alumno, academia):
    datos = {"usuario_id": alumno.id, "academia_id": academia["id"], "tipo_membresia": "mensual"}

    response = await client.post("/api/v1/miembros-academia", json=datos, headers=auth_headers(dueno))
    assert response.status_code == 201
    assert response.json()["estado"] == "activo"
    assert response.json()["usuario"]["email"] == "alumno@trivo.com"

    response = await client.post("/api/v1/miembros-academia", json=datos, headers=auth_headers(dueno))
    assert response.status_code == 409
    assert response.json()["error"] == "El usuario ya es miembro de esta academia"
    assert await contar(MiembroAcademia) == 1


async def test_editar_y_listar_miembros(client, dueno, alumno, academia):
    miembro = (
        await client.post(
            "/api/v1/miembros-academia",
            json={"usuario_id": alumno.id, "academia_id": academia["id"]},
            headers=auth_headers(dueno),
        )
    ).json()

    response = await client.put(
        f"/api/v1/miembros-academia/{miembro['id']}",
        json={"estado": "suspendido", "notas": "Cuota atrasada"},
        headers=auth_headers(dueno),
    )
    assert response.status_code == 200
    assert response.json()["estado"] == "suspendido"

    response = await client.get(
        f"/api/v1/miembros-academia?academia_id={academia['id']}", headers=auth_headers(dueno)
    )
    assert [m["notas"] for m in response.json()] == ["Cuota atrasada"]

    response = await client.delete(
        f"/api/v1/miembros-academia/{miembro['id']}", headers=auth_headers(dueno)
    )
    assert response.status_code == 200
    assert await contar(MiembroAcademia) == 0


async def test_miembro_con_grupo_de_otra_academia(client, dueno, alumno, academia, crear_usuario):
    otro = await crear_usuario("otro.dueno@trivo.com", Rol.DUENO_ACADEMIA)
    otra = (
        await client.post(
            "/api/v1/academias",
            json={**ACADEMIA_RUNCLUB, "nombre_academia": "Trekkers"},
            headers=auth_headers(otro),
        )
    ).json()
    grupo = (
        await client.post(
            "/api/v1/grupos",
            json={"academia_id": otra["id"], "nombre_grupo": "Ajeno", "dias": ["Sab"]},
            headers=auth_headers(otro),
        )
    ).json()

    response = await client.post(
        "/api/v1/miembros-academia",
        json={"usuario_id": alumno.id, "academia_id": academia["id"], "grupo_id": grupo["id"]},
        headers=auth_headers(dueno),
    )
    assert response.status_code == 400
    assert response.json()["error"] == "El grupo no pertenece a la academia"


async def test_eliminar_grupo_libera_miembros(client, dueno, alumno, academia):
    headers = auth_headers(dueno)
    grupo = (
        await client.post(
            "/api/v1/grupos",
            json={"academia_id": academia["id"], "nombre_grupo": "Martes", "dias": ["Mar"]},
            headers=headers,
        )
    ).json()
    miembro = (
        await client.post(
            "/api/v1/miembros-academia",
            json={"usuario_id": alumno.id, "academia_id": academia["id"], "grupo_id": grupo["id"]},
            headers=headers,
        )
    ).json()

    response = await client.delete(f"/api/v1/grupos/{grupo['id']}", headers=headers)
    assert response.status_code == 200

    response = await client.get(f"/api/v1/miembros-academia/{miembro['id']}", headers=headers)
    assert response.json()["grupo_id"] is None
