import pytest

from helpers import SALIDA_BASE, auth_headers, contar
from trivo.models.notificacion import Notificacion

pytestmark = pytest.mark.api


async def notificar(client, remitente, destinatario, mensaje="Hola"):
    response = await client.post(
        "/api/v1/notificaciones",
        json={"usuario_id": destinatario.id, "type": "joined_event", "message": mensaje},
        headers=auth_headers(remitente),
    )
    assert response.status_code == 201
    return response.json()


async def test_listar_notificaciones(client, profe, alumno):
    await notificar(client, alumno, profe, "primera")
    await notificar(client, alumno, profe, "segunda")

    response = await client.get("/api/v1/notificaciones", headers=auth_headers(profe))
    assert response.status_code == 200
    data = response.json()
    assert data["unreadCount"] == 2
    assert [n["message"] for n in data["notificaciones"]] == ["segunda", "primera"]

    response = await client.get("/api/v1/notificaciones?limit=1", headers=auth_headers(profe))
    assert len(response.json()["notificaciones"]) == 1


async def test_mark_all_read_solo_afecta_al_usuario(client, profe, alumno):
    await notificar(client, alumno, profe)
    await notificar(client, alumno, profe)
    await notificar(client, profe, alumno)

    response = await client.post("/api/v1/notificaciones/mark-all-read", headers=auth_headers(profe))
    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["count"] == 2

    assert await contar(Notificacion, Notificacion.usuario_id == alumno.id, Notificacion.read.is_(False)) == 1

    response = await client.post("/api/v1/notificaciones/mark-all-read", headers=auth_headers(profe))
    assert response.json()["count"] == 0


async def test_marcar_y_borrar_propia(client, profe, alumno):
    notificacion = await notificar(client, alumno, profe)

    response = await client.patch(
        f"/api/v1/notificaciones/{notificacion['id']}", json={"read": True}, headers=auth_headers(profe)
    )
    assert response.status_code == 200
    assert response.json()["read"] is True

    response = await client.get("/api/v1/notificaciones?unreadOnly=true", headers=auth_headers(profe))
    assert response.json()["notificaciones"] == []

    # Una notificación ajena no existe para otro usuario
    response = await client.delete(
        f"/api/v1/notificaciones/{notificacion['id']}", headers=auth_headers(alumno)
    )
    assert response.status_code == 404

    response = await client.delete(
        f"/api/v1/notificaciones/{notificacion['id']}", headers=auth_headers(profe)
    )
    assert response.status_code == 200
    assert await contar(Notificacion) == 0


async def test_metadata_de_notificacion_de_salida(client, profe, alumno):
    salida = (
        await client.post("/api/v1/salidas", json=SALIDA_BASE, headers=auth_headers(profe))
    ).json()
    await client.post(f"/api/v1/salidas/{salida['id']}/miembros", json={}, headers=auth_headers(alumno))

    data = (await client.get("/api/v1/notificaciones", headers=auth_headers(profe))).json()
    notificacion = data["notificaciones"][0]
    assert notificacion["type"] == "joined_event"
    assert notificacion["related_id"] == salida["id"]
    assert notificacion["related_user_id"] == alumno.id
    assert notificacion["metadata"]["salidaNombre"] == "Trail del Domingo"
    assert notificacion["metadata"]["shortId"] == salida["short_id"]


async def test_destinatario_inexistente(client, profe):
    response = await client.post(
        "/api/v1/notificaciones",
        json={"usuario_id": 999, "type": "joined_event", "message": "x"},
        headers=auth_headers(profe),
    )
    assert response.status_code == 404


async def test_stream_sin_redis(client, profe):
    response = await client.get(
        "/api/v1/notificaciones/stream", params={"token": auth_headers(profe)["Authorization"][7:]}
    )
    assert response.status_code == 503


async def test_stream_sin_token(client):
    response = await client.get("/api/v1/notificaciones/stream")
    assert response.status_code == 401


async def test_sin_sesion(client):
    response = await client.post("/api/v1/notificaciones/mark-all-read")
    assert response.status_code == 401
