import pytest

from helpers import SALIDA_BASE, auth_headers, contar, obtener
from trivo.core.constantes import Rol
from trivo.models.miembro_salida import MiembroSalida
from trivo.models.notificacion import Notificacion
from trivo.models.pago import Pago

pytestmark = pytest.mark.api


async def test_pago_requiere_un_destino(client, alumno):
    response = await client.post("/api/v1/pagos", json={"amount": 100}, headers=auth_headers(alumno))
    assert response.status_code == 400
    assert response.json()["error"] == "Debe especificar salida_id o academia_id"

    response = await client.post(
        "/api/v1/pagos",
        json={"amount": 100, "salida_id": 1, "academia_id": 1},
        headers=auth_headers(alumno),
    )
    assert response.status_code == 400


async def test_pago_a_salida_inexistente(client, alumno):
    response = await client.post(
        "/api/v1/pagos", json={"salida_id": 999, "amount": 100}, headers=auth_headers(alumno)
    )
    assert response.status_code == 404


async def test_comprobante_posterior_se_vincula_al_miembro(client, profe, alumno):
    salida = (
        await client.post("/api/v1/salidas", json=SALIDA_BASE, headers=auth_headers(profe))
    ).json()
    miembro = (
        await client.post(
            f"/api/v1/salidas/{salida['id']}/miembros", json={}, headers=auth_headers(alumno)
        )
    ).json()

    response = await client.post(
        "/api/v1/pagos",
        json={"salida_id": salida["id"], "comprobante_url": "https://img/c.png", "amount": 4500},
        headers=auth_headers(alumno),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Pago registrado exitosamente"
    assert float(data["pago"]["amount"]) == 4500

    assert (await obtener(MiembroSalida, miembro["id"])).pago_id == data["pago"]["id"]

    response = await client.patch(
        f"/api/v1/pagos/{data['pago']['id']}",
        json={"estado": "aprobado"},
        headers=auth_headers(profe),
    )
    assert response.status_code == 200
    assert (await obtener(MiembroSalida, miembro["id"])).estado == "aprobado"
    assert await contar(
        Notificacion,
        Notificacion.usuario_id == alumno.id,
        Notificacion.message == 'Tu pago para "Trail del Domingo" fue aprobado ✅',
    ) == 1


async def test_listar_pagos_por_estado(client, profe, alumno, admin):
    salida = (
        await client.post("/api/v1/salidas", json=SALIDA_BASE, headers=auth_headers(profe))
    ).json()
    for monto in (100, 200):
        await client.post(
            "/api/v1/pagos",
            json={"salida_id": salida["id"], "amount": monto},
            headers=auth_headers(alumno),
        )
    pagos = (await client.get("/api/v1/pagos", headers=auth_headers(admin))).json()
    await client.patch(
        f"/api/v1/pagos/{pagos[0]['id']}", json={"estado": "aprobado"}, headers=auth_headers(profe)
    )

    response = await client.get("/api/v1/pagos?estado=pendiente", headers=auth_headers(admin))
    assert response.status_code == 200
    assert [p["id"] for p in response.json()] == [pagos[1]["id"]]
    assert response.json()[0]["usuario"]["email"] == "alumno@trivo.com"

    response = await client.get("/api/v1/pagos", headers=auth_headers(alumno))
    assert response.status_code == 403


async def test_revisar_pago_ajeno(client, profe, alumno, crear_usuario):
    otro = await crear_usuario("otro.profe@trivo.com", Rol.PROFE)
    salida = (
        await client.post("/api/v1/salidas", json=SALIDA_BASE, headers=auth_headers(profe))
    ).json()
    pago = (
        await client.post(
            "/api/v1/pagos", json={"salida_id": salida["id"], "amount": 1}, headers=auth_headers(alumno)
        )
    ).json()["pago"]

    response = await client.patch(
        f"/api/v1/pagos/{pago['id']}", json={"estado": "aprobado"}, headers=auth_headers(otro)
    )
    assert response.status_code == 403


async def test_nuevo_comprobante_reemplaza_al_pendiente(client, profe, alumno):
    salida = (
        await client.post("/api/v1/salidas", json=SALIDA_BASE, headers=auth_headers(profe))
    ).json()
    miembro = (
        await client.post(
            f"/api/v1/salidas/{salida['id']}/miembros", json={}, headers=auth_headers(alumno)
        )
    ).json()

    pagos = []
    for url in ("https://img/c1.png", "https://img/c2.png"):
        response = await client.post(
            "/api/v1/pagos",
            json={"salida_id": salida["id"], "comprobante_url": url, "amount": 5000},
            headers=auth_headers(alumno),
        )
        pagos.append(response.json()["pago"])

    assert (await obtener(Pago, pagos[0]["id"])).estado == "rechazado"
    assert (await obtener(MiembroSalida, miembro["id"])).pago_id == pagos[1]["id"]

    response = await client.patch(
        f"/api/v1/pagos/{pagos[0]['id']}", json={"estado": "aprobado"}, headers=auth_headers(profe)
    )
    assert response.status_code == 409
    assert (await obtener(MiembroSalida, miembro["id"])).estado == "pendiente"

    response = await client.patch(
        f"/api/v1/pagos/{pagos[1]['id']}", json={"estado": "aprobado"}, headers=auth_headers(profe)
    )
    assert response.status_code == 200
    assert (await obtener(MiembroSalida, miembro["id"])).estado == "aprobado"


async def test_aprobar_pago_con_salida_llena(client, profe, alumno, crear_usuario):
    otra = await crear_usuario("otra.alumna@trivo.com")
    salida = (
        await client.post(
            "/api/v1/salidas", json={**SALIDA_BASE, "cupo": 1}, headers=auth_headers(profe)
        )
    ).json()

    miembros = []
    for usuario in (alumno, otra):
        response = await client.post(
            f"/api/v1/salidas/{salida['id']}/miembros",
            json={"comprobante_url": "https://img/c.png"},
            headers=auth_headers(usuario),
        )
        assert response.status_code == 201
        miembros.append(response.json())

    response = await client.patch(
        f"/api/v1/pagos/{miembros[0]['pago_id']}", json={"estado": "aprobado"}, headers=auth_headers(profe)
    )
    assert response.status_code == 200

    response = await client.patch(
        f"/api/v1/pagos/{miembros[1]['pago_id']}", json={"estado": "aprobado"}, headers=auth_headers(profe)
    )
    assert response.status_code == 400
    assert response.json()["error"] == "No hay cupos disponibles"
    assert (await obtener(Pago, miembros[1]["pago_id"])).estado == "pendiente"
    assert (await obtener(MiembroSalida, miembros[1]["id"])).estado == "pendiente"


async def test_rechazar_miembro_rechaza_su_pago(client, profe, alumno):
    salida = (
        await client.post("/api/v1/salidas", json=SALIDA_BASE, headers=auth_headers(profe))
    ).json()
    miembro = (
        await client.post(
            f"/api/v1/salidas/{salida['id']}/miembros",
            json={"comprobante_url": "https://img/c.png"},
            headers=auth_headers(alumno),
        )
    ).json()

    response = await client.patch(
        f"/api/v1/salidas/{salida['id']}/miembros/{miembro['id']}",
        json={"estado": "rechazado"},
        headers=auth_headers(profe),
    )
    assert response.status_code == 200
    assert response.json()["estado"] == "rechazado"
    assert (await obtener(Pago, miembro["pago_id"])).estado == "rechazado"
    assert await contar(
        Notificacion,
        Notificacion.usuario_id == alumno.id,
        Notificacion.message == 'Tu pago para "Trail del Domingo" fue rechazado ❌',
    ) == 1
