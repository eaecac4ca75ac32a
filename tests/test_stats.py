import pytest

from helpers import SALIDA_BASE, auth_headers

pytestmark = pytest.mark.api


async def test_estadisticas_vacias(client, admin):
    response = await client.get("/api/v1/stats", headers=auth_headers(admin))
    assert response.status_code == 200
    assert response.json() == {
        "totalSalidas": 0,
        "totalTeams": 0,
        "totalAcademias": 0,
        "totalMiembros": 1,
        "pagosPendientes": 0,
        "ingresosAprobados": 0,
    }


async def test_ingresos_suman_solo_aprobados(client, profe, alumno):
    salida = (
        await client.post("/api/v1/salidas", json=SALIDA_BASE, headers=auth_headers(profe))
    ).json()
    pagos = []
    for monto in (5000, 3000, 700):
        response = await client.post(
            "/api/v1/pagos",
            json={"salida_id": salida["id"], "amount": monto},
            headers=auth_headers(alumno),
        )
        pagos.append(response.json()["pago"])

    for pago in pagos[:2]:
        await client.patch(
            f"/api/v1/pagos/{pago['id']}", json={"estado": "aprobado"}, headers=auth_headers(profe)
        )

    data = (await client.get("/api/v1/stats", headers=auth_headers(alumno))).json()
    assert data["ingresosAprobados"] == 8000
    assert data["pagosPendientes"] == 1
    assert data["totalSalidas"] == 1
    assert data["totalMiembros"] == 2


async def test_estadisticas_sin_sesion(client):
    response = await client.get("/api/v1/stats")
    assert response.status_code == 401
