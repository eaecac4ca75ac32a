import pytest

from helpers import contar
from trivo.models.sponsor import Sponsor

pytestmark = pytest.mark.api


async def test_crear_y_listar_sponsors(client):
    for nombre in ("Nike", "Adidas"):
        response = await client.post("/api/v1/sponsors", json={"name": f"  {nombre} "})
        assert response.status_code == 201
        assert response.json()["success"] is True
        assert response.json()["sponsor"]["name"] == nombre

    response = await client.get("/api/v1/sponsors")
    assert response.status_code == 200
    assert [s["name"] for s in response.json()["sponsors"]] == ["Adidas", "Nike"]


async def test_sponsor_duplicado(client):
    await client.post("/api/v1/sponsors", json={"name": "Nike"})
    response = await client.post("/api/v1/sponsors", json={"name": "nike"})
    assert response.status_code == 409
    assert response.json()["error"] == "Ya existe un sponsor con ese nombre"
    assert await contar(Sponsor) == 1


async def test_nombre_corto(client):
    response = await client.post("/api/v1/sponsors", json={"name": " ab "})
    assert response.status_code == 400
    assert response.json()["error"] == "El nombre debe tener al menos 3 caracteres"
    assert await contar(Sponsor) == 0
