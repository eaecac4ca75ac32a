import logging
from typing import Any, List

import httpx

from trivo.config.settings import settings
from trivo.core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


async def buscar_direcciones(query: str) -> List[Any]:
    """Busca direcciones en Argentina usando Nominatim (OpenStreetMap)"""
    params = {
        "q": query,
        "format": "json",
        "addressdetails": 1,
        "limit": 5,
        "countrycodes": "ar",
    }
    # Nominatim exige un User-Agent identificable
    headers = {"User-Agent": settings.geocoding_user_agent}

    try:
        async with httpx.AsyncClient(timeout=settings.geocoding_timeout) as client:
            response = await client.get(settings.nominatim_url, params=params, headers=headers)
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Error consultando Nominatim: %s", e)
        raise UpstreamError("Error al buscar direcciones")
