import logging
from typing import Optional
from fastapi import APIRouter, Query

from trivo.core.exceptions import ValidationFailed
from trivo.services.geocoding import buscar_direcciones

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def search_addresses(q: Optional[str] = Query(None)):
    """Proxy de búsqueda de direcciones; devuelve la respuesta del proveedor tal cual"""
    if not q or not q.strip():
        raise ValidationFailed("Query parameter 'q' is required")
    return await buscar_direcciones(q.strip())
