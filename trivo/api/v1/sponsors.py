import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.config.database import get_db
from trivo.core.exceptions import Conflict, TrivoError
from trivo.crud.sponsor import sponsor as crud_sponsor
from trivo.schemas.sponsor import Sponsor, SponsorCreate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("")
async def read_sponsors(db: AsyncSession = Depends(get_db)):
    """Sponsors ordenados por nombre (público)"""
    try:
        sponsors = await crud_sponsor.get_all(db)
        return {"success": True, "sponsors": [Sponsor.model_validate(s) for s in sponsors]}
    except Exception:
        logger.exception("Error obteniendo sponsors")
        raise HTTPException(status_code=500, detail="Error al obtener sponsors")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_sponsor(sponsor_in: SponsorCreate, db: AsyncSession = Depends(get_db)):
    try:
        if await crud_sponsor.get_by_name(db, sponsor_in.name):
            raise Conflict(crud_sponsor.conflict_message)

        sponsor = await crud_sponsor.create(db, obj_in=sponsor_in)
        logger.info("Sponsor %s creado", sponsor.id)
        return {
            "success": True,
            "message": "Sponsor creado exitosamente",
            "sponsor": Sponsor.model_validate(sponsor),
        }
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error creando sponsor")
        raise HTTPException(status_code=500, detail="Error al crear sponsor")
