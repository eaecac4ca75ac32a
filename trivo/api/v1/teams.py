import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import require
from trivo.config.database import get_db
from trivo.core.exceptions import NotFound, TrivoError
from trivo.crud.team import team as crud_team
from trivo.models.usuario import Usuario
from trivo.schemas.team import Team, TeamCreate, TeamUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_team(db: AsyncSession, team_id: int):
    team = await crud_team.get(db, team_id)
    if not team:
        raise NotFound("Team no encontrado")
    return team


@router.get("", response_model=List[Team])
async def read_teams(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("teams.listar")),
):
    return await crud_team.get_multi(db, skip=skip, limit=limit)


@router.post("", response_model=Team, status_code=status.HTTP_201_CREATED)
async def create_team(
    team_in: TeamCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("teams.crear")),
):
    try:
        team = await crud_team.create(db, obj_in=team_in, creador_id=current_user.id)
        logger.info("⚽ Team %s creado por usuario %s", team.id, current_user.id)
        return team
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error creando team")
        raise HTTPException(status_code=500, detail="Error al crear team")


@router.get("/{team_id}", response_model=Team)
async def read_team(
    team_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("teams.ver")),
):
    return await _get_team(db, team_id)


@router.put("/{team_id}", response_model=Team)
async def update_team(
    team_id: int,
    team_in: TeamUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("teams.editar")),
):
    try:
        team = await _get_team(db, team_id)
        return await crud_team.update(db, db_obj=team, obj_in=team_in)
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error actualizando team %s", team_id)
        raise HTTPException(status_code=500, detail="Error al actualizar team")


@router.delete("/{team_id}")
async def delete_team(
    team_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(require("teams.eliminar")),
):
    try:
        team = await _get_team(db, team_id)
        await crud_team.remove(db, id=team.id)
        return {"message": "Team eliminado correctamente"}
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error eliminando team %s", team_id)
        raise HTTPException(status_code=500, detail="Error al eliminar team")
