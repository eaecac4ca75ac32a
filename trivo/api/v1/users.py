import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from trivo.api.deps import get_current_user
from trivo.config.database import get_db
from trivo.core.exceptions import Conflict, NotFound, TrivoError, ValidationFailed
from trivo.core.permissions import check_role
from trivo.crud.usuario import usuario as crud_usuario
from trivo.models.usuario import Usuario
from trivo.schemas.usuario import Usuario as UsuarioSchema, UsuarioCreate, UsuarioUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_usuario(db: AsyncSession, user_id: int) -> Usuario:
    usuario = await crud_usuario.get(db, user_id)
    if not usuario:
        raise NotFound("Usuario no encontrado")
    return usuario


@router.get("", response_model=List[UsuarioSchema])
async def read_users(
    search: Optional[str] = Query(None, description="Texto a buscar en email, nombre o apellido"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Listar usuarios (solo admin) o buscarlos para inscribirlos en una academia
    """
    if search and search.strip():
        check_role("usuarios.buscar", current_user)
        return await crud_usuario.search(db, search)

    check_role("usuarios.administrar", current_user)
    return await crud_usuario.get_multi(db, skip=skip, limit=limit)


@router.post("", response_model=UsuarioSchema, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UsuarioCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    try:
        check_role("usuarios.administrar", current_user)
        if await crud_usuario.get_by_email(db, user_in.email):
            raise ValidationFailed(crud_usuario.conflict_message)
        usuario = await crud_usuario.create(db, obj_in=user_in)
        logger.info("👤 Usuario %s creado por admin %s", usuario.id, current_user.id)
        return usuario
    except Conflict as e:
        # Carrera con otro alta del mismo email
        raise ValidationFailed(e.message)
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error creando usuario")
        raise HTTPException(status_code=500, detail="Error al crear usuario")


@router.get("/{user_id}", response_model=UsuarioSchema)
async def read_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    check_role("usuarios.administrar", current_user)
    return await _get_usuario(db, user_id)


@router.put("/{user_id}", response_model=UsuarioSchema)
async def update_user(
    user_id: int,
    user_in: UsuarioUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    try:
        check_role("usuarios.administrar", current_user)
        usuario = await _get_usuario(db, user_id)
        if user_in.email and user_in.email != usuario.email:
            if await crud_usuario.get_by_email(db, user_in.email):
                raise ValidationFailed(crud_usuario.conflict_message)
        return await crud_usuario.update(db, db_obj=usuario, obj_in=user_in)
    except Conflict as e:
        raise ValidationFailed(e.message)
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error actualizando usuario %s", user_id)
        raise HTTPException(status_code=500, detail="Error al actualizar usuario")


@router.delete("/{user_id}")
async def delete_user(
    user_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    try:
        check_role("usuarios.administrar", current_user)
        if user_id == current_user.id:
            raise ValidationFailed("No puedes eliminar tu propio usuario")
        usuario = await _get_usuario(db, user_id)
        try:
            await crud_usuario.remove(db, id=usuario.id)
        except IntegrityError:
            await db.rollback()
            raise Conflict("El usuario tiene academias, salidas o pagos asociados")
        logger.info("Usuario %s eliminado por admin %s", user_id, current_user.id)
        return {"message": "Usuario eliminado correctamente"}
    except (TrivoError, HTTPException):
        raise
    except Exception:
        logger.exception("Error eliminando usuario %s", user_id)
        raise HTTPException(status_code=500, detail="Error al eliminar usuario")
