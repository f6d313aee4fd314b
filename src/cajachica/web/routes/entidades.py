"""Entity endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from cajachica.domain.entity import EntityService
from cajachica.web.dependencies import get_current_user_id, get_entity_service
from cajachica.web.schemas import EntityCreate, EntityUpdate
from cajachica.web.serializers import entity_json, page_json

router = APIRouter(prefix="/entidades", tags=["Entidades"])


@router.get("")
def list_entities(
    search: Optional[str] = Query(default=None),
    tipo: Optional[str] = Query(default=None),
    activa: Optional[bool] = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=500),
    user_id: str = Depends(get_current_user_id),
    service: EntityService = Depends(get_entity_service),
):
    result = service.list_entities_page(
        user_id, page=page, limit=limit, active=activa, search=search, activity_type=tipo
    )
    return page_json(result, entity_json)


@router.post("", status_code=201)
def create_entity(
    body: EntityCreate,
    user_id: str = Depends(get_current_user_id),
    service: EntityService = Depends(get_entity_service),
):
    entity_id = service.create_entity(
        user_id,
        name=body.nombre,
        activity_type=body.tipo,
        description=body.descripcion,
        active=body.activa,
    )
    return entity_json(service.require_entity(user_id, entity_id))


@router.get("/{entidad_id}")
def get_entity(
    entidad_id: int,
    user_id: str = Depends(get_current_user_id),
    service: EntityService = Depends(get_entity_service),
):
    return entity_json(service.require_entity(user_id, entidad_id))


@router.put("/{entidad_id}")
def update_entity(
    entidad_id: int,
    body: EntityUpdate,
    user_id: str = Depends(get_current_user_id),
    service: EntityService = Depends(get_entity_service),
):
    entity = service.update_entity(
        user_id,
        entidad_id,
        name=body.nombre,
        description=body.descripcion,
        activity_type=body.tipo,
        active=body.activa,
    )
    return entity_json(entity)


@router.delete("/{entidad_id}")
def delete_entity(
    entidad_id: int,
    user_id: str = Depends(get_current_user_id),
    service: EntityService = Depends(get_entity_service),
):
    service.delete_entity(user_id, entidad_id)
    return {"message": "Entidad eliminada correctamente"}
