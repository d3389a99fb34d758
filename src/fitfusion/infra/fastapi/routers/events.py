"""Store event relay router.

The store's change feed posts here when a ``users/{id}`` document is
deleted. The relay is system-initiated and trusted, so no caller identity is
required; expose it only on the internal network.
"""

# NOTE: Do NOT use ``from __future__ import annotations`` here.
# FastAPI needs the dependency annotations at runtime.

from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from fitfusion.infra.fastapi.dependencies import CascadeService

router = APIRouter(prefix="/events", tags=["events"])


class OwnerDeletedEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    owner_id: str = Field(alias="ownerId", min_length=1)
    # Field values of the owner record before it was deleted.
    data: dict[str, Any] | None = None


class OwnerCascadeResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    owner_id: str
    cascaded: bool
    operations_applied: int = 0
    identity_deleted: bool = False


@router.post("/users/deleted", response_model_by_alias=True)
def owner_deleted(event: OwnerDeletedEvent, service: CascadeService) -> OwnerCascadeResponse:
    """Cascade an owner-record deletion to the owner's dependents.

    Owners whose prior role is not ``client`` are acknowledged with
    ``cascaded=false`` and nothing is written.
    """
    result = service.handle_owner_deleted(event.owner_id, event.data)
    if result is None:
        return OwnerCascadeResponse(owner_id=event.owner_id, cascaded=False)
    return OwnerCascadeResponse(
        owner_id=event.owner_id,
        cascaded=True,
        operations_applied=result.operations_applied,
        identity_deleted=result.identity_deleted,
    )
