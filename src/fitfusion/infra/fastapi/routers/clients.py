"""Client deletion REST API router.

The request path of the cascade: a trainer deletes one of their clients,
and the profile, owner record, routines and credential go with it.
"""

# NOTE: Do NOT use ``from __future__ import annotations`` here.
# FastAPI needs the dependency annotations at runtime.

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, Field

from fitfusion.infra.fastapi.dependencies import CallerId, CascadeService

router = APIRouter(prefix="/clients", tags=["clients"])


# -- Request / Response models ------------------------------------------------


class DeleteClientRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Optional so a missing id is reported after the authentication check.
    client_id: str | None = Field(default=None, alias="clientId")


class DeleteClientResponse(BaseModel):
    success: bool
    message: str


# -- Endpoints ----------------------------------------------------------------


@router.post("/delete")
def delete_client(
    caller_id: CallerId,
    service: CascadeService,
    body: DeleteClientRequest | None = None,
) -> DeleteClientResponse:
    """Delete a client and everything that depends on it.

    Returns ``success=True`` once the store-side cascade has committed, even
    if credential removal is still pending.
    """
    # No body at all still goes through the guard, so authentication wins.
    client_id = body.client_id if body is not None else None
    result = service.delete_client(caller_id, client_id)
    return DeleteClientResponse(success=result.success, message=result.message)
