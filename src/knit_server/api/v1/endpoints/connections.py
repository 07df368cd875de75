# src/knit_server/api/v1/endpoints/connections.py
"""Connection request endpoints for the Knit API."""

from fastapi import APIRouter, HTTPException, status

from knit_server.api.v1.dependencies import CurrentUserDep, GatewayDep
from knit_server.errors import ConflictError, InvalidOperationError, NotFoundError
from knit_server.schemas.connection import (
    ConnectionCreate,
    ConnectionDecision,
    ConnectionResponse,
)

router = APIRouter(prefix="/connections", tags=["connections"])


@router.post("/", response_model=ConnectionResponse, status_code=status.HTTP_201_CREATED)
async def send_connection_request(
    request_data: ConnectionCreate,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> ConnectionResponse:
    """Ask another member to connect."""
    try:
        return await gateway.send_connection_request(
            current_user.id,
            request_data.to_user_id,
            request_data.message,
        )
    except InvalidOperationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc


@router.get("/", response_model=list[ConnectionResponse])
async def list_connections(
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> list[ConnectionResponse]:
    """List connections the caller sent or received."""
    return await gateway.list_connections(current_user.id)


@router.get("/with/{user_id}")
async def check_connection(
    user_id: str,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> dict[str, bool]:
    """Report whether the caller is connected (or pending) with ``user_id``."""
    connected = await gateway.check_existing_connection(current_user.id, user_id)
    return {"connected": connected}


@router.post("/{connection_id}/respond", response_model=ConnectionResponse)
async def respond_to_connection(
    connection_id: str,
    decision: ConnectionDecision,
    current_user: CurrentUserDep,
    gateway: GatewayDep,
) -> ConnectionResponse:
    """Accept or decline a pending request addressed to the caller."""
    try:
        return await gateway.respond_to_connection(
            connection_id,
            current_user.id,
            decision.accept,
        )
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except InvalidOperationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
