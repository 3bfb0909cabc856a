"""Clients API endpoints."""

from fastapi import APIRouter, Depends, Query, Request, Response, status

from policy_management.api.deps import get_client_repository
from policy_management.api.schemas.base import ErrorDetail, ValidationProblem
from policy_management.api.schemas.clients import (
    ClientCreateRequest,
    ClientResponse,
    ClientUpdateRequest,
)
from policy_management.repositories.clients import ClientRepository

router = APIRouter(
    prefix="/api/clients",
    tags=["clients"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationProblem},
        status.HTTP_404_NOT_FOUND: {"model": ErrorDetail},
    },
)


@router.get("", response_model=list[ClientResponse])
async def list_clients(
    search: str | None = Query(default=None),
    clients: ClientRepository = Depends(get_client_repository),
) -> list[ClientResponse]:
    """List clients ordered by name, optionally filtered by a search term."""
    rows = await clients.list_clients(search)
    return [ClientResponse.model_validate(row) for row in rows]


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    clients: ClientRepository = Depends(get_client_repository),
) -> ClientResponse:
    """Get client by ID."""
    return ClientResponse.model_validate(await clients.get(client_id))


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    payload: ClientCreateRequest,
    request: Request,
    response: Response,
    clients: ClientRepository = Depends(get_client_repository),
) -> ClientResponse:
    """Create a new client."""
    client = await clients.create(
        identification_number=payload.identification_number,
        full_name=payload.full_name,
        email=payload.email,
        phone=payload.phone,
    )
    response.headers["Location"] = str(request.url_for("get_client", client_id=client.id))
    return ClientResponse.model_validate(client)


@router.put(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def update_client(
    client_id: int,
    payload: ClientUpdateRequest,
    clients: ClientRepository = Depends(get_client_repository),
) -> Response:
    """Overwrite all client fields."""
    await clients.update(
        client_id,
        identification_number=payload.identification_number,
        full_name=payload.full_name,
        email=payload.email,
        phone=payload.phone,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_client(
    client_id: int,
    clients: ClientRepository = Depends(get_client_repository),
) -> Response:
    """Delete a client together with all of its policies."""
    await clients.delete(client_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
