"""
TripNest Backend — Tourist Spot Route Handlers
================================================

What:  CRUD routes for /tourist-spot and the owner lookup /my-list/{email}.
How:   Each handler parses path/body parameters, makes one TouristSpotService
       call and returns its result. Errors raised by the service propagate to
       the global handler registered in main.py, which picks the status code.
Who:   Called by the TripNest frontend.

Route Inventory:
    GET    /tourist-spot          list all tourist spots
    GET    /tourist-spot/{id}     get one tourist spot
    POST   /tourist-spot          create a tourist spot (201)
    PUT    /tourist-spot/{id}     partial update
    DELETE /tourist-spot/{id}     delete
    GET    /my-list/{email}       tourist spots owned by an email
"""

import json
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request

from tripnest.database import MongoStore, get_store
from tripnest.exceptions import MalformedBodyError
from tripnest.schemas.tourist_spot import (
    DeleteAcknowledgment,
    Document,
    ErrorResponse,
    InsertAcknowledgment,
    UpdateAcknowledgment,
)
from tripnest.services.tourist_spot_service import (
    CREATE_ERROR,
    UPDATE_ERROR,
    TouristSpotService,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Tourist Spots"])

# Request body documentation; bodies are read raw so any JSON object is accepted
_DOCUMENT_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": {"type": "object", "additionalProperties": True},
                "example": {"name": "Beach", "email": "a@x.com"},
            }
        },
    }
}


def get_tourist_spot_service(store: MongoStore = Depends(get_store)) -> TouristSpotService:
    return TouristSpotService(store.collection)


async def read_document(request: Request, message: str) -> Document:
    """
    Read the request body as a JSON object.

    Raises:
        MalformedBodyError (→ 500) with the route's error message if the body
        is missing, is not valid JSON, or is JSON but not an object.
    """
    raw = await request.body()
    try:
        payload: Any = json.loads(raw)
    except (ValueError, UnicodeDecodeError) as e:
        raise MalformedBodyError(message=message, context={"reason": str(e)})

    if not isinstance(payload, dict):
        raise MalformedBodyError(
            message=message,
            context={"reason": f"expected a JSON object, got {type(payload).__name__}"},
        )
    return payload


@router.get(
    "/tourist-spot",
    response_model=List[Dict[str, Any]],
    responses={500: {"description": "Store failure", "model": ErrorResponse}},
    summary="List all tourist spots",
)
async def list_tourist_spots(
    service: TouristSpotService = Depends(get_tourist_spot_service),
) -> List[Document]:
    return await service.list_spots()


@router.get(
    "/tourist-spot/{spot_id}",
    response_model=Dict[str, Any],
    responses={
        404: {"description": "Tourist spot not found", "model": ErrorResponse},
        500: {"description": "Malformed id or store failure", "model": ErrorResponse},
    },
    summary="Get a tourist spot by ID",
)
async def get_tourist_spot(
    spot_id: str,
    service: TouristSpotService = Depends(get_tourist_spot_service),
) -> Document:
    return await service.get_spot(spot_id)


@router.post(
    "/tourist-spot",
    status_code=201,
    response_model=InsertAcknowledgment,
    responses={500: {"description": "Malformed body or store failure", "model": ErrorResponse}},
    summary="Add a tourist spot",
    description="Stores the JSON body as a new tourist spot. The id is generated by the store.",
    openapi_extra=_DOCUMENT_BODY,
)
async def create_tourist_spot(
    request: Request,
    service: TouristSpotService = Depends(get_tourist_spot_service),
) -> InsertAcknowledgment:
    document = await read_document(request, CREATE_ERROR)
    return await service.create_spot(document)


@router.put(
    "/tourist-spot/{spot_id}",
    response_model=UpdateAcknowledgment,
    responses={
        404: {"description": "Tourist spot not found or no changes made", "model": ErrorResponse},
        500: {"description": "Malformed id, body or store failure", "model": ErrorResponse},
    },
    summary="Update a tourist spot",
    description="Overwrites only the fields present in the body; other fields are untouched.",
    openapi_extra=_DOCUMENT_BODY,
)
async def update_tourist_spot(
    spot_id: str,
    request: Request,
    service: TouristSpotService = Depends(get_tourist_spot_service),
) -> UpdateAcknowledgment:
    fields = await read_document(request, UPDATE_ERROR)
    return await service.update_spot(spot_id, fields)


@router.delete(
    "/tourist-spot/{spot_id}",
    response_model=DeleteAcknowledgment,
    responses={
        404: {"description": "Tourist spot not found", "model": ErrorResponse},
        500: {"description": "Malformed id or store failure", "model": ErrorResponse},
    },
    summary="Delete a tourist spot",
)
async def delete_tourist_spot(
    spot_id: str,
    service: TouristSpotService = Depends(get_tourist_spot_service),
) -> DeleteAcknowledgment:
    return await service.delete_spot(spot_id)


@router.get(
    "/my-list/{email}",
    response_model=List[Dict[str, Any]],
    responses={
        400: {"description": "Email parameter is required", "model": ErrorResponse},
        404: {"description": "No tourist spots found for this email", "model": ErrorResponse},
        500: {"description": "Store failure", "model": ErrorResponse},
    },
    summary="List the tourist spots added by a user",
)
async def list_my_tourist_spots(
    email: str,
    service: TouristSpotService = Depends(get_tourist_spot_service),
) -> List[Document]:
    logger.debug("Email parameter: %r", email)
    return await service.list_by_email(email)


@router.get("/my-list", include_in_schema=False)
@router.get("/my-list/", include_in_schema=False)
async def list_my_tourist_spots_without_email(
    service: TouristSpotService = Depends(get_tourist_spot_service),
) -> List[Document]:
    # No email segment at all; the service answers 400 without querying
    return await service.list_by_email("")
