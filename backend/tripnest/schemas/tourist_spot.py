"""
TripNest Backend — Tourist Spot Schemas
=========================================

What:  The document type, its wire serialization, and the pydantic models
       for mutation acknowledgments, errors and health.
How:   Tourist spots are schema-less: they travel as plain dicts. Only the
       fields this service relies on (`_id`, `email`) get a typed projection,
       TouristSpotRef, used internally.

Wire format:
    Documents are returned as stored, with every ObjectId rendered as its
    24-character hex string:
        {"_id": "665f1c2e9b1e8a3d4c5b6a79", "name": "Beach", "email": "a@x.com"}

    Acknowledgments use the camelCase field names clients of the previous
    service already parse:
        {"acknowledged": true, "insertedId": "665f1c2e9b1e8a3d4c5b6a79"}
"""

from typing import Any, Dict, List, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field, field_validator

# A stored tourist spot. No schema is enforced.
Document = Dict[str, Any]


def _to_wire(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: _to_wire(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_to_wire(item) for item in value]
    return value


def serialize_document(document: Document) -> Document:
    """Return a JSON-ready copy of a stored document (ObjectIds → hex strings)."""
    return _to_wire(document)


def serialize_documents(documents: List[Document]) -> List[Document]:
    return [serialize_document(doc) for doc in documents]


class TouristSpotRef(BaseModel):
    """
    What:  Typed projection of the two fields the service reads from a document.
    Who:   TouristSpotService, for log lines and email match checks.

    Any other field is ignored. A non-string email projects to None rather
    than failing, since documents are not validated on the way in.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Optional[str] = Field(default=None, alias="_id")
    email: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @field_validator("email", mode="before")
    @classmethod
    def ignore_non_string_email(cls, v: Any) -> Optional[str]:
        return v if isinstance(v, str) else None

    @classmethod
    def from_document(cls, document: Document) -> "TouristSpotRef":
        return cls.model_validate(document)


# ══════════════════════════════════════════════════════════════════════════
# Acknowledgments — outcome of a mutation
# ══════════════════════════════════════════════════════════════════════════


class InsertAcknowledgment(BaseModel):
    """Returned by POST /tourist-spot with HTTP 201."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool = Field(description="Whether the write was acknowledged")
    inserted_id: str = Field(
        alias="insertedId",
        description="Store-generated identifier of the new tourist spot",
    )

    @classmethod
    def from_result(cls, result: Any) -> "InsertAcknowledgment":
        """Build from a pymongo InsertOneResult."""
        return cls(acknowledged=result.acknowledged, inserted_id=str(result.inserted_id))


class UpdateAcknowledgment(BaseModel):
    """Returned by PUT /tourist-spot/{id}."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool
    matched_count: int = Field(alias="matchedCount")
    modified_count: int = Field(alias="modifiedCount")
    upserted_id: Optional[str] = Field(default=None, alias="upsertedId")

    @classmethod
    def from_result(cls, result: Any) -> "UpdateAcknowledgment":
        """Build from a pymongo UpdateResult."""
        upserted = result.upserted_id
        return cls(
            acknowledged=result.acknowledged,
            matched_count=result.matched_count,
            modified_count=result.modified_count,
            upserted_id=str(upserted) if upserted is not None else None,
        )


class DeleteAcknowledgment(BaseModel):
    """Returned by DELETE /tourist-spot/{id}."""

    model_config = ConfigDict(populate_by_name=True)

    acknowledged: bool
    deleted_count: int = Field(alias="deletedCount")

    @classmethod
    def from_result(cls, result: Any) -> "DeleteAcknowledgment":
        """Build from a pymongo DeleteResult."""
        return cls(acknowledged=result.acknowledged, deleted_count=result.deleted_count)


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body returned for every 4xx/5xx produced by this service.

    Example:
        {
            "error": "not_found",
            "message": "Tourist spot not found",
            "request_id": "1a2b3c4d"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""

    status: str = Field(description="healthy or unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
