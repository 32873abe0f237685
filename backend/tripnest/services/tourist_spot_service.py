"""
TripNest Backend — Tourist Spot Service (Persistence Adapter)
===============================================================

What:  Translates each API operation into exactly one call on the tourist
       spot collection and turns the outcome into a result or a typed error.
How:   Receives the collection at construction time (injected per request by
       the route dependency). Store failures are wrapped in DatabaseError with
       the operation's client-facing message; empty results become
       NotFoundError; the HTTP boundary maps each error's kind to a status.
Who:   Called by routes/tourist_spots.py.

Operation → store call:
    list_spots      find({})
    get_spot        find_one({_id})
    create_spot     insert_one(document)
    update_spot     update_one({_id}, {$set: fields})
    delete_spot     delete_one({_id})
    list_by_email   find({email})
"""

import logging
from typing import Any, List

from bson import ObjectId
from bson.errors import InvalidId

from tripnest.exceptions import (
    BadRequestError,
    DatabaseError,
    InvalidIdentifierError,
    NotFoundError,
)
from tripnest.schemas.tourist_spot import (
    DeleteAcknowledgment,
    Document,
    InsertAcknowledgment,
    TouristSpotRef,
    UpdateAcknowledgment,
    serialize_document,
    serialize_documents,
)

logger = logging.getLogger(__name__)

# Client-facing messages for internal errors, one per operation
LIST_ERROR = "Error fetching tourist spots"
GET_ERROR = "Error fetching tourist spot"
CREATE_ERROR = "Error adding tourist spot"
UPDATE_ERROR = "Error updating tourist spot"
DELETE_ERROR = "Error deleting tourist spot"
MY_LIST_ERROR = "Error fetching user list"


def parse_object_id(raw: str, message: str) -> ObjectId:
    """
    Parse a path id into an ObjectId.

    Raises:
        InvalidIdentifierError carrying `message` if `raw` is not 24 hex chars.
    """
    try:
        return ObjectId(raw)
    except (InvalidId, TypeError):
        raise InvalidIdentifierError(message=message, identifier=raw)


def _without_id(document: Document) -> Document:
    """Copy of a client payload minus `_id`; identifiers are store-assigned and immutable."""
    return {key: value for key, value in document.items() if key != "_id"}


class TouristSpotService:
    """
    Persistence adapter for the tourist spot collection.

    Error Handling Strategy:
        Our own exceptions propagate untouched. Anything else raised by the
        driver (PyMongoError, network errors, server-side write errors) is
        logged with its stack trace and re-raised as DatabaseError.
    """

    def __init__(self, collection: Any):
        self.collection = collection

    async def list_spots(self) -> List[Document]:
        """Return every tourist spot in the collection's natural order."""
        try:
            documents = await self.collection.find({}).to_list(length=None)
        except Exception as e:
            logger.error("Error fetching tourist spots: %s", str(e), exc_info=True)
            raise DatabaseError(message=LIST_ERROR, context={"error_type": type(e).__name__})

        return serialize_documents(documents)

    async def get_spot(self, spot_id: str) -> Document:
        """
        Retrieve a single tourist spot.

        Raises:
            InvalidIdentifierError: spot_id is not an ObjectId (→ 500)
            NotFoundError: no document has that id (→ 404)
            DatabaseError: the lookup failed (→ 500)
        """
        oid = parse_object_id(spot_id, GET_ERROR)
        try:
            document = await self.collection.find_one({"_id": oid})
        except Exception as e:
            logger.error("Error fetching tourist spot %s: %s", spot_id, str(e), exc_info=True)
            raise DatabaseError(message=GET_ERROR, context={"spot_id": spot_id})

        if document is None:
            raise NotFoundError(message="Tourist spot not found", context={"spot_id": spot_id})

        return serialize_document(document)

    async def create_spot(self, document: Document) -> InsertAcknowledgment:
        """
        Insert a new tourist spot.

        The payload is stored as given apart from `_id`, which is always
        generated by the store. The caller's dict is not mutated.
        """
        new_spot = _without_id(document)
        try:
            result = await self.collection.insert_one(new_spot)
        except Exception as e:
            logger.error("Error adding tourist spot: %s", str(e), exc_info=True)
            raise DatabaseError(message=CREATE_ERROR, context={"error_type": type(e).__name__})

        ack = InsertAcknowledgment.from_result(result)
        logger.info(
            "Tourist spot created: %s (owner=%s)",
            ack.inserted_id,
            TouristSpotRef.from_document(document).email or "-",
        )
        return ack

    async def update_spot(self, spot_id: str, fields: Document) -> UpdateAcknowledgment:
        """
        Partially merge `fields` into an existing tourist spot.

        A missing id and an update that changes nothing both raise
        NotFoundError; the store reports them the same way (modified 0).
        """
        oid = parse_object_id(spot_id, UPDATE_ERROR)
        changes = _without_id(fields)
        if not changes:
            raise NotFoundError(
                message="Tourist spot not found or no changes made",
                context={"spot_id": spot_id, "reason": "empty update"},
            )

        try:
            result = await self.collection.update_one({"_id": oid}, {"$set": changes})
        except Exception as e:
            logger.error("Error updating tourist spot %s: %s", spot_id, str(e), exc_info=True)
            raise DatabaseError(message=UPDATE_ERROR, context={"spot_id": spot_id})

        if result.modified_count == 0:
            raise NotFoundError(
                message="Tourist spot not found or no changes made",
                context={"spot_id": spot_id, "matched_count": result.matched_count},
            )

        logger.info("Tourist spot updated: %s (fields=%s)", spot_id, sorted(changes))
        return UpdateAcknowledgment.from_result(result)

    async def delete_spot(self, spot_id: str) -> DeleteAcknowledgment:
        oid = parse_object_id(spot_id, DELETE_ERROR)
        try:
            result = await self.collection.delete_one({"_id": oid})
        except Exception as e:
            logger.error("Error deleting tourist spot %s: %s", spot_id, str(e), exc_info=True)
            raise DatabaseError(message=DELETE_ERROR, context={"spot_id": spot_id})

        if result.deleted_count == 0:
            raise NotFoundError(message="Tourist spot not found", context={"spot_id": spot_id})

        logger.info("Tourist spot deleted: %s", spot_id)
        return DeleteAcknowledgment.from_result(result)

    async def list_by_email(self, email: str) -> List[Document]:
        """
        Return the tourist spots owned by `email`.

        Matching is exact after trimming surrounding whitespace (no case folding).

        Raises:
            BadRequestError: email is blank; the store is not queried (→ 400)
            NotFoundError: no spot has that email (→ 404)
            DatabaseError: the query failed (→ 500)
        """
        owner = (email or "").strip()
        if not owner:
            raise BadRequestError(message="Email parameter is required", field="email")

        query = {"email": owner}
        logger.debug("My list query: %s", query)
        try:
            documents = await self.collection.find(query).to_list(length=None)
        except Exception as e:
            logger.error("Error fetching user list: %s", str(e), exc_info=True)
            raise DatabaseError(message=MY_LIST_ERROR, context={"email": owner})

        matches = [doc for doc in documents if TouristSpotRef.from_document(doc).email == owner]
        logger.debug("My list result: %d tourist spot(s) for %s", len(matches), owner)

        if not matches:
            raise NotFoundError(
                message="No tourist spots found for this email",
                context={"email": owner},
            )

        return serialize_documents(matches)
