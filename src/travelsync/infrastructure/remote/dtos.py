# pylint: disable=missing-module-docstring,line-too-long
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from travelsync.domain.models import MAX_ID, Destination, Trip


class TripDTO(BaseModel):
    """
    Wire shape of a trip in the remote API.

    Every field is required; a single bad item fails the whole list.
    """

    id: int = Field(..., ge=1, le=MAX_ID, description="Remote trip id")
    destination_id: int = Field(..., ge=1, le=MAX_ID, alias="destinationId", description="Owning destination id")
    title: str = Field(..., description="Trip title")
    start_date: str = Field(..., alias="startDate", description="ISO start date")
    end_date: str = Field(..., alias="endDate", description="ISO end date")
    model_config = ConfigDict(populate_by_name=True)

    def to_entity(self) -> Trip:
        """Convert to the domain model."""
        return Trip(
            id=self.id,
            destination_id=self.destination_id,
            title=self.title,
            start_date=self.start_date,
            end_date=self.end_date,
        )


TRIP_LIST = TypeAdapter(List[TripDTO])


class DestinationPayload(BaseModel):
    """
    Body sent when creating or updating a destination.

    The API stores an image URL, not image bytes, so a placeholder URL is sent
    whenever the destination has (or, on create, may have) an image.
    """

    city: str
    country: str
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, alias="imageUrl")
    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def for_create(cls, destination: Destination, placeholder_image_url: str) -> "DestinationPayload":
        """POST body: description defaults to '' and a placeholder image is always set."""
        return cls(
            city=destination.city,
            country=destination.country,
            description=destination.description or "",
            image_url=placeholder_image_url,
        )

    @classmethod
    def for_update(cls, destination: Destination, placeholder_image_url: str) -> "DestinationPayload":
        """PUT body: optional fields only when the destination has them."""
        return cls(
            city=destination.city,
            country=destination.country,
            description=destination.description,
            image_url=placeholder_image_url if destination.image_data is not None else None,
        )

    def to_json(self) -> Dict[str, Any]:
        """JSON body using remote field names, without unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)
