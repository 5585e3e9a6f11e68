"""
Record Shop Backend — Catalog Request/Response Schemas
========================================================

What:  Pydantic models defining the catalog API contract.
How:   FastAPI validates request bodies against RecordInput and serializes
       service results through the response models.

Wire shape vs storage shape:
    RecordInput          what a client may send (id and timestamps are ignored)
    RecordResponse       public view used by every list/lookup endpoint
    RecordWriteResponse  RecordResponse + created_at/updated_at, returned by
                         create and update
    DetailResponse       record title, media metadata and ordered TrackInfo list

RecordInput keeps `release_year` untyped on purpose: a non-integer value must
reach RecordValidator and come back as its own "must be an integer" line
instead of being rejected by schema parsing with a 422.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator


class RecordInput(BaseModel):
    """
    Body of POST /records and PUT /records/{id}.

    Update is a full replace: every field is sent every time, and a field
    left out is treated as empty.
    """
    title: str = Field(default="", description="Album title")
    artist: str = Field(default="", description="Performing artist")
    genre: str = Field(default="", description="Top-level genre, e.g. 'Rock'")
    style: str = Field(default="", description="Sub-style, e.g. 'Art Rock'")
    release_year: Any = Field(default=0, description="Four-digit release year")

    @field_validator("title", "artist", "genre", "style", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class RecordResponse(BaseModel):
    id: int = Field(description="Record identifier, used for update and delete")
    title: str
    artist: str
    genre: str
    style: str
    release_year: int

    model_config = {"from_attributes": True}


class RecordWriteResponse(RecordResponse):
    created_at: datetime = Field(description="When the record was created (UTC)")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="When the record was last replaced; null until the first update",
    )


class TrackInfo(BaseModel):
    track_number: int
    track_title: str


class DetailResponse(BaseModel):
    """
    What:  A record's media metadata and its ordered track list.
    Who:   Returned by GET /records/details/{title}.

    An unknown title yields this model with empty strings and no tracks,
    which looks the same as a record whose detail has no tracks.
    """
    record_title: str = ""
    album_image_url: str = ""
    youtube_title: str = ""
    youtube_video_id: str = ""
    tracks: List[TrackInfo] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.tracks
