"""Pydantic models for the NASA Open API payloads (APOD, NeoWs feed, DONKI FLR)."""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ApodItem(BaseModel):
    date: str
    title: str = ""
    url: str = ""
    hdurl: Optional[str] = None
    explanation: str = ""
    media_type: str = "image"
    thumbnail_url: Optional[str] = None


class DiameterRange(BaseModel):
    estimated_diameter_min: float = 0.0
    estimated_diameter_max: float = 0.0


class EstimatedDiameter(BaseModel):
    kilometers: DiameterRange = Field(default_factory=DiameterRange)


class MissDistance(BaseModel):
    # NeoWs ships numbers as strings
    kilometers: str = ""


class RelativeVelocity(BaseModel):
    kilometers_per_second: str = ""


class CloseApproach(BaseModel):
    close_approach_date: str
    miss_distance: MissDistance = Field(default_factory=MissDistance)
    relative_velocity: RelativeVelocity = Field(default_factory=RelativeVelocity)
    orbiting_body: str = ""


class NearEarthObject(BaseModel):
    id: str
    name: str
    is_potentially_hazardous_asteroid: bool = False
    estimated_diameter: EstimatedDiameter = Field(default_factory=EstimatedDiameter)
    close_approach_data: List[CloseApproach] = Field(default_factory=list)


class NeoFeed(BaseModel):
    element_count: int = 0
    near_earth_objects: Dict[str, List[NearEarthObject]] = Field(default_factory=dict)


class TaggedNeo(NearEarthObject):
    """A feed object tagged with the feed day it was listed under."""

    date: str


class SolarFlareEvent(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    flr_id: str = Field(alias="flrID")
    begin_time: str = Field(alias="beginTime")
    peak_time: Optional[str] = Field(default=None, alias="peakTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")
    class_type: Optional[str] = Field(default=None, alias="classType")
    source_location: Optional[str] = Field(default=None, alias="sourceLocation")
    link: Optional[str] = None
