"""
Purpose:
- Pydantic models for the annotation record the describer consumes.
- Element models accept the vision service's JSON field names (aliases) as well as
  the python names, so tests and callers can build them either way.
- VisionAnnotations.from_response() maps one `responses[i]` object onto the record.
"""

from __future__ import annotations
from typing import Any, List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field

# Ordinal scale used for face attributes, lowest first
LIKELIHOODS = ("UNKNOWN", "VERY_UNLIKELY", "UNLIKELY", "POSSIBLE", "LIKELY", "VERY_LIKELY")

class _Annotation(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

class LabelAnnotation(_Annotation):
    description: str
    score: float = 0.0

class ObjectAnnotation(_Annotation):
    name: str
    bounding_box: Optional[dict[str, Any]] = Field(default=None, alias="boundingPoly")

class FaceAnnotation(_Annotation):
    joy: str = Field(default="UNKNOWN", alias="joyLikelihood")
    sorrow: str = Field(default="UNKNOWN", alias="sorrowLikelihood")
    anger: str = Field(default="UNKNOWN", alias="angerLikelihood")
    surprise: str = Field(default="UNKNOWN", alias="surpriseLikelihood")

class RGB(_Annotation):
    # the service omits zero-valued channels
    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

class ColorInfo(_Annotation):
    color: RGB = Field(default_factory=RGB)
    score: float = 0.0

class TextAnnotation(_Annotation):
    full_text: str = Field(default="", alias="description")

class LatLng(_Annotation):
    latitude: float = 0.0
    longitude: float = 0.0

class LocationInfo(_Annotation):
    lat_lng: LatLng = Field(alias="latLng")

class LandmarkAnnotation(_Annotation):
    name: str = Field(alias="description")
    locations: List[LocationInfo] = []

    @property
    def coordinates(self) -> Optional[LatLng]:
        return self.locations[0].lat_lng if self.locations else None

class LogoAnnotation(_Annotation):
    name: str = Field(alias="description")

class WebEntity(_Annotation):
    description: str = ""
    score: float = 0.0

class VisionAnnotations(_Annotation):
    labels: List[LabelAnnotation] = []
    objects: List[ObjectAnnotation] = []
    faces: List[FaceAnnotation] = []
    colors: List[ColorInfo] = []
    text: List[TextAnnotation] = []
    landmarks: List[LandmarkAnnotation] = []
    logos: List[LogoAnnotation] = []
    web_entities: List[WebEntity] = []
    quality_score: Optional[float] = None

    @classmethod
    def from_response(cls, response: Mapping[str, Any]) -> "VisionAnnotations":
        """
        Build the record from one annotate response object. Every section may be absent.
        Raises pydantic.ValidationError on malformed sections.
        """
        props = response.get("imagePropertiesAnnotation") or {}
        web = response.get("webDetection") or {}
        quality = response.get("imageQualityAnnotation") or {}
        return cls.model_validate({
            "labels": response.get("labelAnnotations") or [],
            "objects": response.get("localizedObjectAnnotations") or [],
            "faces": response.get("faceAnnotations") or [],
            "colors": (props.get("dominantColors") or {}).get("colors") or [],
            "text": response.get("textAnnotations") or [],
            "landmarks": response.get("landmarkAnnotations") or [],
            "logos": response.get("logoAnnotations") or [],
            "web_entities": web.get("webEntities") or [],
            "quality_score": quality.get("quality"),
        })
