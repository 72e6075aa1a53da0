from __future__ import annotations

import pytest
from pydantic import ValidationError

from app.vision.schema import VisionAnnotations


def test_from_response_maps_vendor_sections():
    rec = VisionAnnotations.from_response(
        {
            "labelAnnotations": [{"mid": "/m/01yrx", "description": "Cat", "score": 0.98, "topicality": 0.98}],
            "localizedObjectAnnotations": [{"name": "Cat", "boundingPoly": {"normalizedVertices": [{"x": 0.1}]}}],
            "faceAnnotations": [{"joyLikelihood": "LIKELY", "headwearLikelihood": "VERY_UNLIKELY"}],
            "imagePropertiesAnnotation": {
                "dominantColors": {"colors": [{"color": {"red": 12, "blue": 200}, "score": 0.4, "pixelFraction": 0.1}]}
            },
            "textAnnotations": [{"locale": "en", "description": "HELLO\nWORLD"}, {"description": "HELLO"}],
            "landmarkAnnotations": [
                {"description": "Big Ben", "locations": [{"latLng": {"latitude": 51.5, "longitude": -0.12}}]}
            ],
            "logoAnnotations": [{"description": "Acme", "score": 0.7}],
            "webDetection": {"webEntities": [{"entityId": "/m/x", "score": 0.9}], "bestGuessLabels": []},
            "imageQualityAnnotation": {"quality": 0.85},
        }
    )
    assert rec.labels[0].description == "Cat"
    assert rec.objects[0].bounding_box == {"normalizedVertices": [{"x": 0.1}]}
    assert rec.faces[0].joy == "LIKELY"
    assert rec.faces[0].sorrow == "UNKNOWN"
    assert (rec.colors[0].color.red, rec.colors[0].color.green, rec.colors[0].color.blue) == (12, 0, 200)
    assert rec.text[0].full_text == "HELLO\nWORLD"
    assert rec.landmarks[0].name == "Big Ben"
    assert rec.landmarks[0].coordinates.longitude == pytest.approx(-0.12)
    assert rec.logos[0].name == "Acme"
    assert rec.web_entities[0].description == ""
    assert rec.quality_score == pytest.approx(0.85)


def test_from_response_tolerates_every_section_missing():
    rec = VisionAnnotations.from_response({})
    assert rec.labels == [] and rec.colors == [] and rec.web_entities == []
    assert rec.quality_score is None


def test_from_response_tolerates_null_sections():
    rec = VisionAnnotations.from_response({"imagePropertiesAnnotation": {"dominantColors": None}, "webDetection": None})
    assert rec.colors == []
    assert rec.web_entities == []


def test_landmark_without_locations_has_no_coordinates():
    rec = VisionAnnotations.from_response({"landmarkAnnotations": [{"description": "Somewhere"}]})
    assert rec.landmarks[0].coordinates is None


def test_label_without_description_is_rejected():
    with pytest.raises(ValidationError):
        VisionAnnotations.from_response({"labelAnnotations": [{"score": 0.5}]})
