"""
Purpose:
- Send one image to the Google Cloud Vision `images:annotate` endpoint and return
  the annotation object for that image.

Notes:
- Requires: settings.vision_api_key (VISION_API_KEY in .env or env)
- One request per upload; no retries. Callers translate the errors below into HTTP.
"""

from __future__ import annotations
import base64
import logging
from typing import Any, Dict, List, Mapping, Optional
import httpx
from ..core.settings import settings

logger = logging.getLogger(__name__)

class VisionConfigError(RuntimeError):
    """The service is not configured to call the vision API (e.g. no API key)."""

class VisionAPIError(RuntimeError):
    """The vision API call failed or returned an error payload."""

    def __init__(self, message: str, status_code: Optional[int] = None, payload: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

def _feature_list(features: Mapping[str, int]) -> List[Dict[str, Any]]:
    return [{"type": kind, "maxResults": max_results} for kind, max_results in features.items()]

def build_annotate_request(image_bytes: bytes, features: Mapping[str, int]) -> Dict[str, Any]:
    return {
        "requests": [
            {
                "image": {"content": base64.b64encode(image_bytes).decode("ascii")},
                "features": _feature_list(features),
            }
        ]
    }

class VisionClient:
    def __init__(
        self,
        api_key: Optional[str],
        endpoint: str = settings.vision_endpoint,
        features: Optional[Mapping[str, int]] = None,
        timeout: float = settings.vision_timeout_s,
        http: Optional[httpx.Client] = None,
    ):
        self.api_key = api_key
        self.endpoint = endpoint
        self.features = dict(features if features is not None else settings.vision_features)
        self.timeout = timeout
        self._http = http

    def annotate(self, image_bytes: bytes) -> Dict[str, Any]:
        """
        Return `responses[0]` of the annotate call ({} if the service sent none).
        """
        if not self.api_key:
            raise VisionConfigError("VISION_API_KEY is not defined")

        body = build_annotate_request(image_bytes, self.features)
        try:
            if self._http is not None:
                r = self._http.post(self.endpoint, params={"key": self.api_key}, json=body, timeout=self.timeout)
            else:
                r = httpx.post(self.endpoint, params={"key": self.api_key}, json=body, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise VisionAPIError(f"Vision API request failed: {e!r}") from e

        try:
            data = r.json()
        except ValueError:
            data = {"raw": r.text[:500]}

        if r.is_error:
            raise VisionAPIError(f"Vision API error: {data}", status_code=r.status_code, payload=data)
        if not isinstance(data, dict):
            raise VisionAPIError("Vision API returned an unexpected payload", status_code=r.status_code, payload=data)

        responses = data.get("responses") or []
        response = responses[0] if responses else {}
        # per-image failures come back with HTTP 200 and an "error" object
        if response.get("error"):
            raise VisionAPIError(f"Vision API error: {response['error']}", status_code=r.status_code, payload=response)

        logger.info("Vision API response received (%d sections)", len(response))
        return response

def get_vision_client() -> VisionClient:
    return VisionClient(api_key=settings.vision_api_key)
