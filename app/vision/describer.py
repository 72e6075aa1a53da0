"""
Purpose:
- Turn a vision annotation record into a short English paragraph.
- Each FRAGMENTS entry looks at one section of the record and returns one sentence
  (ending in ". ") or None. Sections are independent and emitted in list order.

Error handling:
- generate_description() never raises. Any fault while parsing or composing returns
  ERROR_FALLBACK (no partial text); the exception is logged and passed to the
  caller-supplied report_error hook, if any.
"""

from __future__ import annotations
import logging
from decimal import Decimal
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
from .colors import color_name
from .schema import VisionAnnotations

logger = logging.getLogger(__name__)

EMPTY_FALLBACK = "This image could not be analyzed in detail. Please try uploading a clearer image."
ERROR_FALLBACK = "An image containing various elements. The system couldn't generate a more detailed description."

SCENE_CONTEXTS = {"indoor", "outdoor", "city", "rural", "landscape", "portrait", "closeup", "macro"}
MAX_SUBJECTS = 4
MAX_COLORS = 3
MAX_TEXT_CHARS = 100
MAX_WEB_ENTITIES = 3
WEB_ENTITY_MIN_SCORE = 0.5
HIGH_QUALITY = 0.8
LOW_QUALITY = 0.4

# emotion attribute -> word used in the sentence
EMOTIONS = {"joy": "happy", "sorrow": "sorrow", "anger": "anger", "surprise": "surprise"}
EXPRESSED = {"LIKELY", "VERY_LIKELY"}

Fragment = Callable[[VisionAnnotations], Optional[str]]
ErrorHook = Callable[[BaseException], None]

def _format_number(value: float) -> str:
    # shortest fixed-point form: 40 not 40.0, 0.00001 not 1e-05
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")

def _scene_context(a: VisionAnnotations) -> Optional[str]:
    for label in a.labels:
        context = label.description.lower()
        if context in SCENE_CONTEXTS:
            return f"This appears to be an {context} image. "
    return None

def _main_subjects(a: VisionAnnotations) -> Optional[str]:
    if not a.labels:
        return None
    subjects = ", ".join(label.description for label in a.labels[:MAX_SUBJECTS])
    return f"The image shows {subjects}. "

def _landmark(a: VisionAnnotations) -> Optional[str]:
    if not a.landmarks:
        return None
    landmark = a.landmarks[0]
    sentence = f"The image features {landmark.name}"
    coords = landmark.coordinates
    if coords is not None:
        lat, lng = coords.latitude, coords.longitude
        sentence += (
            f", located at approximately {_format_number(abs(lat))}° {'North' if lat >= 0 else 'South'}, "
            f"{_format_number(abs(lng))}° {'East' if lng >= 0 else 'West'}"
        )
    return sentence + ". "

def _faces(a: VisionAnnotations) -> Optional[str]:
    n = len(a.faces)
    if n == 0:
        return None
    sentence = "There is 1 person in the image. " if n == 1 else f"There are {n} people in the image. "

    # a face can count toward several emotions
    counts: Dict[str, int] = {emotion: 0 for emotion in EMOTIONS}
    for face in a.faces:
        for emotion in EMOTIONS:
            if getattr(face, emotion) in EXPRESSED:
                counts[emotion] += 1

    clauses = [
        f"{count} {'appears' if count == 1 else 'appear'} to be {EMOTIONS[emotion]}"
        for emotion, count in counts.items()
        if count > 0
    ]
    if clauses:
        sentence += f"Of these, {', '.join(clauses)}. "
    return sentence

def _objects(a: VisionAnnotations) -> Optional[str]:
    if not a.objects:
        return None
    # exact-name grouping, first-seen order
    counts: Dict[str, int] = {}
    for obj in a.objects:
        counts[obj.name] = counts.get(obj.name, 0) + 1
    groups = [
        f"{count} {name.lower()}s" if count > 1 else f"a {name.lower()}"
        for name, count in counts.items()
    ]
    return f"The image contains {', '.join(groups)}. "

def _logos(a: VisionAnnotations) -> Optional[str]:
    if not a.logos:
        return None
    noun = "logo" if len(a.logos) == 1 else "logos"
    names = ", ".join(logo.name for logo in a.logos)
    return f"The image contains the following {noun}: {names}. "

def _colors(a: VisionAnnotations) -> Optional[str]:
    if not a.colors:
        return None
    top = sorted(a.colors, key=lambda c: c.score, reverse=True)[:MAX_COLORS]
    names = [color_name(c.color.red, c.color.green, c.color.blue) for c in top]
    return f"The dominant colors in the image are {', '.join(names)}. "

def _text(a: VisionAnnotations) -> Optional[str]:
    if not a.text:
        return None
    # splitlines() also breaks on \r and \r\n
    text = " ".join(a.text[0].full_text.splitlines()).strip()
    if not text:
        return None
    if len(text) > MAX_TEXT_CHARS:
        return f'The image contains text including: "{text[:MAX_TEXT_CHARS]}...". '
    return f'The image contains text that reads: "{text}". '

def _web_entities(a: VisionAnnotations) -> Optional[str]:
    top = [e.description for e in a.web_entities if e.score > WEB_ENTITY_MIN_SCORE][:MAX_WEB_ENTITIES]
    if not top:
        return None
    return f"The image is associated with {', '.join(top)}. "

def _quality(a: VisionAnnotations) -> Optional[str]:
    # imageQualityAnnotation is not among the requested features, so this rarely fires
    if a.quality_score is None:
        return None
    if a.quality_score > HIGH_QUALITY:
        return "This is a high-quality image. "
    if a.quality_score < LOW_QUALITY:
        return "The image quality is relatively low. "
    return None

FRAGMENTS: List[Fragment] = [
    _scene_context,
    _main_subjects,
    _landmark,
    _faces,
    _objects,
    _logos,
    _colors,
    _text,
    _web_entities,
    _quality,
]

def generate_description(
    annotations: Union[VisionAnnotations, Mapping[str, Any]],
    report_error: Optional[ErrorHook] = None,
) -> str:
    """
    Compose a description from an annotation record or a raw annotate response.
    Always returns text; see module docstring for the fallback rules.
    """
    try:
        if not isinstance(annotations, VisionAnnotations):
            annotations = VisionAnnotations.from_response(annotations)
        parts = [fragment(annotations) for fragment in FRAGMENTS]
        description = "".join(p for p in parts if p)
    except Exception as e:
        logger.exception("Error generating description")
        if report_error is not None:
            try:
                report_error(e)
            except Exception:
                logger.exception("Error reporting hook failed")
        return ERROR_FALLBACK
    return description or EMPTY_FALLBACK
