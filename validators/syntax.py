import json
import math
from dataclasses import dataclass, field

from scene import DIRECTIVE_KINDS, DRAWABLE_KINDS

_KNOWN_TYPES = {kind.value for kind in DRAWABLE_KINDS | DIRECTIVE_KINDS}
_CAMERA_TYPES = {kind.value for kind in DIRECTIVE_KINDS}


@dataclass
class SyntaxReport:
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def check_elements(text: str) -> SyntaxReport:
    """Check an elements JSON string before it is handed to the renderer.

    Only malformed JSON, a non-array top level and non-object entries are
    errors. Suspicious but renderable input (duplicate ids, unknown types,
    odd camera sizes) is reported as warnings and still rendered.
    """
    try:
        parsed = json.loads(text)
    except (TypeError, ValueError) as exc:
        return SyntaxReport(
            valid=False,
            errors=[
                f"Invalid JSON in elements: {exc}. "
                "Ensure no comments, no trailing commas, and proper quoting."
            ],
        )

    if not isinstance(parsed, list):
        return SyntaxReport(valid=False, errors=["elements must be a JSON array."])

    errors: list[str] = []
    warnings: list[str] = []
    seen_ids: set[str] = set()
    cameras = 0

    for index, item in enumerate(parsed):
        if not isinstance(item, dict):
            errors.append(f"element at index {index} is not a JSON object.")
            continue

        el_type = item.get("type")
        if el_type not in _KNOWN_TYPES:
            warnings.append(f"element at index {index} has unknown type {el_type!r}.")

        if el_type in _CAMERA_TYPES:
            cameras += 1
            warnings.extend(_check_camera(index, item))
            continue

        el_id = item.get("id")
        if el_id is not None:
            if str(el_id) in seen_ids:
                warnings.append(f"duplicate element id {el_id!r}; bindings to it are ambiguous.")
            seen_ids.add(str(el_id))

    if cameras > 1:
        warnings.append(f"{cameras} camera updates found; only the last one sets the viewport.")

    return SyntaxReport(valid=not errors, errors=errors, warnings=warnings)


def _check_camera(index: int, item: dict) -> list[str]:
    warnings = []
    for key in ("width", "height"):
        value = item.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            warnings.append(f"camera update at index {index} has no numeric {key}.")
        elif (isinstance(value, float) and not math.isfinite(value)) or value <= 0:
            warnings.append(f"camera update at index {index} has non-positive {key} {value!r}.")
    return warnings
