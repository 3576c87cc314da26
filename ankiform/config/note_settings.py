"""
Note layout settings and their normalization.

The stored form uses camelCase keys so that a blob written by any version of
the client can be read back by this one.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional

from .sections import get_default_order, is_section, validate_section_order


FRONT = "front"
BACK = "back"
FIELD = "field"
NONE = "none"

TARGET_MODES = (FRONT, BACK, FIELD, NONE)


@dataclass(frozen=True)
class AttachmentTarget:
    """Placement policy for an attachment: front, back, field(name) or none."""

    mode: str = NONE
    field_name: Optional[str] = None

    @classmethod
    def to_field(cls, field_name: str) -> "AttachmentTarget":
        return cls(FIELD, field_name)

    def resolve(self, front_field: str, back_field: str) -> Optional[str]:
        """
        Resolve this policy to a concrete field name.

        Returns:
            The destination field, or None when nothing should be placed
        """
        if self.mode == FRONT:
            return front_field
        if self.mode == BACK:
            return back_field
        if self.mode == FIELD:
            return self.field_name or None
        return None

    def to_dict(self) -> Dict[str, str]:
        data = {"mode": self.mode}
        if self.mode == FIELD and self.field_name:
            data["fieldName"] = self.field_name
        return data

    @classmethod
    def from_raw(cls, raw: Any, default: "AttachmentTarget") -> "AttachmentTarget":
        """Build a target from its stored form, or return `default` if malformed."""
        if not isinstance(raw, Mapping):
            return default
        mode = raw.get("mode")
        if mode not in TARGET_MODES:
            return default
        field_name = raw.get("fieldName")
        if not isinstance(field_name, str):
            field_name = None
        return cls(mode, field_name if mode == FIELD else None)


@dataclass(frozen=True)
class NoteSettings:
    """Configuration of the remote note type and of how sections are laid out."""

    deck_name: str = "Default"
    model_name: str = "Basic"
    front_field_name: str = "Front"
    back_field_name: str = "Back"
    section_order: List[str] = field(default_factory=get_default_order)
    section_to_field: Dict[str, str] = field(default_factory=dict)
    audio1_target: AttachmentTarget = AttachmentTarget(FRONT)
    audio2_target: AttachmentTarget = AttachmentTarget(BACK)
    images_target: AttachmentTarget = AttachmentTarget(BACK)
    allow_duplicate: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored camelCase form."""
        return {
            "deckName": self.deck_name,
            "modelName": self.model_name,
            "frontFieldName": self.front_field_name,
            "backFieldName": self.back_field_name,
            "sectionOrder": list(self.section_order),
            "sectionToField": dict(self.section_to_field),
            "audio1Target": self.audio1_target.to_dict(),
            "audio2Target": self.audio2_target.to_dict(),
            "imagesTarget": self.images_target.to_dict(),
            "allowDuplicate": self.allow_duplicate,
        }

    def with_changes(self, **changes: Any) -> "NoteSettings":
        """Return a normalized copy with the given attributes replaced."""
        return normalize(replace(self, **changes).to_dict())


DEFAULT_SETTINGS = NoteSettings()

# stored key -> (attribute, expected type)
_SCALAR_FIELDS = {
    "deckName": ("deck_name", str),
    "modelName": ("model_name", str),
    "frontFieldName": ("front_field_name", str),
    "backFieldName": ("back_field_name", str),
    "allowDuplicate": ("allow_duplicate", bool),
}

_TARGET_FIELDS = {
    "audio1Target": "audio1_target",
    "audio2Target": "audio2_target",
    "imagesTarget": "images_target",
}


def _normalize_section_to_field(raw: Any) -> Dict[str, str]:
    if not isinstance(raw, Mapping):
        return {}
    return {
        key: value.strip()
        for key, value in raw.items()
        if is_section(key) and isinstance(value, str) and value.strip()
    }


def normalize(raw: Any) -> NoteSettings:
    """
    Normalize stored settings against the canonical defaults.

    Never raises: anything missing or malformed is taken from
    DEFAULT_SETTINGS, one field at a time.

    Args:
        raw: Stored settings (usually a dict loaded from JSON), any type

    Returns:
        Fully populated NoteSettings
    """
    if not isinstance(raw, Mapping):
        raw = {}

    values: Dict[str, Any] = {}
    for key, (attr, expected) in _SCALAR_FIELDS.items():
        value = raw.get(key)
        if expected is str and isinstance(value, str):
            # blank names would address a field called ""
            value = value.strip() or None
        values[attr] = value if isinstance(value, expected) else getattr(DEFAULT_SETTINGS, attr)

    for key, attr in _TARGET_FIELDS.items():
        values[attr] = AttachmentTarget.from_raw(raw.get(key), getattr(DEFAULT_SETTINGS, attr))

    values["section_order"] = validate_section_order(raw.get("sectionOrder"))
    values["section_to_field"] = _normalize_section_to_field(raw.get("sectionToField"))

    return NoteSettings(**values)
