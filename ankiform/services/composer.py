"""
Field Composer - Turns form content into Anki note fields.

Pure: the same FormState and NoteSettings always give an equal ComposedNote.
Attachments are not encoded here, only their destination field is decided.
"""

from typing import Dict, List, Optional

from ..config import FORM_SECTIONS, AttachmentTarget, NoteSettings
from ..config.sections import (
    ATTACHMENT_SECTIONS,
    IMAGES,
    SENTENCE_AUDIO,
    TARGET_WORD,
    WORD_AUDIO,
)
from ..models import ComposedNote, FormState
from ..utils.helpers import SECTION_SEPARATOR, join_nonempty, section_html

SYNTAX_ANNOTATION = "<em>syntax: modified</em>"
MEME_ANNOTATION = "<em>meme mode: on</em>"


def append_field(fields: Dict[str, str], field_name: str, html: str, separator: str) -> None:
    """Append `html` to a field, never overwriting what is already there."""
    fields[field_name] = join_nonempty([fields.get(field_name, ""), html], separator)


def render_sections(form: FormState) -> Dict[str, str]:
    """
    Render every non-empty text section to its HTML fragment.

    The target word stays plain text, the others get a bold label.
    """
    fragments: Dict[str, str] = {}
    for section_id, value in form.text_values().items():
        text = (value or "").strip()
        if not text:
            continue
        if section_id == TARGET_WORD:
            fragments[section_id] = text
        else:
            fragments[section_id] = section_html(FORM_SECTIONS[section_id].label, text)
    return fragments


def resolve_placements(settings: NoteSettings) -> Dict[str, Optional[str]]:
    """
    Decide the destination field of each attachment section.

    An explicit section-to-field mapping wins over the configured target.
    """
    configured = {
        SENTENCE_AUDIO: settings.audio1_target,
        WORD_AUDIO: settings.audio2_target,
        IMAGES: settings.images_target,
    }
    placements: Dict[str, Optional[str]] = {}
    for section_id in ATTACHMENT_SECTIONS:
        mapped = settings.section_to_field.get(section_id)
        target = AttachmentTarget.to_field(mapped) if mapped else configured[section_id]
        placements[section_id] = target.resolve(
            settings.front_field_name, settings.back_field_name
        )
    return placements


def compose(form: FormState, settings: NoteSettings) -> ComposedNote:
    """
    Compose the note fields for one submission.

    Sections mapped to a field are appended in section order. The unmapped
    sections are joined into `back` and appended to the back field last, so
    a section mapped explicitly to the back field comes before them.

    Args:
        form: Current form content
        settings: Normalized settings

    Returns:
        ComposedNote with front, back, fields, placements and annotations
    """
    fragments = render_sections(form)
    front = fragments.get(TARGET_WORD, "")

    fields: Dict[str, str] = {settings.front_field_name: front}
    unmapped: List[str] = []

    for section_id in settings.section_order:
        if section_id == TARGET_WORD or section_id in ATTACHMENT_SECTIONS:
            continue
        html = fragments.get(section_id)
        if not html:
            continue
        target_field = settings.section_to_field.get(section_id)
        if target_field:
            append_field(fields, target_field, html, SECTION_SEPARATOR)
        else:
            unmapped.append(html)

    back = SECTION_SEPARATOR.join(unmapped)
    append_field(fields, settings.back_field_name, back, SECTION_SEPARATOR)

    annotations = []
    if form.modify_syntax:
        annotations.append(SYNTAX_ANNOTATION)
    if form.meme_mode:
        annotations.append(MEME_ANNOTATION)

    return ComposedNote(
        front=front,
        back=back,
        fields=fields,
        placements=resolve_placements(settings),
        annotations=tuple(annotations),
    )
