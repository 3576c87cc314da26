from ankiform.config import (
    DEFAULT_SETTINGS,
    AttachmentTarget,
    get_default_order,
    normalize,
)


def test_normalize_empty_gives_defaults():
    assert normalize({}) == DEFAULT_SETTINGS
    assert normalize(None) == DEFAULT_SETTINGS
    assert normalize("not settings") == DEFAULT_SETTINGS


def test_section_order_drops_unknowns_and_duplicates():
    raw = {"sectionOrder": ["notes", "bogus", "definition", "notes", 42, "images"]}

    order = normalize(raw).section_order

    assert sorted(order) == sorted(get_default_order())
    assert len(order) == 9
    # valid entries keep their relative order, the rest follow in default order
    assert order[:3] == ["notes", "definition", "images"]
    assert order[3:] == [
        "targetWord",
        "sentence",
        "sentenceTranslation",
        "exampleSentences",
        "sentenceAudio",
        "wordAudio",
    ]


def test_section_order_not_a_list():
    assert normalize({"sectionOrder": "notes"}).section_order == get_default_order()


def test_section_to_field_filters_unknown_keys_and_blank_values():
    raw = {"sectionToField": {"notes": "Extra", "bogus": "X", "definition": "  ", "images": 3}}

    assert normalize(raw).section_to_field == {"notes": "Extra"}


def test_malformed_values_fall_back_per_field():
    raw = {
        "deckName": "Spanish",
        "modelName": 12,
        "allowDuplicate": "yes",
        "audio1Target": {"mode": "sideways"},
        "audio2Target": {"mode": "field", "fieldName": "Audio"},
        "imagesTarget": "back",
    }

    settings = normalize(raw)

    assert settings.deck_name == "Spanish"
    assert settings.model_name == "Basic"
    assert settings.allow_duplicate is False
    assert settings.audio1_target == AttachmentTarget("front")
    assert settings.audio2_target == AttachmentTarget("field", "Audio")
    assert settings.images_target == AttachmentTarget("back")


def test_stored_form_round_trips():
    settings = normalize({
        "deckName": "Spanish",
        "sectionOrder": ["sentence", "targetWord"],
        "sectionToField": {"sentence": "Context"},
        "audio1Target": {"mode": "none"},
        "allowDuplicate": True,
    })

    assert normalize(settings.to_dict()) == settings


def test_with_changes_normalizes():
    changed = DEFAULT_SETTINGS.with_changes(section_order=["notes"])

    assert changed.section_order[0] == "notes"
    assert len(changed.section_order) == 9


def test_attachment_target_resolve():
    assert AttachmentTarget("front").resolve("Front", "Back") == "Front"
    assert AttachmentTarget("back").resolve("Front", "Back") == "Back"
    assert AttachmentTarget("field", "Audio").resolve("Front", "Back") == "Audio"
    assert AttachmentTarget("field").resolve("Front", "Back") is None
    assert AttachmentTarget("none").resolve("Front", "Back") is None


def test_blank_names_fall_back_to_defaults():
    raw = {"deckName": "", "modelName": "   ", "frontFieldName": "", "backFieldName": " Extra "}

    settings = normalize(raw)

    assert settings.deck_name == DEFAULT_SETTINGS.deck_name
    assert settings.model_name == DEFAULT_SETTINGS.model_name
    assert settings.front_field_name == DEFAULT_SETTINGS.front_field_name
    assert settings.back_field_name == "Extra"
