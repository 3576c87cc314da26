from ankiform.config import DEFAULT_SETTINGS, AttachmentTarget, normalize
from ankiform.models import FormState
from ankiform.services import compose


def test_definition_only_goes_to_back():
    form = FormState(target_word="  ubiquitous ", definition="existing everywhere")

    note = compose(form, DEFAULT_SETTINGS)

    assert note.front == "ubiquitous"
    assert note.back == "<strong>Definition</strong><br>existing everywhere"
    assert note.fields == {
        "Front": "ubiquitous",
        "Back": "<strong>Definition</strong><br>existing everywhere",
    }


def test_empty_text_sections_give_empty_back():
    form = FormState(target_word=" word ", definition="   ", notes="\n")

    note = compose(form, DEFAULT_SETTINGS)

    assert note.front == "word"
    assert note.back == ""
    assert note.fields["Back"] == ""


def test_unmapped_sections_follow_section_order():
    settings = normalize({"sectionOrder": ["notes", "sentence", "definition"]})
    form = FormState(definition="d", sentence="s", notes="n")

    note = compose(form, settings)

    assert note.back == (
        "<strong>Notes</strong><br>n"
        "<br><br><strong>Sentence</strong><br>s"
        "<br><br><strong>Definition</strong><br>d"
    )


def test_sections_mapped_to_same_field_concatenate():
    settings = normalize({
        "sectionOrder": ["exampleSentences", "definition"],
        "sectionToField": {"definition": "Extra", "exampleSentences": "Extra"},
    })
    form = FormState(target_word="w", definition="d", example_sentences="e", notes="n")

    note = compose(form, settings)

    assert note.fields["Extra"] == (
        "<strong>Examples</strong><br>e<br><br><strong>Definition</strong><br>d"
    )
    assert note.back == "<strong>Notes</strong><br>n"


def test_target_word_mapping_is_ignored():
    settings = normalize({"sectionToField": {"targetWord": "Extra"}})

    note = compose(FormState(target_word="w"), settings)

    assert note.fields == {"Front": "w", "Back": ""}


def test_front_and_back_in_same_field():
    settings = normalize({"frontFieldName": "Front", "backFieldName": "Front"})
    form = FormState(target_word="w", definition="d")

    note = compose(form, settings)

    assert note.fields == {"Front": "w<br><br><strong>Definition</strong><br>d"}


def test_translation_label():
    note = compose(FormState(sentence_translation="hola"), DEFAULT_SETTINGS)

    assert note.back == "<strong>Translation</strong><br>hola"


def test_compose_is_idempotent():
    settings = normalize({"sectionToField": {"notes": "Extra"}})
    form = FormState(target_word="w", definition="d", notes="n", meme_mode=True)

    assert compose(form, settings) == compose(form, settings)


def test_annotations_are_not_written_to_fields():
    form = FormState(target_word="w", meme_mode=True, modify_syntax=True)

    note = compose(form, DEFAULT_SETTINGS)

    assert note.annotations == ("<em>syntax: modified</em>", "<em>meme mode: on</em>")
    assert all("<em>" not in value for value in note.fields.values())


def test_default_placements():
    note = compose(FormState(), DEFAULT_SETTINGS)

    assert note.placements == {"sentenceAudio": "Front", "wordAudio": "Back", "images": "Back"}


def test_section_mapping_overrides_attachment_targets():
    settings = normalize({
        "sectionToField": {"images": "Pictures", "wordAudio": "Audio"},
        "imagesTarget": {"mode": "none"},
        "audio1Target": {"mode": "none"},
    })

    note = compose(FormState(), settings)

    assert note.placements == {"sentenceAudio": None, "wordAudio": "Audio", "images": "Pictures"}


def test_field_target_uses_field_name():
    settings = DEFAULT_SETTINGS.with_changes(audio1_target=AttachmentTarget("field", "Sound"))

    assert compose(FormState(), settings).placements["sentenceAudio"] == "Sound"


def test_section_mapped_to_back_field_precedes_unmapped_sections():
    settings = normalize({
        "sectionOrder": ["notes", "definition"],
        "sectionToField": {"definition": "Back"},
    })
    form = FormState(target_word="w", definition="d", notes="n")

    note = compose(form, settings)

    assert note.back == "<strong>Notes</strong><br>n"
    assert note.fields["Back"] == (
        "<strong>Definition</strong><br>d<br><br><strong>Notes</strong><br>n"
    )
