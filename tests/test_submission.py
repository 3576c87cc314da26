import asyncio

import pytest
from aiohttp import test_utils, web

from ankiform.config import DEFAULT_SETTINGS, normalize
from ankiform.errors import SubmissionError
from ankiform.models import FormState, MediaFile, StoredMedia
from ankiform.services import AnkiConnectClient, Attachments, SubmissionService, compose

from .conftest import FakeAnkiClient


def submit(client, form, settings=DEFAULT_SETTINGS):
    service = SubmissionService(client)
    note = compose(form, settings)
    return asyncio.run(service.submit(note, Attachments.from_form(form), settings))


def test_text_only_note(fake_client):
    form = FormState(target_word="ubiquitous", definition="existing everywhere")

    note_id, final = submit(fake_client, form)

    assert note_id == fake_client.note_id
    assert fake_client.actions == ["addNote"]
    assert fake_client.added_note == {
        "deckName": "Default",
        "modelName": "Basic",
        "fields": {
            "Front": "ubiquitous",
            "Back": "<strong>Definition</strong><br>existing everywhere",
        },
        "options": {"allowDuplicate": False},
        "tags": ["web-creator"],
    }
    assert final.media == ()


def test_audio_front_when_front_and_back_share_a_field(fake_client):
    settings = normalize({
        "frontFieldName": "Front",
        "backFieldName": "Front",
        "audio1Target": {"mode": "front"},
    })
    form = FormState(target_word="ubiquitous", sentence_audio=MediaFile("say.mp3", data=b"mp3"))

    submit(fake_client, form, settings)

    assert fake_client.actions == ["storeMediaFile", "addNote"]
    assert fake_client.calls[0][1]["filename"] == "_say.mp3"
    assert fake_client.added_note["fields"]["Front"] == "ubiquitous[sound:_say.mp3]"


def test_media_is_stored_in_order_before_the_note(fake_client):
    form = FormState(
        target_word="w",
        sentence_audio=MediaFile("s.mp3", data=b"s"),
        word_audio=MediaFile("w.mp3", data=b"w"),
        images=[MediaFile("1.png", data=b"1"), MediaFile("2.png", data=b"2")],
    )

    _, final = submit(fake_client, form)

    stored = [params["filename"] for action, params in fake_client.calls if action == "storeMediaFile"]
    assert stored == ["_s.mp3", "_w.mp3", "_1.png", "_2.png"]
    assert fake_client.actions[-1] == "addNote"
    assert fake_client.added_note["fields"] == {
        "Front": "w[sound:_s.mp3]",
        "Back": '[sound:_w.mp3]<br><img src="_1.png" /><br><img src="_2.png" />',
    }
    assert final.media == (
        StoredMedia("sentenceAudio", "_s.mp3", "Front"),
        StoredMedia("wordAudio", "_w.mp3", "Back"),
        StoredMedia("images", "_1.png", "Back"),
        StoredMedia("images", "_2.png", "Back"),
    )


def test_images_mapping_overrides_image_target(fake_client):
    settings = normalize({"sectionToField": {"images": "Pictures"}, "imagesTarget": {"mode": "none"}})
    form = FormState(target_word="w", definition="d", images=[MediaFile("cat.png", data=b"c")])

    submit(fake_client, form, settings)

    fields = fake_client.added_note["fields"]
    assert fields["Pictures"] == '<img src="_cat.png" />'
    assert "img" not in fields["Back"]


def test_none_placement_stores_without_marker(fake_client):
    settings = normalize({"audio2Target": {"mode": "none"}})
    form = FormState(target_word="w", word_audio=MediaFile("w.mp3", data=b"w"))

    _, final = submit(fake_client, form, settings)

    assert fake_client.actions == ["storeMediaFile", "addNote"]
    assert fake_client.added_note["fields"] == {"Front": "w", "Back": ""}
    assert final.media == (StoredMedia("wordAudio", "_w.mp3", None),)


def test_composed_note_is_not_mutated(fake_client):
    form = FormState(target_word="w", sentence_audio=MediaFile("s.mp3", data=b"s"))
    note = compose(form, DEFAULT_SETTINGS)

    asyncio.run(SubmissionService(fake_client).submit(note, Attachments.from_form(form), DEFAULT_SETTINGS))

    assert note.fields == {"Front": "w", "Back": ""}


def test_bad_image_aborts_before_any_image_is_stored(tmp_path):
    client = FakeAnkiClient()
    form = FormState(
        target_word="w",
        images=[MediaFile("ok.png", data=b"ok"), MediaFile.from_path(str(tmp_path / "gone.png"))],
    )

    with pytest.raises(SubmissionError) as exc:
        submit(client, form)

    assert exc.value.step == "images"
    assert "gone.png" in str(exc.value)
    assert client.calls == []


def test_store_failure_aborts_without_creating_note():
    client = FakeAnkiClient(fail_store="_w.mp3")
    form = FormState(
        target_word="w",
        sentence_audio=MediaFile("s.mp3", data=b"s"),
        word_audio=MediaFile("w.mp3", data=b"w"),
    )

    with pytest.raises(SubmissionError) as exc:
        submit(client, form)

    assert exc.value.step == "wordAudio"
    assert "addNote" not in client.actions


def test_submit_form_reports_duplicate_verbatim():
    client = FakeAnkiClient(add_error="cannot create note because it is a duplicate")

    outcome = asyncio.run(SubmissionService(client).submit_form(FormState(target_word="w"), DEFAULT_SETTINGS))

    assert not outcome.success
    assert outcome.message == "Error: cannot create note because it is a duplicate"
    assert outcome.note_id is None


def test_submit_form_success(fake_client):
    outcome = asyncio.run(SubmissionService(fake_client).submit_form(FormState(target_word="w"), DEFAULT_SETTINGS))

    assert outcome.success
    assert outcome.note_id == fake_client.note_id
    assert outcome.message == "Note added successfully!"


def test_submit_form_reports_malformed_reply_as_failure():
    async def undecodable(request):
        return web.Response(body=b'{"result": 1, "error": "\xff\xfe"}')

    async def main():
        app = web.Application()
        app.router.add_post("/", undecodable)
        async with test_utils.TestServer(app) as server:
            async with AnkiConnectClient(url=str(server.make_url("/"))) as client:
                return await SubmissionService(client).submit_form(FormState(target_word="w"), DEFAULT_SETTINGS)

    outcome = asyncio.run(main())

    assert not outcome.success
    assert outcome.message.startswith("Error: ")
    assert outcome.note_id is None
