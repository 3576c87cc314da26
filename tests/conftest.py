import pytest

from ankiform.config import SettingsManager
from ankiform.errors import RemoteApplicationError


class FakeAnkiClient:
    """Records AnkiConnect calls instead of sending them."""

    def __init__(self, note_id=1496198395707, fail_store=None, add_error=None, connected=True):
        self.note_id = note_id
        self.fail_store = fail_store
        self.add_error = add_error
        self.connected = connected
        self.calls = []

    async def store_media_file(self, filename, data):
        self.calls.append(("storeMediaFile", {"filename": filename, "data": data}))
        if filename == self.fail_store:
            raise RemoteApplicationError("storeMediaFile", "media folder is read-only")
        return filename

    async def add_note(self, note):
        self.calls.append(("addNote", {"note": note}))
        if self.add_error:
            raise RemoteApplicationError("addNote", self.add_error)
        return self.note_id

    async def deck_names(self):
        self.calls.append(("deckNames", {}))
        return ["Default", "Spanish"]

    async def model_names(self):
        self.calls.append(("modelNames", {}))
        return ["Basic", "Cloze"]

    async def model_field_names(self, model_name):
        self.calls.append(("modelFieldNames", {"modelName": model_name}))
        return ["Front", "Back"]

    async def check_connection(self, timeout=None):
        self.calls.append(("version", {}))
        return self.connected

    @property
    def actions(self):
        return [action for action, _ in self.calls]

    @property
    def added_note(self):
        for action, params in self.calls:
            if action == "addNote":
                return params["note"]
        return None


@pytest.fixture
def fake_client():
    return FakeAnkiClient()


@pytest.fixture
def settings_manager(tmp_path):
    return SettingsManager(settings_file=str(tmp_path / "storage.json"))
