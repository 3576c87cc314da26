"""
AnkiConnect client - one request/response call per action.

Every reply must be a JSON object with exactly two keys, `result` and
`error`. Anything else is a protocol violation, distinct from an error
reported by Anki itself.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional, Union

import aiohttp

from ..config import Config
from ..errors import (
    AnkiConnectionError,
    AnkiFormError,
    ProtocolViolationError,
    RemoteApplicationError,
    RemoteTimeoutError,
)
from ..utils.logger import setup_logger

logger = setup_logger(__name__)


def parse_response(action: str, body: Union[bytes, str]) -> Any:
    """
    Validate an AnkiConnect reply and extract its result.

    Raises:
        ProtocolViolationError: If the reply is not {result, error}
        RemoteApplicationError: If `error` is not null
    """
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProtocolViolationError(f"Response to '{action}' is not valid UTF-8.") from e

    try:
        response = json.loads(body)
    except ValueError as e:
        raise ProtocolViolationError(f"Response to '{action}' is not valid JSON.") from e

    if not isinstance(response, dict):
        raise ProtocolViolationError(f"Response to '{action}' is not a JSON object.")
    if len(response) != 2:
        raise ProtocolViolationError("Response has an unexpected number of fields.")
    if "result" not in response:
        raise ProtocolViolationError("Response is missing required 'result' field.")
    if "error" not in response:
        raise ProtocolViolationError("Response is missing required 'error' field.")
    if response["error"] is not None:
        raise RemoteApplicationError(action, response["error"])
    return response["result"]


class AnkiConnectClient:
    """Async AnkiConnect client with a pooled aiohttp session."""

    def __init__(
        self,
        url: Optional[str] = None,
        version: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the client.

        Args:
            url: AnkiConnect endpoint (defaults to Config.ANKI_CONNECT_URL)
            version: API version sent with each request
            timeout: Default per-request timeout in seconds
        """
        self.url = url or Config.ANKI_CONNECT_URL
        self.version = version or Config.ANKI_CONNECT_VERSION
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock = asyncio.Lock()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the shared aiohttp session."""
        async with self._session_lock:
            if self._session is None or self._session.closed:
                self._session = aiohttp.ClientSession()
            return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        async with self._session_lock:
            if self._session and not self._session.closed:
                await self._session.close()
            self._session = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def invoke(
        self,
        action: str,
        params: Optional[Dict[str, Any]] = None,
        version: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        """
        Call one AnkiConnect action.

        Args:
            action: Action name, e.g. "addNote"
            params: Action parameters
            version: API version (defaults to the client's)
            timeout: Seconds before giving up (defaults to the client's)

        Returns:
            The `result` value of the reply

        Raises:
            RemoteTimeoutError: If the request took longer than `timeout`
            AnkiConnectionError: If the request could not be issued
            ProtocolViolationError: If the reply is malformed
            RemoteApplicationError: If Anki reported an error
        """
        timeout = timeout or self.timeout
        payload = {
            "action": action,
            "version": version or self.version,
            "params": params or {},
        }
        session = await self._get_session()
        logger.debug("AnkiConnect -> %s", action)

        try:
            async with session.post(
                self.url,
                data=json.dumps(payload),
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as response:
                body = await response.read()
                status = response.status
        except asyncio.TimeoutError as e:
            raise RemoteTimeoutError(action, timeout) from e
        except aiohttp.ClientError as e:
            raise AnkiConnectionError(action, str(e) or type(e).__name__) from e

        if status != 200:
            raise ProtocolViolationError(f"AnkiConnect replied to '{action}' with HTTP {status}.")
        return parse_response(action, body)

    async def deck_names(self) -> List[str]:
        return await self.invoke("deckNames")

    async def model_names(self) -> List[str]:
        return await self.invoke("modelNames")

    async def model_field_names(self, model_name: str) -> List[str]:
        return await self.invoke("modelFieldNames", {"modelName": model_name})

    async def store_media_file(self, filename: str, data: str) -> str:
        """Store a base64 file in Anki's media folder. Returns the stored name."""
        result = await self.invoke("storeMediaFile", {"filename": filename, "data": data})
        return result if isinstance(result, str) and result else filename

    async def add_note(self, note: Dict[str, Any]) -> int:
        """Create a note. Returns the new note id."""
        return await self.invoke("addNote", {"note": note})

    async def check_connection(self, timeout: Optional[float] = None) -> bool:
        """Return True if AnkiConnect answers a version request in time."""
        try:
            await self.invoke("version", timeout=timeout or Config.PROBE_TIMEOUT)
        except AnkiFormError as e:
            logger.debug("Connection probe failed: %s", e)
            return False
        return True
