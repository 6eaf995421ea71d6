from __future__ import annotations

import asyncio
import logging
import mimetypes
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from ..domain.errors import AgriInfoError, FileReadError, InvalidRequest, SchemaViolation
from ..domain.media import encode_data_uri
from ..schemas.models import IdentificationResult, ImageIdentificationRequest
from ..schemas.validation import validate_shape


logger = logging.getLogger(__name__)

SELECT_FILE_MESSAGE = "Please select an image file."
READ_FAILED_MESSAGE = "Failed to read the image file."
IDENTIFY_FAILED_MESSAGE = "An error occurred during identification. Please try again."

IdentifyCall = Callable[[ImageIdentificationRequest], Awaitable[IdentificationResult]]


class ControllerState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def read_image_as_data_uri(path: Path, mime_type: Optional[str] = None) -> str:
    """
    Read a local image into a ``data:<mime>;base64,...`` string.

    Raises:
        FileReadError: the file cannot be read, is empty, or has no known type.
    """
    mime = mime_type or mimetypes.guess_type(str(path))[0]
    if not mime:
        raise FileReadError(f"cannot determine the MIME type of {path}")
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise FileReadError(f"cannot read {path}: {exc}") from exc
    if not data:
        raise FileReadError(f"{path} is empty")
    return encode_data_uri(data, mime)


class ClientController:
    """
    User-visible state of the upload form.

    ``state`` moves idle -> submitting -> succeeded | failed; ``reset`` goes
    back to idle. One controller belongs to one user session.
    """

    def __init__(self, identify: IdentifyCall) -> None:
        self._identify = identify
        self._selected_path: Optional[Path] = None
        self._selected_mime: Optional[str] = None
        self.state = ControllerState.IDLE
        self.preview_url: Optional[str] = None
        self.error: Optional[str] = None
        self.result: Optional[IdentificationResult] = None

    @property
    def loading(self) -> bool:
        return self.state is ControllerState.SUBMITTING

    @property
    def has_selection(self) -> bool:
        return self._selected_path is not None

    def select_file(
        self, path: Union[str, Path], mime_type: Optional[str] = None
    ) -> bool:
        self._selected_path = Path(path)
        self._selected_mime = mime_type
        self.result = None
        self.state = ControllerState.IDLE
        try:
            self.preview_url = read_image_as_data_uri(self._selected_path, mime_type)
        except FileReadError as exc:
            logger.warning("Image preview failed (%s): %s", exc.kind, exc)
            self.preview_url = None
            self.error = READ_FAILED_MESSAGE
            return False
        self.error = None
        return True

    def clear_selection(self) -> None:
        self._selected_path = None
        self._selected_mime = None
        self.preview_url = None
        self.reset()

    def reset(self) -> None:
        self.state = ControllerState.IDLE
        self.error = None
        self.result = None

    async def submit(
        self, language_code: Optional[str] = None
    ) -> Optional[IdentificationResult]:
        if self._selected_path is None:
            self.error = SELECT_FILE_MESSAGE
            return None

        self.state = ControllerState.SUBMITTING
        self.error = None
        self.result = None

        try:
            encoded = await asyncio.to_thread(
                read_image_as_data_uri, self._selected_path, self._selected_mime
            )
        except FileReadError as exc:
            logger.warning("Image read failed (%s): %s", exc.kind, exc)
            self.error = READ_FAILED_MESSAGE
            self.state = ControllerState.FAILED
            return None
        except asyncio.CancelledError:
            self.state = ControllerState.IDLE
            raise

        try:
            request = self._build_request(encoded, language_code)
            result = await self._identify(request)
        except AgriInfoError as exc:
            logger.error("Identification failed (%s): %s", exc.kind, exc)
            self.error = IDENTIFY_FAILED_MESSAGE
            self.state = ControllerState.FAILED
            return None
        except asyncio.CancelledError:
            self.state = ControllerState.IDLE
            raise
        except Exception as exc:
            logger.exception("Identification failed unexpectedly: %s", exc)
            self.error = IDENTIFY_FAILED_MESSAGE
            self.state = ControllerState.FAILED
            return None

        self.result = result
        self.state = ControllerState.SUCCEEDED
        return result

    @staticmethod
    def _build_request(
        encoded: str, language_code: Optional[str]
    ) -> ImageIdentificationRequest:
        payload = {"encodedImage": encoded}
        if language_code:
            payload["languageCode"] = language_code
        try:
            return validate_shape(ImageIdentificationRequest, payload)
        except SchemaViolation as exc:
            raise InvalidRequest(f"invalid identification request: {exc}", violation=exc) from exc
