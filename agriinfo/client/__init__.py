from .backend import BackendClient
from .controller import (
    IDENTIFY_FAILED_MESSAGE,
    READ_FAILED_MESSAGE,
    SELECT_FILE_MESSAGE,
    ClientController,
    ControllerState,
    read_image_as_data_uri,
)

__all__ = [
    "BackendClient",
    "ClientController",
    "ControllerState",
    "IDENTIFY_FAILED_MESSAGE",
    "READ_FAILED_MESSAGE",
    "SELECT_FILE_MESSAGE",
    "read_image_as_data_uri",
]
