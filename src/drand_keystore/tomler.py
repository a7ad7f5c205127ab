"""
TOML serialization contract and the generic save/load routines

Any entity implementing Tomler can be written to and read from a file without
the caller knowing its concrete type.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, MutableMapping, Union

import tomli
import tomli_w

from . import fs
from .exceptions import AbsentError, DecodeError, StoreFileError

logger = logging.getLogger(__name__)


class Tomler(ABC):
    """Entity that can be (un)marshalled into/from a TOML document"""

    @abstractmethod
    def toml(self) -> Dict[str, Any]:
        """Return the mapping to encode"""

    @abstractmethod
    def toml_value(self) -> MutableMapping[str, Any]:
        """Return an empty mapping to decode a document into"""

    @abstractmethod
    def from_toml(self, value: MutableMapping[str, Any]) -> None:
        """
        Populate this entity from a decoded document

        Raises:
            DecodeError: If the document does not describe this entity
        """


def encode(t: Tomler) -> str:
    """
    Render the TOML document of t.

    Raises:
        TypeError: If the view holds a value TOML cannot represent
    """
    return tomli_w.dumps(t.toml())


def save(path: Union[str, Path], t: Tomler, secure: bool) -> None:
    """
    Encode t into the file at path, replacing any previous content.

    Args:
        path: Destination file
        t: Entity to save
        secure: Create the file readable by its owner only

    Raises:
        StoreFileError: If the file cannot be created or encoded
    """
    try:
        fd = fs.create_secure_file(path) if secure else fs.create_file(path)
    except OSError as e:
        logger.info("config: can't save %s to %s: %s", type(t).__name__, path, e)
        raise StoreFileError(
            f"Can't create {path}: {e}",
            details={"path": str(path), "entity": type(t).__name__}
        ) from e

    with fd:
        try:
            fd.write(encode(t))
        except (TypeError, ValueError, OSError) as e:
            raise StoreFileError(
                f"Can't encode {type(t).__name__} to {path}: {e}",
                details={"path": str(path), "entity": type(t).__name__}
            ) from e


def load(path: Union[str, Path], t: Tomler) -> None:
    """
    Decode the file at path into t.

    Args:
        path: Source file
        t: Entity populated in place; undefined if an error is raised

    Raises:
        AbsentError: If no file exists at path
        StoreFileError: If the file cannot be read or is not valid TOML
        DecodeError: If the document does not describe t
    """
    value = t.toml_value()
    try:
        with open(path, "rb") as fd:
            value.update(tomli.load(fd))
    except FileNotFoundError as e:
        raise AbsentError(
            f"No {type(t).__name__} stored at {path}",
            details={"path": str(path), "entity": type(t).__name__}
        ) from e
    except (OSError, UnicodeDecodeError, tomli.TOMLDecodeError) as e:
        raise StoreFileError(
            f"Can't read {type(t).__name__} from {path}: {e}",
            details={"path": str(path), "entity": type(t).__name__}
        ) from e

    t.from_toml(value)


def require(value: MutableMapping[str, Any], field: str, kind: type, entity: str) -> Any:
    """
    Fetch a required field from a decoded document.

    Raises:
        DecodeError: If the field is missing or has the wrong type
    """
    if field not in value:
        raise DecodeError(
            f"{entity}: missing field '{field}'",
            details={"entity": entity, "field": field}
        )
    item = value[field]
    # bool is an int subclass; "Index = true" is not an index
    if not isinstance(item, kind) or (kind is int and isinstance(item, bool)):
        raise DecodeError(
            f"{entity}: field '{field}' must be {kind.__name__}",
            details={"entity": entity, "field": field}
        )
    return item


def decode_hex(data: str, field: str, entity: str) -> bytes:
    """
    Decode a hex-encoded key field.

    Raises:
        DecodeError: If data is not valid hex
    """
    try:
        return bytes.fromhex(data)
    except ValueError as e:
        raise DecodeError(
            f"{entity}: field '{field}' is not valid hex: {e}",
            details={"entity": entity, "field": field}
        ) from e
