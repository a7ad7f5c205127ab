"""
Exception classes for drand keystore
"""

from enum import Enum
from typing import Optional, Dict, Any


class StoreErrorKind(Enum):
    """Closed set of failures a store operation can report"""
    FILE = "file"
    ABSENT = "absent"
    DECODE = "decode"


class KeyStoreError(Exception):
    """Base exception for all keystore errors"""
    
    def __init__(self, message: str, error_code: str = "UNKNOWN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code
        self.details = details or {}


class StoreError(KeyStoreError):
    """Base class for errors returned by save/load operations"""
    
    kind: StoreErrorKind


class StoreFileError(StoreError):
    """The store could not create, open, read, write, encode or decode a file"""
    
    kind = StoreErrorKind.FILE
    
    def __init__(self, message: str, error_code: str = "STORE_FILE", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class AbsentError(StoreError):
    """The requested object has never been saved"""
    
    kind = StoreErrorKind.ABSENT
    
    def __init__(self, message: str, error_code: str = "ABSENT", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class DecodeError(StoreError):
    """A decoded document does not describe the target entity"""
    
    kind = StoreErrorKind.DECODE
    
    def __init__(self, message: str, error_code: str = "DECODE", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, error_code, details)


class StoreInitError(KeyStoreError):
    """Exception raised when the storage folders cannot be created or secured"""
    pass


class KeyGenerationError(KeyStoreError):
    """Exception raised for identity key generation errors"""
    pass
