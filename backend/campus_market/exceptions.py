"""
Campus Market Backend: Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for each failure class.
How:   Every exception carries a user-facing message and an optional details
       string. Global handlers (registered in main.py) turn them into
       `{"error": message, "details": details}` JSON bodies with the
       matching HTTP status.
Who:   Raised by services and routes; caught by the handlers in main.py.

Exception Hierarchy:
    CampusMarketError (base)
    ├── RequestInvalidError   → 400 Bad Request
    ├── UploadRejectedError   → 400 Bad Request
    ├── NotFoundError         → 404 Not Found
    ├── StorageCorruptError   → 500 Internal Server Error
    ├── DataUnavailableError  → 500 Internal Server Error
    └── FileStorageError      → 500 Internal Server Error

Validation errors are raised before any file is read or written, so an
invalid request never leaves a partial write behind.
"""

from typing import Optional


class CampusMarketError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (returned as "error")
        details:  Underlying cause, returned as "details" when present
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred.",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details
        super().__init__(self.message)


class RequestInvalidError(CampusMarketError):
    """
    Raised when client input is missing or malformed.

    When:    Required fields absent, fewer than 2 poll options, vote payload
             not integers, option index out of range.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(self, message: str = "Invalid request data.", details: Optional[str] = None):
        super().__init__(message=message, details=details)


class UploadRejectedError(CampusMarketError):
    """Raised for uploads with a disallowed extension, an oversize body, or no file."""

    status_code = 400

    def __init__(self, message: str = "The file could not be uploaded.", details: Optional[str] = None):
        super().__init__(message=message, details=details)


class NotFoundError(CampusMarketError):
    """
    Raised when a referenced entity does not exist.

    When:    Voting on an unknown poll id, fetching an upload that is not on disk.
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(self, resource: str = "resource", resource_id: Optional[str] = None):
        message = f"{resource.capitalize()} not found."
        if resource_id:
            message = f"{resource.capitalize()} '{resource_id}' not found."
        super().__init__(message=message)
        self.resource = resource
        self.resource_id = resource_id


class StorageCorruptError(CampusMarketError):
    """
    Raised when a backing JSON document exists but cannot be parsed.

    A corrupt document is never treated as an empty collection: the next
    write would otherwise silently wipe the stored data.
    """

    def __init__(self, message: str = "Stored data could not be read.", details: Optional[str] = None):
        super().__init__(message=message, details=details)


class DataUnavailableError(CampusMarketError):
    """Raised when the score export is missing, unreadable, or not a list of rows."""

    def __init__(self, message: str = "Scores could not be read.", details: Optional[str] = None):
        super().__init__(message=message, details=details)


class FileStorageError(CampusMarketError):
    """
    Raised when a file system write fails.

    When:    Disk full, permission denied, directory not writable.
    HTTP:    500 Internal Server Error
    """

    def __init__(self, message: str = "File storage operation failed.", details: Optional[str] = None):
        super().__init__(message=message, details=details)
