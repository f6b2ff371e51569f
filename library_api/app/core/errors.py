"""
Error taxonomy for the library service.

Services raise subclasses of ``LibraryError``; each carries the HTTP
status code the API layer answers with.  The message passed to the
constructor is what clients see in the ``error`` field.
"""


class LibraryError(Exception):
    """Base class for request-local failures."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingFields(LibraryError):
    def __init__(self, message: str = "Missing required fields"):
        super().__init__(message)


class InvalidIdentifier(LibraryError):
    def __init__(self, value=None):
        super().__init__(f"Invalid id: {value!r}" if value is not None else "Invalid id")


class InvalidPhone(LibraryError):
    def __init__(self, message: str = "Invalid phone"):
        super().__init__(message)


class InvalidEmail(LibraryError):
    def __init__(self, message: str = "Invalid email"):
        super().__init__(message)


class DuplicateContact(LibraryError):
    def __init__(self, message: str = "Duplicate phone or email"):
        super().__init__(message)


class NotFound(LibraryError):
    status_code = 404

    def __init__(self, entity: str):
        super().__init__(f"{entity.capitalize()} not found")
        self.entity = entity


class InvalidRange(LibraryError):
    def __init__(self, message: str = "Invalid dates"):
        super().__init__(message)


class BookAlreadyBorrowed(LibraryError):
    """A borrow overlaps an existing borrow of the same book.

    Semantically a conflict, answered with 400 like other rejected input.
    """

    def __init__(self, message: str = "Book already borrowed for those dates"):
        super().__init__(message)


class ValidationServiceUnavailable(LibraryError):
    status_code = 500

    def __init__(self, message: str = "Validation service unavailable"):
        super().__init__(message)


class StoreBusy(LibraryError):
    """Another connection holds the store's write lock past the busy timeout."""

    status_code = 500

    def __init__(self, message: str = "Store busy, try again"):
        super().__init__(message)
