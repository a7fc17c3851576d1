"""Domain errors raised by the data-access and service layers.

Each error maps to one HTTP status in ``main``; the message is returned to the
client as-is.
"""


def _type_name(entity_type) -> str:
    return getattr(entity_type, "__name__", str(entity_type))


class LibraryError(Exception):
    pass


class FailedToCreateError(LibraryError):
    def __init__(self, entity_type, reason: str | None = None):
        self.entity_type = entity_type
        self.reason = reason
        message = f"Failed to create entity of type '{_type_name(entity_type)}'."
        if reason is not None:
            message = f"{message} Reason: {reason}"
        super().__init__(message)


class NotFoundError(LibraryError):
    def __init__(self, entity_type, key=None):
        self.entity_type = entity_type
        self.key = key
        if key is not None:
            message = f"{_type_name(entity_type)} with key '{key}' not found."
        else:
            message = f"{_type_name(entity_type)} not found."
        super().__init__(message)


class FailedToLendError(LibraryError):
    def __init__(self, entity_type, reason: str | None = None):
        self.entity_type = entity_type
        self.reason = reason
        message = f"Failed to lend entity of type '{_type_name(entity_type)}'."
        if reason is not None:
            message = f"{message} Reason: {reason}"
        super().__init__(message)
