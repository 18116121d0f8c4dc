from app.domain.entities.availability import ErrorKind


class MalformedTimeError(ValueError):
    """Raised when a time string is neither H:MM nor H:MM am|pm."""

    kind = ErrorKind.MALFORMED_TIME

    def __init__(self, value: object) -> None:
        super().__init__(f"Malformed time: {value!r}")
        self.value = value


class InvalidDurationError(ValueError):
    """Raised when a duration is non-positive or non-finite."""

    kind = ErrorKind.INVALID_DURATION

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid duration: {value!r}")
        self.value = value


class UpstreamStoreError(RuntimeError):
    """Raised when an appointment/availability/catalog/roster fetch fails."""
    pass
