"""Error kinds raised by repositories and the query service."""


class StationApiError(Exception):
    """Base exception carrying a stable error code for transport translation."""

    code = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(StationApiError):
    """Raised when an id resolves to nothing (an empty list is not an error)."""

    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: int) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found.")


class InconsistentDataError(StationApiError):
    """
    Raised when a station's home line cannot be resolved.

    Signals a referential-integrity problem in the source data: the station
    row references a line_cd with no active line.
    """

    code = "INCONSISTENT_DATA"

    def __init__(self, station_cd: int, line_cd: int) -> None:
        self.station_cd = station_cd
        self.line_cd = line_cd
        super().__init__(f"Station {station_cd} does not belong to any active line (line_cd={line_cd}).")


class ProviderError(StationApiError):
    """Raised when the storage layer reports a failure. The cause is chained, not interpreted."""

    code = "PROVIDER_FAILURE"

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Storage failure during {operation}.")


class InvalidInputError(StationApiError):
    """Raised for search input that cannot be safely used as a query parameter."""

    code = "INVALID_INPUT"
