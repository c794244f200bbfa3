# teamgen/domain/errors.py


class InvalidGroupingRequest(ValueError):
    """Raised before any attempt when the roster or configuration cannot be grouped."""


class ReshuffleQuotaExceeded(RuntimeError):
    """Raised when a single attempt uses up its reshuffle quota."""

    def __init__(self, project_name: str, reshuffles: int):
        super().__init__(f"ran out of reshuffle quota for project '{project_name}' after {reshuffles} reshuffles")
        self.project_name = project_name
        self.reshuffles = reshuffles
