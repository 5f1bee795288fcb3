class CarWashError(Exception):
    """Base class for errors the API turns into a client-facing response."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CarWashError):
    status_code = 404


class DuplicateError(CarWashError):
    status_code = 409


class InvalidTransitionError(CarWashError):
    status_code = 409


class ReportParameterError(CarWashError):
    status_code = 400


class DataSourceOffline(CarWashError):
    status_code = 503
