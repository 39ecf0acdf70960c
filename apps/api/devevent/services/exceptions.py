class ServiceError(Exception):
    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        self.message = message or code
        super().__init__(self.message)


class ConfigurationError(ServiceError):
    pass


class DatabaseConnectionError(ServiceError):
    pass


class NotFoundError(ServiceError):
    pass


class ConflictError(ServiceError):
    pass


class ValidationError(ServiceError):
    def __init__(self, code: str, message: str | None = None, field: str | None = None) -> None:
        super().__init__(code, message)
        self.field = field
