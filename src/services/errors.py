class ServiceError(Exception):
    pass


class ClassificationUnavailableError(ServiceError):
    pass


class NetworkTimeoutError(ClassificationUnavailableError):
    def __init__(self, model_name: str, timeout_seconds: float):
        super().__init__(f"Model {model_name} timed out after {timeout_seconds}s")
        self.model_name = model_name
        self.timeout_seconds = timeout_seconds
