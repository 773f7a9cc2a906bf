from __future__ import annotations


class FoodSafetyError(Exception):
    pass


class MissingParameterError(FoodSafetyError):
    def __init__(self, message: str, example: str | None = None):
        super().__init__(message)
        self.message = message
        self.example = example


class StoreError(FoodSafetyError):
    def __init__(self, operation: str, reason: str):
        super().__init__(f"Store error during {operation}: {reason}")
        self.operation = operation
        self.reason = reason


class StoreReadError(StoreError):
    pass


class StoreWriteError(StoreError):
    pass


class StoreConfigurationError(FoodSafetyError):
    def __init__(self, errors: list[str]):
        super().__init__(f"Store configuration errors: {', '.join(errors)}")
        self.errors = errors
