from .base import (
    AppError,
    DeadlineExceededError,
    DomainError,
    InfrastructureError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DeadlineExceededError",
    "DomainError",
    "InfrastructureError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
