class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class MissingRateConfiguration(DomainError):
    """Raised when no hourly rate can be resolved from a pay profile."""

    def __init__(self, employee_id: str, message: str | None = None):
        self.employee_id = employee_id
        super().__init__(message or f"Không xác định được đơn giá giờ cho nhân viên {employee_id}")
