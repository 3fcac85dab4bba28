"""Custom exception classes for the application."""

from datetime import date

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, resource: str = "Resource"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )


class BadRequestError(HTTPException):
    def __init__(self, detail: str = "Bad request"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class ConflictError(HTTPException):
    def __init__(self, detail: str = "Conflict"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


class ValidationError(HTTPException):
    def __init__(self, detail: str = "Validation error"):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
        )


class OutOfBudgetPeriodError(BadRequestError):
    """A document is dated outside the budget period of one of its cost centers."""

    def __init__(
        self,
        analytical_account_id: int,
        account_name: str,
        document_date: date,
        period_start: date,
        period_end: date,
    ):
        self.analytical_account_id = analytical_account_id
        self.document_date = document_date
        self.period_start = period_start
        self.period_end = period_end
        super().__init__(
            f'Order date {document_date.isoformat()} is outside budget period for "{account_name}". '
            f"Budget period: {period_start.isoformat()} to {period_end.isoformat()}. "
            "Please revise the budget period or change the order date."
        )
