from __future__ import annotations
from typing import Any


class JoblyError(Exception):
    """Error carrying the HTTP status the API layer should answer with.

    `message` may be a string or a list of validation messages; it is sent
    back unchanged under `{"error": {"message": ..., "status": ...}}`.
    """

    status = 500

    def __init__(self, message: Any = "Internal Server Error", status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_dict(self) -> dict:
        return {"error": {"message": self.message, "status": self.status}}


class BadRequestError(JoblyError):
    status = 400

    def __init__(self, message: Any = "Bad Request"):
        super().__init__(message)


class UnauthorizedError(JoblyError):
    status = 401

    def __init__(self, message: Any = "Unauthorized"):
        super().__init__(message)


class NotFoundError(JoblyError):
    status = 404

    def __init__(self, message: Any = "Not Found"):
        super().__init__(message)


class ConflictError(JoblyError):
    status = 409

    def __init__(self, message: Any = "Conflict"):
        super().__init__(message)
