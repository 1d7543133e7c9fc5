"""Result envelope shared by every handler."""

from dataclasses import dataclass
from typing import Any

from fastapi import Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass(frozen=True)
class Result:
    status: int
    body: Any = None

    @property
    def is_error(self) -> bool:
        return self.status >= 400

    def to_response(self) -> Response:
        if self.status == status.HTTP_204_NO_CONTENT:
            return Response(status_code=self.status)
        return JSONResponse(status_code=self.status, content=jsonable_encoder(self.body))


def ok(body: Any) -> Result:
    return Result(status.HTTP_200_OK, body)


def created(body: Any) -> Result:
    return Result(status.HTTP_201_CREATED, body)


def no_content() -> Result:
    return Result(status.HTTP_204_NO_CONTENT)


def failure(status_code: int, message: str) -> Result:
    return Result(status_code, {"error": message})


def bad_request(message: str) -> Result:
    return failure(status.HTTP_400_BAD_REQUEST, message)


def not_found(message: str) -> Result:
    return failure(status.HTTP_404_NOT_FOUND, message)


def conflict(message: str) -> Result:
    return failure(status.HTTP_409_CONFLICT, message)


def unauthorized(message: str) -> Result:
    return failure(status.HTTP_401_UNAUTHORIZED, message)


def internal_error() -> Result:
    return failure(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
