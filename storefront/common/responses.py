from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def envelope(status_code: int, message: str, data: Any = None) -> JSONResponse:
    body = {"status": status_code, "message": message}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=body)


def ok(data: Any, message: str) -> JSONResponse:
    return envelope(status.HTTP_200_OK, message, data)


def created(data: Any, message: str) -> JSONResponse:
    return envelope(status.HTTP_201_CREATED, message, data)


def deleted(message: str) -> JSONResponse:
    # 204 must not carry a body, so deletions answer 200 with the envelope
    return envelope(status.HTTP_200_OK, message)
