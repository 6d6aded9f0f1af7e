# shared/helpers/json_response_helper.py
from typing import Dict
from fastapi import HTTPException

INTERNAL_ERROR_MESSAGE = "internal server error"


def error_body(message: str) -> Dict[str, str]:
    return {"error": message}


def error_response(message: str, http_status: int = 400):
    raise HTTPException(status_code=http_status, detail=message)
