from typing import Any, Dict, Optional
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel
import json

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def preflight_response() -> PlainTextResponse:
    return PlainTextResponse("ok", status_code=200, headers=CORS_HEADERS)


def json_response(content: Dict[str, Any], status_code: int = 200, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=content, headers={**(headers or {}), **CORS_HEADERS})


def model_response(model: BaseModel) -> JSONResponse:
    return json_response(model.model_dump(exclude_none=True))


def parse_json(body: bytes) -> Any:
    """不正なJSONの場合は json.JSONDecodeError を送出する"""
    return json.loads(body)
