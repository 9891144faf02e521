from contextlib import asynccontextmanager
import logging
import fastapi
from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from managers.config_manager import get_settings
from models.errors import HandlerError
from utils.http import json_response
from . import connection, payment, notification

logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: fastapi.FastAPI):
    # 起動時にシークレットの有無を確認する（リクエスト毎のチェックは各ハンドラで行う）
    for name in get_settings().missing_secrets():
        logger.warning("%s not found in environment variables", name)
    yield


app = fastapi.FastAPI(lifespan=lifespan)


@app.exception_handler(HandlerError)
async def handler_error(request: Request, exc: HandlerError):
    return json_response(exc.to_content(), status_code=exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    # 405 や 404 なども {error} 形式と CORS ヘッダーで返す
    return json_response({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)


app.include_router(connection.router)
app.include_router(payment.router)
app.include_router(notification.router)
