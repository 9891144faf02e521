from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from managers.config_manager import Settings, get_settings
from services.notification import NotificationEmailHandler
from utils.http import model_response, preflight_response

router = APIRouter()


def get_notification_handler(settings: Settings = Depends(get_settings)) -> NotificationEmailHandler:
    return NotificationEmailHandler(settings)


@router.options("/send-notification-email", tags=["notification"])
async def send_notification_email_preflight():
    return preflight_response()


@router.post("/send-notification-email", tags=["notification"])
async def send_notification_email(
    request: Request,
    handler: NotificationEmailHandler = Depends(get_notification_handler),
):
    """フォーム送信内容を運営者に通知する"""
    body = await request.body()
    # requests は同期I/Oのためスレッドプールで実行する
    result = await run_in_threadpool(handler.handle, body)
    return model_response(result)
