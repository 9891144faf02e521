# api/payment.py
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from managers.config_manager import Settings, get_settings
from services.payment import PaymentIntentHandler
from utils.http import model_response, preflight_response

router = APIRouter()


def get_payment_handler(settings: Settings = Depends(get_settings)) -> PaymentIntentHandler:
    return PaymentIntentHandler(settings)


@router.options("/process-payment", tags=["payment"])
async def process_payment_preflight():
    return preflight_response()


@router.post("/process-payment", tags=["payment"])
async def process_payment(
    request: Request,
    handler: PaymentIntentHandler = Depends(get_payment_handler),
):
    """寄付用のStripe支払いインテントを作成する"""
    body = await request.body()
    # stripe は同期I/Oのためスレッドプールで実行する
    result = await run_in_threadpool(handler.handle, body)
    return model_response(result)
