"""Payment provider return URLs, mounted at the site root"""

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from ...api.dependencies import get_activity_logger, get_payment_service, get_unit_of_work
from ...application.services.activity_logger import ActivityLogger
from ...application.use_cases.process_payment_callback import CancelPaymentUseCase, ConfirmPaymentUseCase
from ...core.config import settings
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.payment_service import PaymentService

logger = logging.getLogger(__name__)

router = APIRouter()


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(url=f"{settings.FRONTEND_URL}{path}", status_code=302)


def _error_redirect(message: str) -> RedirectResponse:
    return _redirect(f"/payment/error?message={quote(message)}")


@router.get("/success")
async def payment_success(
    payment_id: Optional[str] = None,
    order_id: Optional[str] = None,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    payment_service: PaymentService = Depends(get_payment_service),
    activity_logger: ActivityLogger = Depends(get_activity_logger)
):
    """Provider success return. ``order_id`` carries the order number."""
    try:
        outcome = await ConfirmPaymentUseCase(unit_of_work, payment_service, activity_logger).execute(
            payment_id, order_id
        )
    except Exception:
        logger.exception("Payment processing failed for order %s", order_id)
        return _error_redirect("Payment processing failed")

    if outcome.status == "error":
        return _error_redirect(outcome.message)
    if outcome.status == "already_processed":
        return _redirect(f"/orders/{outcome.order.id}?message={quote(outcome.message)}")
    return _redirect(f"/payment/success?order_id={outcome.order.id}")


@router.get("/cancel")
async def payment_cancel(
    order_id: Optional[str] = None,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger)
):
    """Provider cancel return. ``order_id`` carries the order number."""
    try:
        await CancelPaymentUseCase(unit_of_work, activity_logger).execute(order_id)
    except Exception:
        logger.exception("Payment cancellation failed for order %s", order_id)
        return _error_redirect("Payment cancellation failed")

    if order_id:
        return _redirect(f"/payment/cancelled?order_id={quote(order_id)}")
    return _redirect("/payment/cancelled")
