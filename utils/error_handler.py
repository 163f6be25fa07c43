"""
Error Handler Utility for the register

Maps service exceptions to short cashier-facing messages (zh-TW).

Usage:
    from utils.error_handler import handle_service_error

    try:
        session.checkout(PaymentMethod.CASH)
    except StallPosException as e:
        show_toast(handle_service_error(e))
"""

import logging

from exceptions import (
    StallPosException,
    InvalidProductException,
    ProductNotFoundException,
    BelowMinimumPurchaseException,
    InsufficientComboSelectionException,
    InvalidComboSelectionException,
    EmptyCartException,
    EmptyCartCheckoutException,
    CartLineNotFoundException,
    OrderNotFoundException,
    HeldOrderNotFoundException,
    OrderSourceUnavailableException,
    RemoteSyncException,
    SummarizerUnavailableException,
)

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "發生未預期的錯誤，請再試一次。"

ERROR_MESSAGES = {
    # Product exceptions
    InvalidProductException: "商品資料錯誤：{product_id}",
    ProductNotFoundException: "找不到商品：{product_id}",
    BelowMinimumPurchaseException: "金額低於最低消費 ${minimum}",

    # Combo exceptions
    InsufficientComboSelectionException: "綜合拼盤至少需選擇 {minimum} 種",
    InvalidComboSelectionException: "綜合拼盤選擇無效：{reason}",

    # Cart exceptions
    EmptyCartCheckoutException: "購物車是空的，無法結帳",
    EmptyCartException: "購物車是空的",
    CartLineNotFoundException: "購物車中找不到此品項",

    # Order exceptions
    OrderNotFoundException: "找不到此筆訂單",
    HeldOrderNotFoundException: "找不到此筆掛單",
    OrderSourceUnavailableException: "無法取得訂單資料來源：{source}",

    # Boundary exceptions
    RemoteSyncException: "雲端同步失敗：{reason}",
    SummarizerUnavailableException: "分析服務暫時無法使用。",
}


def handle_service_error(exception: StallPosException) -> str:
    """
    Convert a service exception to a cashier-facing message.

    Args:
        exception: The custom exception raised by a service

    Returns:
        Message string; a generic message for unmapped types
    """
    logger.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    template = ERROR_MESSAGES.get(type(exception))
    if template is None:
        logger.error(f"Unmapped exception type: {type(exception).__name__}")
        return UNEXPECTED_ERROR_MESSAGE

    exception_data = {
        key: value for key, value in vars(exception).items()
        if key not in ("message", "details")
    }
    try:
        return template.format(**exception_data)
    except KeyError as e:
        logger.error(f"Missing format parameter in error message: {e}")
        return template


def handle_unexpected_error(exception: Exception) -> str:
    """Log a non-POS exception with traceback and return the generic message."""
    logger.error(f"Unexpected error: {type(exception).__name__} - {str(exception)}", exc_info=True)
    return UNEXPECTED_ERROR_MESSAGE
