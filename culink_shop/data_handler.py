import logging
import requests

from . import settings
from .schemas import DashboardSummary

logger = logging.getLogger(__name__)


def build_payload(summary: DashboardSummary) -> dict:
    """JSON-ready body for the dashboard webhook."""
    return {
        "reportData": summary.model_dump(mode="json"),
        "currency": settings.CURRENCY_LABEL,
    }


def post_to_webhook(summary: DashboardSummary) -> bool:
    """
    Posts the dashboard summary to the webhook.
    Returns True on a successful post; a missing URL or an HTTP failure is logged and returns False.
    """
    if not settings.WEBHOOK_URL:
        logger.warning("⚠️ WEBHOOK_URL not set. Skipping webhook post.")
        return False

    logger.info(f"🚀 Posting dashboard summary to webhook: {settings.WEBHOOK_URL}")

    try:
        response = requests.post(
            settings.WEBHOOK_URL,
            json=build_payload(summary),
            timeout=settings.WEBHOOK_TIMEOUT,
        )
        response.raise_for_status()
        logger.info("✅ Dashboard summary successfully posted to webhook.")
        return True
    except requests.exceptions.RequestException as e:
        logger.error(f"❌ Error posting to webhook: {e}")
        return False
