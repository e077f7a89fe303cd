"""
Turns a failed backend call into the single error shape clients see.

All failures are treated alike regardless of status code: clients can only
tell a 401 from a 500 by the reason text.
"""

from loguru import logger

from shake_gateway.errors import GENERIC_FAILURE_MESSAGE, BackendError, GatewayError, TransportError
from shake_gateway.models import BackendFailure


def extract_reason(body) -> str:
    # Order: reason, message, generic
    if isinstance(body, dict):
        for key in ("reason", "message"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return GENERIC_FAILURE_MESSAGE


def normalize(failure: BackendFailure) -> GatewayError:
    if failure.is_transport:
        logger.error("Backend unreachable: {}", failure.detail)
        return TransportError()

    reason = extract_reason(failure.body)
    logger.warning("Backend failed with status {}: {}", failure.status_code, reason)
    return BackendError(reason, failure.status_code)
