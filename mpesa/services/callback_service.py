"""
Callback Service
Parses the STK Push callback M-Pesa POSTs to the request's CallBackURL
"""

import json
import logging
from typing import Any, Dict, Union

from marshmallow import ValidationError

from mpesa.errors.codes import ErrorCode
from mpesa.models.payment import PaymentCallback
from mpesa.models.result import Result
from mpesa.schemas.callback_schema import MPesaCallbackSchema

logger = logging.getLogger(__name__)


class CallbackParser:
    """Parser for STK Push callbacks"""

    @staticmethod
    def parse_callback(payload: Union[str, bytes, Dict[str, Any]]) -> Result[PaymentCallback]:
        """
        Parse a raw callback body

        Args:
            payload: Raw request body, or the already-decoded JSON object

        Returns:
            Result[PaymentCallback]; PARSE_ERROR when the body is not JSON
            or does not follow Body.stkCallback
        """
        if isinstance(payload, (str, bytes, bytearray)):
            try:
                payload = json.loads(payload)
            except ValueError as exc:
                logger.warning("Rejected callback body: %s", exc)
                return Result.failure(f"Failed to parse callback: {exc}", ErrorCode.PARSE_ERROR)

        try:
            callback = MPesaCallbackSchema().load(payload)
        except ValidationError as exc:
            logger.warning("Rejected callback body: %s", exc.messages)
            return Result.failure(f"Failed to parse callback: {exc.messages}", ErrorCode.PARSE_ERROR)

        logger.info(
            "STK callback: CheckoutRequestID=%s ResultCode=%s",
            callback.checkout_request_id, callback.raw_result_code,
        )
        return Result.ok(callback)
