from __future__ import annotations

"""Decoding and classification of mobile token backend responses."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .errors import ProtocolError, ResponseDecodeError
from .models import OperationEnvelope, ResponseError

DATE_FIELDS = frozenset({"operationCreated", "operationExpires"})

STATUS_OK = "OK"
STATUS_ERROR = "ERROR"

logger = logging.getLogger(__name__)


def parse_date(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as sent by the backend; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def coerce_dates(value: Any) -> Any:
    """Return ``value`` with every ``DATE_FIELDS`` string turned into a ``datetime``.

    Only the listed keys are touched, at any depth. ``None`` stays ``None``.
    Raises ``ValueError`` for strings that are not ISO-8601 timestamps.
    """
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            if key in DATE_FIELDS and isinstance(item, str):
                result[key] = parse_date(item)
            else:
                result[key] = coerce_dates(item)
        return result
    if isinstance(value, list):
        return [coerce_dates(item) for item in value]
    return value


def decode_body(raw_text: str, *, status_code: Optional[int] = None) -> Any:
    """Parse a response body as JSON and normalise its date fields."""
    try:
        decoded = json.loads(raw_text)
    except ValueError as exc:
        raise ResponseDecodeError(
            "failed to decode response body", original=exc, status_code=status_code, body=raw_text
        ) from exc
    try:
        return coerce_dates(decoded)
    except ValueError as exc:
        raise ResponseDecodeError(
            "invalid date in response body", original=exc, status_code=status_code, body=raw_text
        ) from exc


def classify(
    raw_text: str,
    expect_payload: bool,
    payload_type: Any = None,
    *,
    status_code: Optional[int] = None,
) -> OperationEnvelope:
    """Turn a raw response body into an ``OperationEnvelope``.

    The backend uses ``responseObject`` for either the payload or the error
    body depending on ``status``. Error bodies are moved into ``response_error``.
    A missing payload on ``ERROR``, or on ``OK`` when ``expect_payload`` is set,
    raises ``ProtocolError``. ``null`` counts as missing; ``{}`` and ``[]`` do not.

    When ``payload_type`` is given the payload is validated into that type.
    """
    response = decode_body(raw_text, status_code=status_code)

    def fault(description: str) -> ProtocolError:
        logger.warning("protocol violation: %s (http status %s)", description, status_code)
        return ProtocolError(description, status_code=status_code, body=raw_text)

    if not isinstance(response, dict):
        raise fault("response is not a JSON object")

    status = response.get("status")
    response_object = response.get("responseObject")
    envelope_type = OperationEnvelope if payload_type is None else OperationEnvelope[payload_type]

    if status == STATUS_ERROR:
        if response_object is None:
            raise fault("error retrieved but no error data")
        try:
            error = ResponseError.model_validate(response_object)
        except PydanticValidationError as exc:
            raise fault(f"malformed error data: {exc.error_count()} validation errors") from exc
        logger.debug("response classified as error %s", error.code)
        return envelope_type(status=STATUS_ERROR, response_error=error)

    if status != STATUS_OK:
        raise fault(f"unknown response status: {status!r}")

    if response_object is None:
        if expect_payload:
            raise fault("no data object retrieved")
        logger.debug("response classified as ok without payload")
        return envelope_type(status=STATUS_OK)

    try:
        envelope = envelope_type(status=STATUS_OK, response_object=response_object)
    except PydanticValidationError as exc:
        raise fault(f"malformed data object: {exc.error_count()} validation errors") from exc
    logger.debug("response classified as ok")
    return envelope


__all__ = ["DATE_FIELDS", "classify", "coerce_dates", "decode_body", "parse_date"]
