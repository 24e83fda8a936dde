from __future__ import annotations

"""Pydantic models used throughout the mobile token Python SDK."""

from datetime import datetime
from enum import StrEnum
from typing import Annotated, Any, Generic, List, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, Discriminator, Field, Tag

from ..auth.token_provider import Authentication

T = TypeVar("T")


class KnownRestApiError(StrEnum):
    """Error codes the backend is known to return."""

    GENERIC_ERROR = "ERROR_GENERIC"
    AUTHENTICATION_FAILURE = "POWERAUTH_AUTH_FAIL"
    INVALID_REQUEST = "INVALID_REQUEST"
    INVALID_ACTIVATION = "INVALID_ACTIVATION"
    INVALID_APPLICATION = "INVALID_APPLICATION"
    INVALID_OPERATION = "INVALID_OPERATION"
    ACTIVATION_ERROR = "ERR_ACTIVATION"
    AUTHENTICATION_ERROR = "ERR_AUTHENTICATION"
    SECURE_VAULT_ERROR = "ERR_SECURE_VAULT"
    ENCRYPTION_ERROR = "ERR_ENCRYPTION"
    PUSH_REGISTRATION_FAILED = "PUSH_REGISTRATION_FAILED"
    OPERATION_ALREADY_FINISHED = "OPERATION_ALREADY_FINISHED"
    OPERATION_ALREADY_FAILED = "OPERATION_ALREADY_FAILED"
    OPERATION_ALREADY_CANCELLED = "OPERATION_ALREADY_CANCELED"
    OPERATION_EXPIRED = "OPERATION_EXPIRED"
    OPERATION_FAILED = "OPERATION_FAILED"


class AttributeType(StrEnum):
    """Discriminator values for operation attributes."""

    AMOUNT = "AMOUNT"
    AMOUNT_CONVERSION = "AMOUNT_CONVERSION"
    KEY_VALUE = "KEY_VALUE"
    NOTE = "NOTE"
    HEADING = "HEADING"
    IMAGE = "IMAGE"


class RejectionReason(StrEnum):
    """Common reasons sent when the user rejects an operation."""

    UNKNOWN = "UNKNOWN"
    INCORRECT_DATA = "INCORRECT_DATA"
    UNEXPECTED_OPERATION = "UNEXPECTED_OPERATION"


class ResponseError(BaseModel):
    """Error object returned when the backend reports ``status == "ERROR"``."""

    code: str
    message: str = ""

    model_config = {"populate_by_name": True, "frozen": True, "extra": "allow"}

    @property
    def known_code(self) -> Optional[KnownRestApiError]:
        """Return the matching known error code, or ``None`` for codes this SDK does not know."""
        try:
            return KnownRestApiError(self.code)
        except ValueError:
            return None


class AttributeLabel(BaseModel):
    """UI heading for an attribute."""

    id: str
    value: str

    model_config = {"populate_by_name": True, "frozen": True}


class AmountAttribute(BaseModel):
    """Payment amount row."""

    type: Literal["AMOUNT"] = "AMOUNT"
    label: AttributeLabel
    amount_formatted: str = Field(alias="amountFormatted")
    currency_formatted: str = Field(alias="currencyFormatted")
    amount: Optional[float] = None
    currency: Optional[str] = None
    value_formatted: Optional[str] = Field(default=None, alias="valueFormatted")

    model_config = {"populate_by_name": True, "frozen": True}


class AmountConversionAttribute(BaseModel):
    """Money conversion row, e.g. when exchanging USD to EUR.

    ``dynamic`` is a hint that the UI may refresh the rate periodically; the SDK
    itself never refreshes it.
    """

    type: Literal["AMOUNT_CONVERSION"] = "AMOUNT_CONVERSION"
    label: AttributeLabel
    dynamic: bool
    source_amount_formatted: str = Field(alias="sourceAmountFormatted")
    source_currency_formatted: str = Field(alias="sourceCurrencyFormatted")
    source_amount: Optional[float] = Field(default=None, alias="sourceAmount")
    source_currency: Optional[str] = Field(default=None, alias="sourceCurrency")
    source_value_formatted: Optional[str] = Field(default=None, alias="sourceValueFormatted")
    target_amount_formatted: str = Field(alias="targetAmountFormatted")
    target_currency_formatted: str = Field(alias="targetCurrencyFormatted")
    target_amount: Optional[float] = Field(default=None, alias="targetAmount")
    target_currency: Optional[str] = Field(default=None, alias="targetCurrency")
    target_value_formatted: Optional[str] = Field(default=None, alias="targetValueFormatted")

    model_config = {"populate_by_name": True, "frozen": True}


class KeyValueAttribute(BaseModel):
    type: Literal["KEY_VALUE"] = "KEY_VALUE"
    label: AttributeLabel
    value: str

    model_config = {"populate_by_name": True, "frozen": True}


class NoteAttribute(BaseModel):
    type: Literal["NOTE"] = "NOTE"
    label: AttributeLabel
    note: str

    model_config = {"populate_by_name": True, "frozen": True}


class HeadingAttribute(BaseModel):
    """Section separator without a value."""

    type: Literal["HEADING"] = "HEADING"
    label: AttributeLabel

    model_config = {"populate_by_name": True, "frozen": True}


class ImageAttribute(BaseModel):
    type: Literal["IMAGE"] = "IMAGE"
    label: AttributeLabel
    thumbnail_url: str = Field(alias="thumbnailUrl")
    original_url: Optional[str] = Field(default=None, alias="originalUrl")

    model_config = {"populate_by_name": True, "frozen": True}


class UnknownAttribute(BaseModel):
    """Attribute with a type this SDK does not recognise; extra fields are kept as received."""

    type: str
    label: Optional[AttributeLabel] = None

    model_config = {"populate_by_name": True, "frozen": True, "extra": "allow"}


_UNKNOWN_TAG = "__unknown__"
_KNOWN_ATTRIBUTE_TYPES = frozenset(item.value for item in AttributeType)


def _attribute_tag(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
    else:
        kind = getattr(value, "type", None)
    if isinstance(kind, str) and kind in _KNOWN_ATTRIBUTE_TYPES:
        return str(kind)
    return _UNKNOWN_TAG


OperationAttribute = Annotated[
    Union[
        Annotated[AmountAttribute, Tag("AMOUNT")],
        Annotated[AmountConversionAttribute, Tag("AMOUNT_CONVERSION")],
        Annotated[KeyValueAttribute, Tag("KEY_VALUE")],
        Annotated[NoteAttribute, Tag("NOTE")],
        Annotated[HeadingAttribute, Tag("HEADING")],
        Annotated[ImageAttribute, Tag("IMAGE")],
        Annotated[UnknownAttribute, Tag(_UNKNOWN_TAG)],
    ],
    Discriminator(_attribute_tag),
]


class ResultTexts(BaseModel):
    """Messages for the different outcomes of an operation."""

    success: Optional[str] = None
    failure: Optional[str] = None
    reject: Optional[str] = None

    model_config = {"populate_by_name": True, "frozen": True}


class FormData(BaseModel):
    """Operation data presented to the user, localized per ``Accept-Language``."""

    title: str
    message: str
    result_texts: Optional[ResultTexts] = Field(default=None, alias="resultTexts")
    attributes: List[OperationAttribute] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "frozen": True}


class AllowedSignatureType(BaseModel):
    """Which authentication strength is needed to approve an operation."""

    type: Literal["1FA", "2FA"]
    variants: List[str] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "frozen": True}

    def allows(self, authentication: Authentication) -> bool:
        return authentication.signature_factor in self.variants


class UserOperation(BaseModel):
    """Operation awaiting approval or rejection by the user.

    ``operation_expires`` comes from the server clock; do not use it to hide
    operations locally.
    """

    id: str
    name: str
    data: str
    operation_created: datetime = Field(alias="operationCreated")
    operation_expires: datetime = Field(alias="operationExpires")
    form_data: FormData = Field(alias="formData")
    status_reason: Optional[str] = Field(default=None, alias="statusReason")
    allowed_signature_type: AllowedSignatureType = Field(alias="allowedSignatureType")

    model_config = {"populate_by_name": True, "frozen": True}


class OperationEnvelope(BaseModel, Generic[T]):
    """Classified response from the backend.

    For ``ERROR`` only ``response_error`` is set. For ``OK`` only
    ``response_object`` is set, or neither when no payload was expected.
    """

    status: Literal["OK", "ERROR"]
    response_object: Optional[T] = Field(default=None, alias="responseObject")
    response_error: Optional[ResponseError] = Field(default=None, alias="responseError")

    model_config = {"populate_by_name": True, "frozen": True}

    @property
    def is_ok(self) -> bool:
        return self.status == "OK"

    @property
    def is_error(self) -> bool:
        return self.status == "ERROR"


__all__ = [
    "AllowedSignatureType",
    "AmountAttribute",
    "AmountConversionAttribute",
    "AttributeLabel",
    "AttributeType",
    "FormData",
    "HeadingAttribute",
    "ImageAttribute",
    "KeyValueAttribute",
    "KnownRestApiError",
    "NoteAttribute",
    "OperationAttribute",
    "OperationEnvelope",
    "RejectionReason",
    "ResponseError",
    "ResultTexts",
    "UnknownAttribute",
    "UserOperation",
]
