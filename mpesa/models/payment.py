"""
Payment Models
STK Push request, acknowledgement and callback value types
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from mpesa.errors.codes import STKResultCode

MetadataValue = Union[str, int, float]


class TransactionType(str, Enum):
    CUSTOMER_PAYBILL_ONLINE = 'CustomerPayBillOnline'       # PayBill number
    CUSTOMER_BUY_GOODS_ONLINE = 'CustomerBuyGoodsOnline'    # Till number


@dataclass
class PaymentRequest:
    """
    STK Push request parameters.

    ``password`` and ``timestamp`` are derived by the STKPushClient when the
    request is dispatched; any value set by the caller is overwritten.
    """
    business_short_code: str
    amount: str
    party_a: str
    party_b: str
    phone_number: str
    callback_url: str
    account_reference: str
    transaction_desc: str
    transaction_type: TransactionType = TransactionType.CUSTOMER_PAYBILL_ONLINE
    password: str = ''
    timestamp: str = ''


@dataclass(frozen=True)
class PaymentAck:
    """Synchronous acknowledgement returned by the STK Push endpoint"""
    merchant_request_id: str
    checkout_request_id: str
    response_code: str
    response_description: str
    customer_message: str


@dataclass(frozen=True)
class MetadataItem:
    name: str
    value: MetadataValue


@dataclass(frozen=True)
class PaymentCallback:
    """
    Final transaction outcome delivered to the CallBackURL.

    ``metadata`` is None when the callback carried no CallbackMetadata
    (cancelled or failed transactions).
    """
    merchant_request_id: str
    checkout_request_id: str
    result_code: STKResultCode
    raw_result_code: int
    result_desc: str
    metadata: Optional[Tuple[MetadataItem, ...]] = None

    @property
    def is_successful(self) -> bool:
        return self.result_code is STKResultCode.SUCCESS

    def get_metadata_value(self, name: str) -> Optional[MetadataValue]:
        for item in self.metadata or ():
            if item.name == name:
                return item.value
        return None

    def get_amount(self) -> Optional[float]:
        value = self.get_metadata_value('Amount')
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        return None

    def get_mpesa_receipt_number(self) -> Optional[str]:
        value = self.get_metadata_value('MpesaReceiptNumber')
        return value if isinstance(value, str) else None

    def get_transaction_date(self) -> Optional[int]:
        # YYYYMMDDHHMMSS sent as a number
        value = self.get_metadata_value('TransactionDate')
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
        return None

    def get_phone_number(self) -> Optional[str]:
        value = self.get_metadata_value('PhoneNumber')
        if isinstance(value, str):
            return value
        if isinstance(value, int):
            return str(value)
        return None
