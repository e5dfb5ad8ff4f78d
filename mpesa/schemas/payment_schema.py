"""
Payment Schemas
Marshmallow schemas mapping Daraja field names to the client's models
"""

from marshmallow import EXCLUDE, Schema, fields, post_load, pre_load

from mpesa.models.payment import PaymentAck, PaymentRequest, TransactionType


class TokenResponseSchema(Schema):
    """OAuth response from /oauth/v1/generate"""

    class Meta:
        unknown = EXCLUDE

    access_token = fields.Str(required=True)
    # Daraja sends expires_in as a string, e.g. "3599"
    expires_in = fields.Int(required=True)


class ApiErrorSchema(Schema):
    """Error body returned by any Daraja endpoint"""

    class Meta:
        unknown = EXCLUDE

    request_id = fields.Str(data_key='requestId', load_default=None)
    error_code = fields.Str(data_key='errorCode', required=True)
    error_message = fields.Str(data_key='errorMessage', required=True)


class PaymentRequestSchema(Schema):
    """STK Push request body"""

    class Meta:
        unknown = EXCLUDE

    business_short_code = fields.Str(data_key='BusinessShortCode', required=True)
    password = fields.Str(data_key='Password', dump_only=True)
    timestamp = fields.Str(data_key='Timestamp', dump_only=True)
    transaction_type = fields.Enum(
        TransactionType,
        by_value=True,
        data_key='TransactionType',
        load_default=TransactionType.CUSTOMER_PAYBILL_ONLINE,
    )
    amount = fields.Str(data_key='Amount', required=True)
    party_a = fields.Str(data_key='PartyA', required=True)
    party_b = fields.Str(data_key='PartyB', required=True)
    phone_number = fields.Str(data_key='PhoneNumber', required=True)
    callback_url = fields.Str(data_key='CallBackURL', required=True)
    account_reference = fields.Str(data_key='AccountReference', required=True)
    transaction_desc = fields.Str(data_key='TransactionDesc', required=True)

    @pre_load
    def coerce_amount(self, data, **kwargs):
        # Request files often carry Amount as a JSON number
        if isinstance(data, dict) and isinstance(data.get('Amount'), int) \
                and not isinstance(data.get('Amount'), bool):
            data = {**data, 'Amount': str(data['Amount'])}
        return data

    @post_load
    def make_request(self, data, **kwargs):
        return PaymentRequest(**data)


class PaymentAckSchema(Schema):
    """Synchronous STK Push acknowledgement"""

    class Meta:
        unknown = EXCLUDE

    merchant_request_id = fields.Str(data_key='MerchantRequestID', required=True)
    checkout_request_id = fields.Str(data_key='CheckoutRequestID', required=True)
    response_code = fields.Str(data_key='ResponseCode', required=True)
    response_description = fields.Str(data_key='ResponseDescription', required=True)
    customer_message = fields.Str(data_key='CustomerMessage', required=True)

    @post_load
    def make_ack(self, data, **kwargs):
        return PaymentAck(**data)
