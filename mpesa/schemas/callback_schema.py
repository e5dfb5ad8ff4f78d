"""
Callback Schemas
Validation of the STK Push callback body:
{"Body": {"stkCallback": {..., "CallbackMetadata": {"Item": [...]}}}}
"""

import json

from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, pre_load

from mpesa.errors.codes import STKResultCode
from mpesa.models.payment import MetadataItem, PaymentCallback


def typed_metadata_value(value):
    """
    Keep JSON floats, integers and strings as-is; serialise anything else
    (booleans, null, objects, arrays) to its JSON text.
    """
    if isinstance(value, bool):
        return json.dumps(value)
    if isinstance(value, (float, int, str)):
        return value
    return json.dumps(value)


class CallbackMetadataItemSchema(Schema):

    class Meta:
        unknown = EXCLUDE

    name = fields.Str(data_key='Name', required=True)
    value = fields.Raw(data_key='Value', load_default=None, allow_none=True)

    @post_load
    def make_item(self, data, **kwargs):
        return MetadataItem(name=data['name'], value=typed_metadata_value(data['value']))


class CallbackMetadataSchema(Schema):

    class Meta:
        unknown = EXCLUDE

    items = fields.List(
        fields.Nested(CallbackMetadataItemSchema),
        data_key='Item',
        load_default=None,
    )


class STKCallbackSchema(Schema):

    class Meta:
        unknown = EXCLUDE

    merchant_request_id = fields.Str(data_key='MerchantRequestID', required=True)
    checkout_request_id = fields.Str(data_key='CheckoutRequestID', required=True)
    result_code = fields.Int(data_key='ResultCode', required=True, strict=True)
    result_desc = fields.Str(data_key='ResultDesc', required=True)
    callback_metadata = fields.Nested(
        CallbackMetadataSchema,
        data_key='CallbackMetadata',
        load_default=None,
    )

    @pre_load
    def reject_boolean_result_code(self, data, **kwargs):
        # JSON true/false would otherwise load as 1/0
        if isinstance(data, dict) and isinstance(data.get('ResultCode'), bool):
            raise ValidationError('Not a valid integer.', 'ResultCode')
        return data

    @post_load
    def make_callback(self, data, **kwargs):
        metadata = data.get('callback_metadata') or {}
        items = metadata.get('items')
        return PaymentCallback(
            merchant_request_id=data['merchant_request_id'],
            checkout_request_id=data['checkout_request_id'],
            result_code=STKResultCode.from_code(data['result_code']),
            raw_result_code=data['result_code'],
            result_desc=data['result_desc'],
            metadata=tuple(items) if items is not None else None,
        )


class CallbackBodySchema(Schema):

    class Meta:
        unknown = EXCLUDE

    stk_callback = fields.Nested(STKCallbackSchema, data_key='stkCallback', required=True)


class MPesaCallbackSchema(Schema):
    """M-Pesa callback validation schema"""

    class Meta:
        unknown = EXCLUDE

    body = fields.Nested(CallbackBodySchema, data_key='Body', required=True)

    @post_load
    def unwrap(self, data, **kwargs):
        return data['body']['stk_callback']
