from mpesa.providers.transport import Transport, TransportResponse, RequestsTransport

__all__ = ['Transport', 'TransportResponse', 'RequestsTransport']
