"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class EmailDeliveryError(AdapterError):
    """The email provider could not be reached or rejected the request."""

    pass
