class RestaurantAppError(Exception):
    """Base class for failures raised by the restaurant adapters."""


class RemoteStoreError(RestaurantAppError):
    """The remote document store rejected or could not serve a request."""


class LocalStoreError(RestaurantAppError):
    """The on-device key-value cache is unavailable or failed."""
