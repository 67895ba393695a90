"""Shared exceptions module."""

from typing import Optional


class ExpaAnalyticsException(Exception):
    """Base exception for the analytics package."""

    pass


class IntegrationNotFoundException(ExpaAnalyticsException):
    """Exception raised when no integration is registered under a name."""

    def __init__(self, name: str, message: Optional[str] = "Integration not found"):
        """Create a new IntegrationNotFoundException instance.

        Args:
        ----
            name (str): The integration name that was looked up.
            message (str, optional): The error message. Has default message.

        """
        self.name = name
        self.message = message
        super().__init__(f"{message}: {name}")


class RequestDeliveryError(ExpaAnalyticsException):
    """Raised when a batch could not be delivered to an integration endpoint.

    Wraps the transport error so callers and event payloads never depend
    on httpx internals.
    """

    def __init__(self, api_url: str, cause: Exception, status_code: Optional[int] = None):
        """Create a new RequestDeliveryError instance.

        Args:
        ----
            api_url (str): The endpoint the batch was sent to.
            cause (Exception): The underlying transport or HTTP status error.
            status_code (int, optional): HTTP status, when a response was received.

        """
        self.api_url = api_url
        self.cause = cause
        self.status_code = status_code
        self.message = f"Delivery to {api_url} failed: {cause}"
        super().__init__(self.message)
