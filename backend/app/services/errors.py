"""
Domain errors raised by the services and mapped to 400 responses
"""


class DomainError(ValueError):
    """A request that is well-formed but breaks a business rule"""


class PaymentError(DomainError):
    """Raised when a payment cannot be applied to an invoice"""
