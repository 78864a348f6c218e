"""Exceptions raised while provisioning a key pair."""


class ProvisioningError(Exception):
    """Base class for all provisioning failures."""


class ValidationError(ProvisioningError, ValueError):
    """Request payload is missing or has malformed fields."""


class GenerationError(ProvisioningError):
    """Key material could not be generated."""


class StoreConflict(ProvisioningError):
    """A secret with the requested name already exists."""


class StoreUnavailable(ProvisioningError):
    """The secret store could not complete the call."""


class DeliveryError(ProvisioningError):
    """The outcome could not be delivered to the callback address."""


__all__ = [
    "ProvisioningError",
    "ValidationError",
    "GenerationError",
    "StoreConflict",
    "StoreUnavailable",
    "DeliveryError",
]
