"""Lambda entry point for the ``Custom::KeyPair`` resource.

The handler parses the CloudFormation event, provisions or removes the secret
pair through :class:`~cf_keypair.provisioner.Provisioner` and reports the
outcome to the event's response URL. Every invocation that carries a response
URL signals exactly once, including invocations whose event is malformed;
only a failed delivery escapes as an exception.
"""

import logging
from typing import Any, Callable, Mapping

from .callback import send_response
from .config import Settings
from .errors import ValidationError
from .events import Correlation, LifecycleRequest, Outcome, physical_resource_id
from .provisioner import Provisioner
from .store import SecretStore, Store

logger = logging.getLogger(__name__)

Sender = Callable[[str, Outcome, float], Any]


def secrets_client(settings: Settings):
    """Return a boto3 Secrets Manager client honouring ``settings``."""
    import boto3  # type: ignore

    if settings.secrets_manager_endpoint:
        return boto3.client(
            "secretsmanager", endpoint_url=settings.secrets_manager_endpoint
        )
    return boto3.client("secretsmanager")


def _outcome(request: LifecycleRequest, store: Store | None, settings: Settings):
    if store is None:
        try:
            store = SecretStore(secrets_client(settings))
        except Exception as exc:
            reason = f"secret store client unavailable: {exc}"
            logger.error("%s failed: %s", request.request_type, reason)
            return Outcome.failure(request.name, request.correlation, reason)
    return Provisioner(store).handle(request)


def lambda_handler(
    event: Mapping[str, Any],
    _ctx,
    store: Store | None = None,
    send: Sender = send_response,
) -> dict:
    """Handle a CloudFormation custom resource request.

    Args:
        event: CloudFormation custom resource event.
        _ctx: Lambda context object (unused).
        store: Secret store to use instead of Secrets Manager.
        send: Delivery function called once with the response URL, the
            outcome and the callback timeout.

    Returns:
        dict: The response body that was delivered.

    Raises:
        ValidationError: If the event has no response URL to report to.
        DeliveryError: If the response could not be delivered.
    """
    settings_error: RuntimeError | None = None
    try:
        settings = Settings.from_env()
    except RuntimeError as exc:
        settings_error = exc
        settings = Settings()
    settings.configure_logging()
    if not isinstance(event, Mapping):
        raise ValidationError("event must be a mapping")

    try:
        request = LifecycleRequest.from_dict(event)
        if settings_error is not None:
            raise settings_error
    except (ValidationError, RuntimeError) as exc:
        url = event.get("ResponseURL")
        if not isinstance(url, str) or not url:
            raise
        logger.error("%s failed: %s", event.get("RequestType"), exc)
        outcome = Outcome.failure(
            physical_resource_id(event), Correlation.from_event(event), str(exc)
        )
    else:
        url = request.response_url
        outcome = _outcome(request, store, settings)

    send(url, outcome, settings.callback_timeout)
    return outcome.to_payload()
