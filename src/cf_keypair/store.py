"""Secret store interfaces backed by AWS Secrets Manager.

:class:`SecretStore` wraps an injected boto3 ``secretsmanager`` client and maps
service failures onto :class:`~cf_keypair.errors.StoreConflict` and
:class:`~cf_keypair.errors.StoreUnavailable`. The adapter keeps no state of
its own, so a single instance can serve concurrent calls.
"""

import logging
from typing import Any, Iterable, Protocol

from botocore.exceptions import BotoCoreError, ClientError

from .errors import StoreConflict, StoreUnavailable

logger = logging.getLogger(__name__)


class Store(Protocol):
    def create(
        self,
        name: str,
        value: str,
        description: str,
        replica_regions: Iterable[str] = (),
    ) -> str:
        """Create secret ``name`` and return its handle."""

    def find(self, name: str) -> str | None:
        """Return the handle of secret ``name`` or ``None``."""

    def delete(self, name: str, handle: str | None = None) -> None:
        """Destroy secret ``name`` (or ``handle``) without a recovery window."""


def _error_code(exc: ClientError) -> str:
    return exc.response.get("Error", {}).get("Code", "")


class SecretStore:
    def __init__(self, client: Any):
        """Initialize wrapper around a Secrets Manager client.

        Args:
            client: boto3 ``secretsmanager`` client.
        """

        self.client = client

    def create(
        self,
        name: str,
        value: str,
        description: str,
        replica_regions: Iterable[str] = (),
    ) -> str:
        """Create secret ``name`` holding ``value``.

        Args:
            name: Secret name.
            value: Secret string.
            description: Human readable description.
            replica_regions: Regions the secret is replicated to on creation.

        Returns:
            str: ARN of the new secret.

        Raises:
            StoreConflict: If the secret already exists.
            StoreUnavailable: On any other service or transport failure.
        """

        params: dict[str, Any] = {
            "Name": name,
            "SecretString": value,
            "Description": description,
        }
        regions = [{"Region": region} for region in replica_regions]
        if regions:
            params["AddReplicaRegions"] = regions
        try:
            response = self.client.create_secret(**params)
        except ClientError as exc:
            if _error_code(exc) == "ResourceExistsException":
                raise StoreConflict(f"secret {name} already exists: {exc}") from exc
            raise StoreUnavailable(f"create {name} failed: {exc}") from exc
        except BotoCoreError as exc:
            raise StoreUnavailable(f"create {name} failed: {exc}") from exc
        logger.info("created secret %s (%d replica regions)", name, len(regions))
        return response["ARN"]

    def find(self, name: str) -> str | None:
        """Look up secret ``name`` through a filtered listing.

        The service name filter matches prefixes, so only an entry whose name
        is exactly ``name`` counts.

        Returns:
            str | None: ARN of the secret, or ``None`` when absent.
        """

        params: dict[str, Any] = {"Filters": [{"Key": "name", "Values": [name]}]}
        while True:
            try:
                page = self.client.list_secrets(**params)
            except (ClientError, BotoCoreError) as exc:
                raise StoreUnavailable(f"lookup {name} failed: {exc}") from exc
            for entry in page.get("SecretList", []):
                if entry.get("Name") == name:
                    return entry["ARN"]
            token = page.get("NextToken")
            if not token:
                return None
            params["NextToken"] = token

    def delete(self, name: str, handle: str | None = None) -> None:
        """Permanently delete secret ``name``; missing secrets are ignored.

        Args:
            name: Secret name, used when no handle is known.
            handle: ARN returned by :meth:`find` or :meth:`create`.
        """

        try:
            self.client.delete_secret(
                SecretId=handle or name, ForceDeleteWithoutRecovery=True
            )
        except ClientError as exc:
            if _error_code(exc) == "ResourceNotFoundException":
                logger.info("secret %s already absent", name)
                return
            raise StoreUnavailable(f"delete {name} failed: {exc}") from exc
        except BotoCoreError as exc:
            raise StoreUnavailable(f"delete {name} failed: {exc}") from exc
        logger.info("deleted secret %s", name)
