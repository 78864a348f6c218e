"""Create and delete the secret pair behind a key pair custom resource.

:class:`Provisioner` turns one :class:`~cf_keypair.events.LifecycleRequest`
into exactly one :class:`~cf_keypair.events.Outcome`. The public and private
secrets are independent store entries, so both creates (or both
find-then-delete sequences) run side by side and are joined before the
outcome is assembled. A failed create never rolls back its sibling; a later
Delete cleans up whatever half was left behind.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

from .constants import DELETE, PRIVATE_SUFFIX, PUBLIC_SUFFIX, UPDATE
from .events import LifecycleRequest, Outcome
from .keys import generate_key_pair
from .store import Store

logger = logging.getLogger(__name__)

Generator = Callable[[str], tuple[str, str]]


def secret_name(name: str, suffix: str) -> str:
    return f"{name}/{suffix}"


def _join(*calls: Callable[[], object]) -> list:
    """Run ``calls`` concurrently, wait for all, raise the first failure."""
    with ThreadPoolExecutor(max_workers=len(calls)) as pool:
        futures = [pool.submit(call) for call in calls]
    return [future.result() for future in futures]


class Provisioner:
    def __init__(self, store: Store, generator: Generator = generate_key_pair):
        """Initialize with the store and key generator to drive.

        Args:
            store: Secret store adapter.
            generator: Callable returning ``(public_pem, private_pem)``.
        """

        self.store = store
        self.generator = generator

    def handle(self, request: LifecycleRequest) -> Outcome:
        """Run ``request`` and return its outcome; never raises on failure."""

        logger.info(
            "Received %s for %s (request %s)",
            request.request_type,
            request.name,
            request.correlation.request_id,
        )
        try:
            if request.request_type == DELETE:
                logger.info("Deleting secrets for %s", request.name)
                data = self.delete(request.name)
            else:
                if request.request_type == UPDATE:
                    logger.warning(
                        "Update of %s generates new key material", request.name
                    )
                logger.info("Creating %s key pair %s", request.key_type, request.name)
                data = self.create(request)
        except Exception as exc:
            reason = str(exc) or type(exc).__name__
            logger.error("%s failed: %s", request.request_type, reason)
            return Outcome.failure(request.name, request.correlation, reason)
        logger.info("Completed %s for %s", request.request_type, request.name)
        return Outcome.success(request, data)

    def create(self, request: LifecycleRequest) -> dict:
        """Generate a key pair and store both halves.

        Returns:
            dict: ``PublicKey``, ``PublicKeyArn`` and ``PrivateKeyArn``.
        """

        public_pem, private_pem = self.generator(request.key_type)
        regions = request.secret_regions

        def _create(suffix: str, value: str, label: str) -> Callable[[], str]:
            return lambda: self.store.create(
                secret_name(request.name, suffix),
                value,
                f"{request.description} ({label})",
                regions,
            )

        public_arn, private_arn = _join(
            _create(PUBLIC_SUFFIX, public_pem, "Public"),
            _create(PRIVATE_SUFFIX, private_pem, "Private"),
        )
        return {
            "PublicKey": public_pem,
            "PublicKeyArn": public_arn,
            "PrivateKeyArn": private_arn,
        }

    def delete(self, name: str) -> dict:
        """Remove both secrets of ``name``; absent secrets are skipped."""

        def _remove(secret: str) -> Callable[[], None]:
            def _run() -> None:
                handle = self.store.find(secret)
                if handle is None:
                    logger.info("secret %s not found, skipping", secret)
                    return
                self.store.delete(secret, handle)

            return _run

        _join(
            _remove(secret_name(name, PUBLIC_SUFFIX)),
            _remove(secret_name(name, PRIVATE_SUFFIX)),
        )
        return {}
