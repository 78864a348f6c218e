import threading
import uuid

from .errors import StoreConflict

__all__ = ["MemorySecretStore"]
__test__ = False


class MemorySecretStore:
    """In-process secret store for tests and dry runs."""

    def __init__(self, region: str = "us-east-1", account: str = "123456789012"):
        """Initialize an empty store.

        Args:
            region: Region used when building handles.
            account: Account id used when building handles.
        """

        self.region = region
        self.account = account
        self.secrets: dict[str, dict] = {}
        self._lock = threading.Lock()

    def _arn(self, name: str) -> str:
        suffix = uuid.uuid4().hex[:6]
        return (
            f"arn:aws:secretsmanager:{self.region}:{self.account}:"
            f"secret:{name}-{suffix}"
        )

    def create(self, name, value, description, replica_regions=()) -> str:
        with self._lock:
            if name in self.secrets:
                raise StoreConflict(
                    f"The operation failed because the secret {name} already exists."
                )
            arn = self._arn(name)
            self.secrets[name] = {
                "ARN": arn,
                "SecretString": value,
                "Description": description,
                "ReplicaRegions": list(replica_regions),
            }
            return arn

    def find(self, name):
        with self._lock:
            entry = self.secrets.get(name)
            return entry["ARN"] if entry else None

    def delete(self, name, handle=None) -> None:
        with self._lock:
            entry = self.secrets.get(name)
            if entry and handle in (None, entry["ARN"]):
                del self.secrets[name]
