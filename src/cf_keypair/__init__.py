"""CloudFront key pair custom resource package."""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import re

from .callback import send_response
from .core import lambda_handler
from .errors import (
    DeliveryError,
    GenerationError,
    ProvisioningError,
    StoreConflict,
    StoreUnavailable,
    ValidationError,
)
from .events import LifecycleRequest, Outcome
from .keys import generate_key_pair
from .memory_store import MemorySecretStore
from .provisioner import Provisioner
from .store import SecretStore
from .cli import main as cli

_pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"


def _read_version(path: Path) -> str:
    text = path.read_text(encoding="utf-8")
    match = re.search(r'^version\s*=\s*"([^"]+)"', text, flags=re.MULTILINE)
    if not match:
        raise RuntimeError("version not found in pyproject.toml")
    return match.group(1)


try:
    __version__ = version("cloudfront-keypair")
except PackageNotFoundError:
    __version__ = _read_version(_pyproject)

__all__ = [
    "lambda_handler",
    "cli",
    "generate_key_pair",
    "send_response",
    "LifecycleRequest",
    "Outcome",
    "Provisioner",
    "SecretStore",
    "MemorySecretStore",
    "ProvisioningError",
    "ValidationError",
    "GenerationError",
    "StoreConflict",
    "StoreUnavailable",
    "DeliveryError",
    "__version__",
]
