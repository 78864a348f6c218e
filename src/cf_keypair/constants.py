"""Constant values shared by the key pair provisioning handler."""

RSA_2048 = "RSA_2048"
ECDSA_256 = "ECDSA_256"

KEY_TYPES = (RSA_2048, ECDSA_256)
DEFAULT_KEY_TYPE = RSA_2048

RSA_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

PUBLIC_SUFFIX = "public"
PRIVATE_SUFFIX = "private"
# Owned by the CDK construct, never touched by the handler
PUBLIC_KEY_ID_SUFFIX = "public-key-id"

CREATE = "Create"
UPDATE = "Update"
DELETE = "Delete"
REQUEST_TYPES = (CREATE, UPDATE, DELETE)

SUCCESS = "SUCCESS"
FAILED = "FAILED"

# Naming rules enforced by the construct at synth time
MAX_NAME_LENGTH = 128
NAME_PATTERN = r"^[a-zA-Z0-9/_+=.@-]+$"

DEFAULT_CALLBACK_TIMEOUT = 10.0
DEFAULT_LOG_LEVEL = "INFO"
