"""Custom resource request and outcome payloads."""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Mapping

from .constants import (
    DEFAULT_KEY_TYPE,
    DELETE,
    FAILED,
    KEY_TYPES,
    MAX_NAME_LENGTH,
    NAME_PATTERN,
    REQUEST_TYPES,
    SUCCESS,
)
from .errors import ValidationError

_NAME_RE = re.compile(NAME_PATTERN)


def validate_key_pair_name(name: Any) -> str:
    """Return ``name`` if it is usable as a secret name prefix.

    Raises:
        ValidationError: If ``name`` is blank, too long or has invalid characters.
    """
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("keyPairName is required")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(
            f"keyPairName must be {MAX_NAME_LENGTH} characters or less"
        )
    if not _NAME_RE.match(name):
        raise ValidationError("keyPairName contains invalid characters")
    return name


def validate_description(description: Any) -> str:
    """Return ``description`` if it is a non-blank string."""
    if not isinstance(description, str) or not description.strip():
        raise ValidationError("keyPairDescription is required")
    return description


@dataclass(frozen=True)
class Correlation:
    """Identifiers echoed back to CloudFormation untouched."""

    stack_id: Any = ""
    request_id: Any = ""
    logical_resource_id: Any = ""

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> "Correlation":
        return cls(
            stack_id=event.get("StackId", ""),
            request_id=event.get("RequestId", ""),
            logical_resource_id=event.get("LogicalResourceId", ""),
        )


@dataclass(frozen=True)
class LifecycleRequest:
    """Parsed custom resource event."""

    request_type: str
    name: str
    description: str
    response_url: str
    correlation: Correlation
    key_type: str = DEFAULT_KEY_TYPE
    secret_regions: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, event: Mapping[str, Any]) -> "LifecycleRequest":
        """Return ``LifecycleRequest`` built from a CloudFormation event.

        Args:
            event: Mapping with ``RequestType``, ``ResponseURL``, the
                correlation ids and ``ResourceProperties``.

        Returns:
            LifecycleRequest: Parsed request.

        Raises:
            ValidationError: If a required field is missing or malformed.
        """
        if not isinstance(event, Mapping):
            raise ValidationError("event must be a mapping")
        request_type = event.get("RequestType")
        if request_type not in REQUEST_TYPES:
            raise ValidationError(f"unsupported RequestType: {request_type!r}")
        response_url = event.get("ResponseURL")
        if not isinstance(response_url, str) or not response_url:
            raise ValidationError("missing field: ResponseURL")
        props = event.get("ResourceProperties")
        if not isinstance(props, Mapping):
            raise ValidationError("missing field: ResourceProperties")

        name = props.get("Name")
        if not isinstance(name, str) or not name:
            raise ValidationError("missing field: ResourceProperties.Name")
        if request_type == DELETE:
            # Only the name is needed to clean up, even after a rejected Create
            description = props.get("Description")
            return cls(
                request_type=request_type,
                name=name,
                description=description if isinstance(description, str) else "",
                response_url=response_url,
                correlation=Correlation.from_event(event),
            )

        description = props.get("Description")
        if not isinstance(description, str) or not description:
            raise ValidationError("missing field: ResourceProperties.Description")

        key_type = props.get("KeyType") or DEFAULT_KEY_TYPE
        if key_type not in KEY_TYPES:
            raise ValidationError(f"unsupported KeyType: {key_type!r}")

        regions = props.get("SecretRegions") or []
        if not isinstance(regions, (list, tuple)) or not all(
            isinstance(region, str) for region in regions
        ):
            raise ValidationError("SecretRegions must be a list of strings")

        return cls(
            request_type=request_type,
            name=name,
            description=description,
            response_url=response_url,
            correlation=Correlation.from_event(event),
            key_type=key_type,
            secret_regions=tuple(regions),
        )


def physical_resource_id(event: Mapping[str, Any]) -> str:
    """Best available physical id for an event that may be malformed."""
    props = event.get("ResourceProperties")
    if isinstance(props, Mapping) and props.get("Name"):
        return props["Name"]
    return event.get("PhysicalResourceId") or event.get("LogicalResourceId") or ""


@dataclass(frozen=True)
class Outcome:
    """Result of one invocation, delivered once to the callback address."""

    status: str
    physical_resource_id: str
    correlation: Correlation
    data: dict[str, Any] = field(default_factory=dict)
    reason: str | None = None

    @classmethod
    def success(cls, request: LifecycleRequest, data: Mapping[str, Any]) -> "Outcome":
        return cls(
            status=SUCCESS,
            physical_resource_id=request.name,
            correlation=request.correlation,
            data=dict(data),
        )

    @classmethod
    def failure(
        cls, physical_id: str, correlation: Correlation, reason: str
    ) -> "Outcome":
        return cls(
            status=FAILED,
            physical_resource_id=physical_id,
            correlation=correlation,
            reason=reason,
        )

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS

    def to_payload(self) -> dict[str, Any]:
        """Return the CloudFormation response body as a mapping."""
        payload: dict[str, Any] = {"Status": self.status}
        if self.status == FAILED:
            payload["Reason"] = self.reason or "Unknown error"
        payload["PhysicalResourceId"] = self.physical_resource_id
        payload["StackId"] = self.correlation.stack_id
        payload["RequestId"] = self.correlation.request_id
        payload["LogicalResourceId"] = self.correlation.logical_resource_id
        if self.status == SUCCESS:
            payload["Data"] = dict(self.data)
        return payload

    def to_json(self) -> bytes:
        return json.dumps(self.to_payload(), separators=(",", ":")).encode("utf-8")
