import sys
from types import SimpleNamespace

import pytest

from cf_keypair import DeliveryError, MemorySecretStore, ValidationError, lambda_handler


class FakeSecretsManager:
    def __init__(self):
        self.created: list[dict] = []

    def create_secret(self, **kwargs):
        self.created.append(kwargs)
        return {"ARN": f"arn:aws:secretsmanager:us-east-1:1:secret:{kwargs['Name']}"}

    def list_secrets(self, **kwargs):
        return {"SecretList": []}

    def delete_secret(self, **kwargs):
        raise AssertionError("nothing to delete")


class FakeBoto3:
    def __init__(self, client):
        self._client = client
        self.calls: list[tuple[str, dict]] = []

    def client(self, service: str, **kwargs):
        self.calls.append((service, kwargs))
        assert service == "secretsmanager"
        return self._client


def test_create_signals_success_once(event_factory, sender):
    event = event_factory()
    store = MemorySecretStore()
    payload = lambda_handler(event, None, store=store, send=sender)

    assert len(sender.calls) == 1
    url, outcome, timeout = sender.calls[0]
    assert url == event["ResponseURL"]
    assert timeout == 10.0
    assert outcome.to_payload() == payload
    assert payload["Status"] == "SUCCESS"
    assert payload["Data"]["PublicKey"].startswith("-----BEGIN PUBLIC KEY-----")
    for key in ("StackId", "RequestId", "LogicalResourceId"):
        assert payload[key] == event[key]


def test_delete_of_missing_resource(event_factory, sender):
    payload = lambda_handler(
        event_factory("Delete"), None, store=MemorySecretStore(), send=sender
    )
    assert payload["Status"] == "SUCCESS"
    assert payload["Data"] == {}
    assert len(sender.calls) == 1


def test_conflict_signals_failure_once(event_factory, sender):
    store = MemorySecretStore()
    store.create("acme/public", "old", "d")
    event = event_factory()
    payload = lambda_handler(event, None, store=store, send=sender)

    assert len(sender.calls) == 1
    assert payload["Status"] == "FAILED"
    assert "acme/public already exists" in payload["Reason"]
    assert "Data" not in payload
    for key in ("StackId", "RequestId", "LogicalResourceId"):
        assert payload[key] == event[key]


def test_malformed_event_still_signaled(event_factory, sender):
    event = event_factory(KeyType="DSA_1024")
    payload = lambda_handler(event, None, store=MemorySecretStore(), send=sender)
    assert len(sender.calls) == 1
    assert payload["Status"] == "FAILED"
    assert "KeyType" in payload["Reason"]
    assert payload["PhysicalResourceId"] == "acme"
    assert payload["RequestId"] == "req-0001"


def test_event_without_response_url_raises(event_factory, sender):
    event = event_factory()
    del event["ResponseURL"]
    with pytest.raises(ValidationError):
        lambda_handler(event, None, send=sender)
    assert sender.calls == []


def test_delivery_error_propagates(event_factory):
    def failing_send(url, outcome, timeout):
        raise DeliveryError("HTTP 500")

    with pytest.raises(DeliveryError):
        lambda_handler(event_factory(), None, store=MemorySecretStore(), send=failing_send)


def test_default_store_uses_boto3(monkeypatch, event_factory, sender):
    client = FakeSecretsManager()
    fake_boto3 = FakeBoto3(client)
    monkeypatch.setitem(sys.modules, "boto3", fake_boto3)
    monkeypatch.setenv("SECRETS_MANAGER_ENDPOINT", "http://localhost:4566")
    monkeypatch.setenv("CALLBACK_TIMEOUT", "2.5")

    event = event_factory(SecretRegions=["eu-west-1"])
    payload = lambda_handler(event, None, send=sender)

    assert payload["Status"] == "SUCCESS"
    assert fake_boto3.calls == [
        ("secretsmanager", {"endpoint_url": "http://localhost:4566"})
    ]
    assert sorted(c["Name"] for c in client.created) == ["acme/private", "acme/public"]
    assert all(c["AddReplicaRegions"] == [{"Region": "eu-west-1"}] for c in client.created)
    assert payload["Data"]["PublicKeyArn"].endswith("secret:acme/public")
    assert sender.calls[0][2] == 2.5


def test_client_construction_failure_is_signaled(monkeypatch, event_factory, sender):
    def broken_client(service, **kwargs):
        raise RuntimeError("You must specify a region.")

    monkeypatch.setitem(sys.modules, "boto3", SimpleNamespace(client=broken_client))
    payload = lambda_handler(event_factory(), None, send=sender)
    assert payload["Status"] == "FAILED"
    assert "You must specify a region." in payload["Reason"]
    assert len(sender.calls) == 1


def test_delete_after_rejected_create_succeeds(event_factory, sender):
    store = MemorySecretStore()
    create = lambda_handler(
        event_factory(KeyType="DSA_1024"), None, store=store, send=sender
    )
    delete = lambda_handler(
        event_factory("Delete", KeyType="DSA_1024"), None, store=store, send=sender
    )
    assert create["Status"] == "FAILED"
    assert delete["Status"] == "SUCCESS"
    assert delete["Data"] == {}
    assert len(sender.calls) == 2


@pytest.mark.parametrize(
    "var,value", [("LOG_LEVEL", "verbose"), ("CALLBACK_TIMEOUT", "soon")]
)
def test_invalid_settings_still_signaled(monkeypatch, event_factory, sender, var, value):
    monkeypatch.setenv(var, value)
    store = MemorySecretStore()
    event = event_factory()
    payload = lambda_handler(event, None, store=store, send=sender)

    assert len(sender.calls) == 1
    url, outcome, timeout = sender.calls[0]
    assert url == event["ResponseURL"]
    assert timeout == 10.0
    assert payload["Status"] == "FAILED"
    assert var in payload["Reason"]
    assert payload["RequestId"] == "req-0001"
    assert store.secrets == {}


def test_invalid_settings_without_response_url_raises(monkeypatch, event_factory, sender):
    monkeypatch.setenv("LOG_LEVEL", "verbose")
    event = event_factory()
    del event["ResponseURL"]
    with pytest.raises(ValidationError):
        lambda_handler(event, None, send=sender)
    assert sender.calls == []
