import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("CALLBACK_TIMEOUT", "LOG_LEVEL", "SECRETS_MANAGER_ENDPOINT"):
        monkeypatch.delenv(var, raising=False)


class RecordingSender:
    def __init__(self):
        self.calls = []

    def __call__(self, url, outcome, timeout):
        self.calls.append((url, outcome, timeout))
        return 200


@pytest.fixture()
def sender():
    return RecordingSender()


def make_event(request_type="Create", **props):
    properties = {"Name": "acme", "Description": "Acme keys"}
    properties.update(props)
    return {
        "RequestType": request_type,
        "ResponseURL": "https://cloudformation-custom-resource-response.example/put?sig=abc",
        "StackId": "arn:aws:cloudformation:us-east-1:123456789012:stack/demo/1",
        "RequestId": "req-0001",
        "LogicalResourceId": "KeyPair",
        "ResourceProperties": properties,
    }


@pytest.fixture()
def event_factory():
    return make_event
