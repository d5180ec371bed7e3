import pytest
from aws_cdk import (
    App,
    Stack,
    aws_lambda as _lambda,
    aws_secretsmanager as secretsmanager,
)

from tests.helpers import ROOT_CA_ARN, FakeEventSourceMapping


@pytest.fixture
def stack():
    return Stack(App(), "TestStack")


@pytest.fixture
def fn(stack):
    return _lambda.Function(
        stack,
        "Fn",
        runtime=_lambda.Runtime.PYTHON_3_12,
        handler="index.handler",
        code=_lambda.Code.from_inline("def handler(event, context):\n    return None\n"),
    )


@pytest.fixture
def secret(stack):
    return secretsmanager.Secret(stack, "KafkaSecret")


@pytest.fixture
def root_ca(stack):
    return secretsmanager.Secret.from_secret_complete_arn(stack, "RootCA", ROOT_CA_ARN)


@pytest.fixture
def recorded_mappings(fn, monkeypatch):
    """Replaces add_event_source_mapping on the function with a recorder."""
    calls = []

    def add_event_source_mapping(id, **options):
        calls.append((id, options))
        return FakeEventSourceMapping()

    monkeypatch.setattr(fn, "add_event_source_mapping", add_event_source_mapping)
    return calls
