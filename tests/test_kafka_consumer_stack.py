"""Tests for the configuration-driven example stack."""

import copy

import pytest
from aws_cdk import (
    App,
    aws_lambda as _lambda,
)
from aws_cdk.assertions import Match, Template

from kafka_lambda_event_sources import KafkaEventSourceValidationError
from kafka_lambda_event_sources.kafka_consumer_stack import KafkaConsumerStack
from tests.helpers import CLUSTER_ARN, MSK_EXECUTION_ROLE_POLICY, policy_actions

BASE_CONFIG = {
    "environment": "test",
    "observability": {"log_level": "DEBUG"},
    "vpc": {"cidr_range": "10.20.0.0/16", "cidr_mask": 24},
    "event_sources": {
        "topic": "orders.raw",
        "consumer_group_id": "orders-lambda-consumer",
        "batch_size": 50,
        "starting_position": "TRIM_HORIZON",
        "filters": [{"value": {"status": ["confirmed"]}}],
        "encrypt_filters": True,
        "managed": {"enabled": False, "cluster_arn": CLUSTER_ARN},
        "self_managed": {
            "enabled": False,
            "bootstrap_servers": ["kafka-1.example.com:9096", "kafka-2.example.com:9096"],
            "authentication_method": "SASL_SCRAM_256_AUTH",
            "scram_username": "lambda-consumer",
            "use_vpc": False,
        },
    },
}


def make_config(**section_overrides):
    config = copy.deepcopy(BASE_CONFIG)
    for section, values in section_overrides.items():
        config["event_sources"][section].update(values)
    return config


def synth(config):
    stack = KafkaConsumerStack(
        App(),
        "KafkaConsumerStack",
        config=config,
        code=_lambda.Code.from_inline("def handler(event, context):\n    return None\n"),
    )
    return stack, Template.from_stack(stack)


class TestManagedSourceFromConfig:

    def test_iam_authenticated_cluster(self):
        stack, template = synth(make_config(managed={"enabled": True}))

        template.has_resource_properties(
            "AWS::Lambda::EventSourceMapping",
            {
                "EventSourceArn": CLUSTER_ARN,
                "Topics": ["orders.raw"],
                "BatchSize": 50,
                "AmazonManagedKafkaEventSourceConfig": {"ConsumerGroupId": "orders-lambda-consumer"},
                "SourceAccessConfigurations": Match.absent(),
                "FilterCriteria": {"Filters": [{"Pattern": '{"value":{"status":["confirmed"]}}'}]},
            },
        )
        actions = policy_actions(template)
        assert "kafka-cluster:Connect" in actions
        assert "kafka-cluster:ReadData" in actions
        assert "kafka-cluster:AlterGroup" in actions
        template.has_resource_properties(
            "AWS::IAM::Role",
            {"ManagedPolicyArns": Match.array_with([MSK_EXECUTION_ROLE_POLICY])},
        )
        assert stack.managed_source.event_source_mapping_id
        assert stack.self_managed_source is None

    def test_filter_criteria_encrypted(self):
        _, template = synth(make_config(managed={"enabled": True}))

        template.resource_count_is("AWS::KMS::Key", 1)
        template.has_resource_properties(
            "AWS::Lambda::EventSourceMapping",
            {"KmsKeyArn": {"Fn::GetAtt": [Match.string_like_regexp("FilterCriteriaKey"), "Arn"]}},
        )

    def test_scram_secret(self):
        _, template = synth(make_config(managed={"enabled": True, "scram_username": "lambda-consumer"}))

        template.has_resource_properties(
            "AWS::SecretsManager::Secret",
            {"Name": Match.string_like_regexp("^AmazonMSK_")},
        )
        template.has_resource_properties(
            "AWS::Lambda::EventSourceMapping",
            {
                "SourceAccessConfigurations": [
                    {"Type": "SASL_SCRAM_512_AUTH", "URI": {"Ref": Match.string_like_regexp("MSKCredentialsSecret")}}
                ]
            },
        )
        assert "kafka-cluster:Connect" not in policy_actions(template)


class TestSelfManagedSourceFromConfig:

    def test_internet_brokers(self):
        stack, template = synth(make_config(self_managed={"enabled": True}))

        template.has_resource_properties(
            "AWS::Lambda::EventSourceMapping",
            {
                "SelfManagedEventSource": {
                    "Endpoints": {"KafkaBootstrapServers": ["kafka-1.example.com:9096", "kafka-2.example.com:9096"]}
                },
                "SourceAccessConfigurations": [
                    {"Type": "SASL_SCRAM_256_AUTH", "URI": {"Ref": Match.string_like_regexp("KafkaCredentialsSecret")}}
                ],
            },
        )
        template.resource_count_is("AWS::EC2::VPC", 0)
        assert stack.managed_source is None

    def test_vpc_brokers(self):
        _, template = synth(make_config(self_managed={"enabled": True, "use_vpc": True, "scram_username": None}))

        template.resource_count_is("AWS::EC2::VPC", 1)
        mappings = template.find_resources("AWS::Lambda::EventSourceMapping")
        configurations = next(iter(mappings.values()))["Properties"]["SourceAccessConfigurations"]
        types = [entry["Type"] for entry in configurations]
        assert types[0] == "VPC_SECURITY_GROUP"
        assert set(types[1:]) == {"VPC_SUBNET"}
        template.has_resource_properties(
            "AWS::EC2::SecurityGroup",
            {"GroupDescription": "kafka event source poller security group"},
        )

    def test_vpc_brokers_open_broker_security_group(self):
        _, template = synth(
            make_config(
                self_managed={
                    "enabled": True,
                    "use_vpc": True,
                    "scram_username": None,
                    "broker_security_group_id": "sg-0a1b2c3d4e5f60718",
                    "broker_port": 9094,
                }
            )
        )

        template.has_resource_properties(
            "AWS::EC2::SecurityGroupIngress",
            {
                "GroupId": "sg-0a1b2c3d4e5f60718",
                "IpProtocol": "tcp",
                "FromPort": 9094,
                "ToPort": 9094,
                "SourceSecurityGroupId": {
                    "Fn::GetAtt": [Match.string_like_regexp("KafkaEventSourceSecurityGroup"), "GroupId"]
                },
            },
        )

    def test_vpc_brokers_without_broker_security_group(self):
        _, template = synth(make_config(self_managed={"enabled": True, "use_vpc": True, "scram_username": None}))

        ingress_rules = template.find_resources(
            "AWS::EC2::SecurityGroupIngress",
            {"Properties": {"GroupId": "sg-0a1b2c3d4e5f60718"}},
        )
        assert ingress_rules == {}

    def test_internet_brokers_without_secret_are_rejected(self):
        with pytest.raises(KafkaEventSourceValidationError):
            synth(make_config(self_managed={"enabled": True, "scram_username": None}))


class TestBothSources:

    def test_both_sources_and_outputs(self):
        _, template = synth(make_config(managed={"enabled": True}, self_managed={"enabled": True}))

        template.resource_count_is("AWS::Lambda::EventSourceMapping", 2)
        outputs = template.find_outputs("*")
        assert "ManagedKafkaEventSourceMappingId" in outputs
        assert "SelfManagedKafkaEventSourceMappingId" in outputs
        assert "ConsumerFunctionName" in outputs
