## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

"""
Kafka Event Sources for AWS Lambda
==================================

Two event sources attach a Kafka topic to a Lambda function:

1. ManagedKafkaEventSource: an Amazon MSK cluster referenced by ARN
2. SelfManagedKafkaEventSource: any Kafka cluster reachable through its
   bootstrap brokers, optionally placed inside a VPC

Both are passed to IFunction.add_event_source(), which calls bind() with the
function. Nothing here talks to a broker; the sources only describe the
event source mapping that Lambda's pollers will run.
"""

import hashlib
import json
import logging

import jsii
from aws_cdk import (
    Annotations,
    Names,
    Stack,
    aws_lambda as _lambda,
)
from constructs import Construct

from .errors import KafkaEventSourceValidationError
from .props import (
    ManagedKafkaEventSourceProps,
    SelfManagedKafkaEventSourceProps,
)
from .stack_helpers.iam_helpers import MSKPolicyFactory
from .stream import (
    BoundMapping,
    access_configurations_or_none,
    check_starting_position,
    enrich_mapping_options,
)

logger = logging.getLogger(__name__)


@jsii.implements(_lambda.IEventSource)
class ManagedKafkaEventSource:
    """
    Use an MSK cluster as a streaming source for AWS Lambda.

    Accepts the fields of ManagedKafkaEventSourceProps as keyword arguments.
    """

    def __init__(self, **kwargs) -> None:
        self.props = ManagedKafkaEventSourceProps(**kwargs)
        self._mapping = BoundMapping()

    def bind(self, target: _lambda.IFunction) -> None:
        props = self.props

        # MSK only warns here; the self-managed source rejects the same combination
        problem = check_starting_position(props)
        if problem is not None:
            warning_id, message = problem
            logger.warning("%s (topic=%s)", message, props.topic)
            Annotations.of(target).add_warning_v2(warning_id, message)

        mapping_id = f"KafkaEventSource:{Names.node_unique_id(target.node)}{props.topic}"
        access_configurations = self._source_access_configurations()
        logger.debug(
            "Binding MSK source %s with %d access configuration(s)",
            mapping_id,
            len(access_configurations or []),
        )

        event_source_mapping = target.add_event_source_mapping(
            mapping_id,
            **enrich_mapping_options(
                props,
                event_source_arn=props.cluster_arn,
                filters=props.filters,
                filter_encryption=props.filter_encryption,
                starting_position=props.starting_position,
                starting_position_timestamp=props.starting_position_timestamp,
                source_access_configurations=access_configurations,
                kafka_topic=props.topic,
                kafka_consumer_group_id=props.consumer_group_id,
                on_failure=props.on_failure,
                support_s3_on_failure_destination=True,
                provisioned_poller_config=props.provisioned_poller_config,
                schema_registry_config=props.schema_registry_config,
            ),
        )
        self._mapping.record(event_source_mapping)

        if props.secret is not None:
            props.secret.grant_read(target)

        target.add_to_role_policy(MSKPolicyFactory.get_cluster_discovery_policy(props.cluster_arn))

        if target.role is not None:
            target.role.add_managed_policy(MSKPolicyFactory.get_msk_execution_role_policy())

    def _source_access_configurations(self):
        configurations = []
        if self.props.secret is not None:
            # Amazon MSK only supports SCRAM-SHA-512 for secret based authentication
            configurations.append(
                _lambda.SourceAccessConfiguration(
                    type=_lambda.SourceAccessConfigurationType.SASL_SCRAM_512_AUTH,
                    uri=self.props.secret.secret_arn,
                )
            )
        return access_configurations_or_none(configurations)

    @property
    def event_source_mapping_id(self) -> str:
        """The identifier for this EventSourceMapping."""
        return self._mapping.mapping_id

    @property
    def event_source_mapping_arn(self) -> str:
        """The ARN for this EventSourceMapping."""
        return self._mapping.mapping_arn


@jsii.implements(_lambda.IEventSource)
class SelfManagedKafkaEventSource:
    """
    Use a self-hosted Kafka installation as a streaming source for AWS Lambda.

    Accepts the fields of SelfManagedKafkaEventSourceProps as keyword
    arguments. If the brokers are only reachable through a VPC, pass vpc,
    vpc_subnets and security_group together; otherwise a secret is required.

    Raises:
        KafkaEventSourceValidationError: if the options cannot be combined
    """

    def __init__(self, **kwargs) -> None:
        props = SelfManagedKafkaEventSourceProps(**kwargs)

        if props.vpc is not None:
            if props.security_group is None:
                self._fail("securityGroup must be set when providing vpc")
            if props.vpc_subnets is None:
                self._fail("vpcSubnets must be set when providing vpc")
        elif props.secret is None:
            self._fail("secret must be set if Kafka brokers accessed over Internet")

        problem = check_starting_position(props)
        if problem is not None:
            self._fail(problem[1])

        self.props = props
        self._mapping = BoundMapping()

    @staticmethod
    def _fail(message):
        logger.debug("Rejecting self-managed Kafka source: %s", message)
        raise KafkaEventSourceValidationError(message)

    def bind(self, target: _lambda.IFunction) -> None:
        if not Construct.is_construct(target):
            raise KafkaEventSourceValidationError("Function is not a construct. Unexpected error.")

        props = self.props
        mapping_id = self.mapping_id_for(target)
        access_configurations = self._source_access_configurations()
        logger.debug(
            "Binding self-managed Kafka source %s with %d access configuration(s)",
            mapping_id,
            len(access_configurations or []),
        )

        event_source_mapping = target.add_event_source_mapping(
            mapping_id,
            **enrich_mapping_options(
                props,
                filters=props.filters,
                filter_encryption=props.filter_encryption,
                kafka_bootstrap_servers=props.bootstrap_servers,
                kafka_topic=props.topic,
                kafka_consumer_group_id=props.consumer_group_id,
                starting_position=props.starting_position,
                starting_position_timestamp=props.starting_position_timestamp,
                source_access_configurations=access_configurations,
                on_failure=props.on_failure,
                support_s3_on_failure_destination=True,
                provisioned_poller_config=props.provisioned_poller_config,
                schema_registry_config=props.schema_registry_config,
            ),
        )
        self._mapping.record(event_source_mapping)

        if props.secret is not None:
            props.secret.grant_read(target)

    def mapping_id_for(self, target: _lambda.IFunction) -> str:
        """
        Builds the construct id of the mapping from the brokers and the topic.

        The resolved broker list is hashed so that two clusters serving a
        topic with the same name do not collide on the same function.
        """
        servers = Stack.of(target).resolve(self.props.bootstrap_servers)
        id_hash = hashlib.md5(json.dumps(servers, separators=(",", ":")).encode("utf-8")).hexdigest()
        return f"KafkaEventSource:{id_hash}:{self.props.topic}"

    def _source_access_configurations(self):
        props = self.props
        configurations = []

        if props.secret is not None:
            configurations.append(
                _lambda.SourceAccessConfiguration(
                    type=props.authentication_method.source_access_configuration_type,
                    uri=props.secret.secret_arn,
                )
            )

        if props.root_ca_certificate is not None:
            configurations.append(
                _lambda.SourceAccessConfiguration(
                    type=_lambda.SourceAccessConfigurationType.SERVER_ROOT_CA_CERTIFICATE,
                    uri=props.root_ca_certificate.secret_arn,
                )
            )

        if props.vpc_subnets is not None and props.security_group is not None:
            configurations.append(
                _lambda.SourceAccessConfiguration(
                    type=_lambda.SourceAccessConfigurationType.VPC_SECURITY_GROUP,
                    uri=props.security_group.security_group_id,
                )
            )
            if props.vpc is not None:
                for subnet_id in _select_subnet_ids(props.vpc, props.vpc_subnets):
                    configurations.append(
                        _lambda.SourceAccessConfiguration(
                            type=_lambda.SourceAccessConfigurationType.VPC_SUBNET,
                            uri=subnet_id,
                        )
                    )

        return access_configurations_or_none(configurations)

    @property
    def event_source_mapping_id(self) -> str:
        """The identifier for this EventSourceMapping."""
        return self._mapping.mapping_id

    @property
    def event_source_mapping_arn(self) -> str:
        """The ARN for this EventSourceMapping."""
        return self._mapping.mapping_arn


def _select_subnet_ids(vpc, selection):
    """Resolves a SubnetSelection against the VPC into concrete subnet ids."""
    return vpc.select_subnets(
        availability_zones=selection.availability_zones,
        one_per_az=selection.one_per_az,
        subnet_filters=selection.subnet_filters,
        subnet_group_name=selection.subnet_group_name,
        subnets=selection.subnets,
        subnet_type=selection.subnet_type,
    ).subnet_ids
