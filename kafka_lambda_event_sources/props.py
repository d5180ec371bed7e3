## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

"""
Property records for Kafka event sources.

Each event source freezes its keyword arguments into one of these records at
construction time. The hierarchy mirrors the option groups:

1. BaseStreamEventSourceProps: batching/polling options shared by every stream source
2. KafkaEventSourceProps: topic, credentials, filtering and failure handling
3. ManagedKafkaEventSourceProps: Amazon MSK cluster reference
4. SelfManagedKafkaEventSourceProps: bootstrap brokers, VPC placement, auth method
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from aws_cdk import (
    Duration,
    aws_ec2 as ec2,
    aws_kms as kms,
    aws_lambda as _lambda,
    aws_secretsmanager as secretsmanager,
)


class AuthenticationMethod(str, Enum):
    """The authentication method used by a self-managed Kafka cluster."""

    SASL_SCRAM_512_AUTH = "SASL_SCRAM_512_AUTH"
    SASL_SCRAM_256_AUTH = "SASL_SCRAM_256_AUTH"
    # SASL/PLAIN
    BASIC_AUTH = "BASIC_AUTH"
    # mTLS
    CLIENT_CERTIFICATE_TLS_AUTH = "CLIENT_CERTIFICATE_TLS_AUTH"

    @property
    def source_access_configuration_type(self) -> _lambda.SourceAccessConfigurationType:
        """The access configuration type Lambda expects for this method."""
        return getattr(_lambda.SourceAccessConfigurationType, self.value)


@dataclass(frozen=True, kw_only=True)
class BaseStreamEventSourceProps:
    """
    Options merged into every stream event source mapping.

    Fields:
        starting_position: Where in the stream consumption begins
        batch_size: Largest number of records per invocation (100 when unset)
        max_batching_window: Longest time to gather records before invoking
        enabled: Whether the mapping is active once created
        provisioned_poller_config: Minimum/maximum event pollers for provisioned mode
        metrics_config: Enhanced metrics for the mapping
    """
    starting_position: _lambda.StartingPosition
    batch_size: Optional[int] = None
    max_batching_window: Optional[Duration] = None
    enabled: Optional[bool] = None
    provisioned_poller_config: Optional[_lambda.ProvisionedPollerConfig] = None
    metrics_config: Optional[_lambda.MetricsConfig] = None


@dataclass(frozen=True, kw_only=True)
class KafkaEventSourceProps(BaseStreamEventSourceProps):
    """
    Options common to managed and self-managed Kafka sources.

    Fields:
        topic: The Kafka topic to subscribe to
        secret: Secret holding the Kafka credentials. Required when brokers
                are reached over the Internet
        consumer_group_id: Consumer group to join; cannot change once the mapping exists
        filters: Event filtering patterns
        filter_encryption: Customer managed key encrypting the filter criteria
        on_failure: Destination for discarded records (SNS, SQS or S3)
        starting_position_timestamp: Unix time, in seconds, to start reading from.
                                     Only valid with StartingPosition.AT_TIMESTAMP
        schema_registry_config: Schema registry used to decode records
    """
    topic: str
    secret: Optional[secretsmanager.ISecret] = None
    consumer_group_id: Optional[str] = None
    filters: Optional[List[Dict[str, Any]]] = None
    filter_encryption: Optional[kms.IKey] = None
    on_failure: Optional[_lambda.IEventSourceDlq] = None
    starting_position_timestamp: Optional[float] = None
    schema_registry_config: Optional[_lambda.ISchemaRegistry] = None


@dataclass(frozen=True, kw_only=True)
class ManagedKafkaEventSourceProps(KafkaEventSourceProps):
    """
    Options for an Amazon MSK event source.

    Fields:
        cluster_arn: ARN of the MSK cluster
    """
    cluster_arn: str


@dataclass(frozen=True, kw_only=True)
class SelfManagedKafkaEventSourceProps(KafkaEventSourceProps):
    """
    Options for a self-hosted Kafka event source.

    If the brokers are only reachable inside a VPC, vpc, vpc_subnets and
    security_group must all be given.

    Fields:
        bootstrap_servers: Broker addresses in host:port form
        vpc: VPC the brokers live in
        vpc_subnets: Subnets Lambda pollers are placed into
        security_group: Security group attached to the pollers
        authentication_method: How the secret authenticates against the brokers
        root_ca_certificate: Secret holding the root CA for brokers signed by a private CA
    """
    bootstrap_servers: List[str]
    vpc: Optional[ec2.IVpc] = None
    vpc_subnets: Optional[ec2.SubnetSelection] = None
    security_group: Optional[ec2.ISecurityGroup] = None
    authentication_method: AuthenticationMethod = AuthenticationMethod.SASL_SCRAM_512_AUTH
    root_ca_certificate: Optional[secretsmanager.ISecret] = None

    def __post_init__(self):
        # Accept plain strings, e.g. "BASIC_AUTH" read from configuration
        object.__setattr__(self, "authentication_method", AuthenticationMethod(self.authentication_method))
        object.__setattr__(self, "bootstrap_servers", list(self.bootstrap_servers))
