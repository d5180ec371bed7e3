"""
Kafka Consumer Stack
====================

This stack wires a Lambda consumer to Kafka through event source mappings.

Components:
- Consumer Lambda function the Kafka records are delivered to
- Amazon MSK event source (SASL/SCRAM secret or IAM authentication)
- Self-managed Kafka event source, reached over the Internet with a secret
  or through a VPC with a dedicated poller security group, optionally
  opened on the broker security group
- Customer-managed KMS keys for filter criteria and credential secrets

Everything is driven by the "event_sources" section of the configuration.
"""

import logging

from aws_cdk import (
    Duration,
    Stack,
    aws_ec2 as ec2,
    aws_lambda as _lambda,
    CfnOutput,
    Tags,
)
from constructs import Construct

from kafka_lambda_event_sources.kafka import ManagedKafkaEventSource, SelfManagedKafkaEventSource
from kafka_lambda_event_sources.stack_helpers.iam_helpers import MSKPolicyFactory
from kafka_lambda_event_sources.stack_helpers.kms_helpers import KMSFactory
from kafka_lambda_event_sources.stack_helpers.lambda_helpers import LambdaFactory
from kafka_lambda_event_sources.stack_helpers.nag_helpers import NagSuppressionHelper
from kafka_lambda_event_sources.stack_helpers.secret_helpers import SecretFactory
from kafka_lambda_event_sources.stack_helpers.security_group_helpers import SecurityGroupFactory
from kafka_lambda_event_sources.stack_helpers.vpc_helpers import VPCFactory

logger = logging.getLogger(__name__)


class KafkaConsumerStack(Stack):
    """
    Attaches the configured Kafka event sources to a consumer Lambda.

    Outputs:
    - ConsumerFunctionName: Name of the consumer Lambda
    - ManagedKafkaEventSourceMappingId: Mapping id of the MSK source (if enabled)
    - SelfManagedKafkaEventSourceMappingId: Mapping id of the self-managed source (if enabled)
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        config: dict,
        code: _lambda.Code = None,
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.config = config
        sources_config = config["event_sources"]
        consumer_config = config.get("consumer", {})

        # ======================================================================
        # STEP 1: Consumer Lambda
        # ======================================================================
        self.consumer_function = LambdaFactory.create_kafka_consumer_lambda(
            scope=self,
            id="KafkaConsumerFunction",
            code=code or _lambda.Code.from_asset(consumer_config.get("code_path", "./lambda/consumer_lambda/")),
            handler=consumer_config.get("handler", "consumer.handler"),
            memory_size=consumer_config.get("memory_size", 256),
            timeout=Duration.seconds(consumer_config.get("timeout_seconds", 60)),
            environment={
                "LOG_LEVEL": config.get("observability", {}).get("log_level", "INFO"),
            },
            description="Consumes records delivered by Kafka event source mappings",
        )

        # ======================================================================
        # STEP 2: Options shared by both sources
        # ======================================================================
        common_options = self._common_source_options(sources_config)

        # ======================================================================
        # STEP 3: Amazon MSK event source
        # ======================================================================
        self.managed_source = None
        managed_config = sources_config.get("managed", {})
        if managed_config.get("enabled", False):
            self.managed_source = self._add_managed_source(managed_config, common_options)
            CfnOutput(
                self,
                "ManagedKafkaEventSourceMappingId",
                value=self.managed_source.event_source_mapping_id,
                description="Event source mapping id of the MSK source",
            )

        # ======================================================================
        # STEP 4: Self-managed Kafka event source
        # ======================================================================
        self.self_managed_source = None
        self_managed_config = sources_config.get("self_managed", {})
        if self_managed_config.get("enabled", False):
            self.self_managed_source = self._add_self_managed_source(self_managed_config, common_options)
            CfnOutput(
                self,
                "SelfManagedKafkaEventSourceMappingId",
                value=self.self_managed_source.event_source_mapping_id,
                description="Event source mapping id of the self-managed Kafka source",
            )

        CfnOutput(
            self,
            "ConsumerFunctionName",
            value=self.consumer_function.function_name,
            description="Name of the Kafka consumer Lambda",
        )

        # ======================================================================
        # STEP 5: Tags and CDK Nag suppressions
        # ======================================================================
        Tags.of(self).add("Stack", "KafkaConsumer")
        Tags.of(self).add("Environment", config.get("environment", "dev"))

        NagSuppressionHelper.suppress_kafka_consumer_role(resources=[self.consumer_function.role])
        NagSuppressionHelper.suppress_lambda_runtime(resources=[self.consumer_function])

    def _common_source_options(self, sources_config):
        options = {
            "topic": sources_config["topic"],
            "starting_position": _lambda.StartingPosition[sources_config.get("starting_position", "TRIM_HORIZON")],
            "batch_size": sources_config.get("batch_size"),
            "consumer_group_id": sources_config.get("consumer_group_id"),
            "starting_position_timestamp": sources_config.get("starting_position_timestamp"),
        }

        if sources_config.get("max_batching_window_seconds") is not None:
            options["max_batching_window"] = Duration.seconds(sources_config["max_batching_window_seconds"])

        filter_patterns = sources_config.get("filters", [])
        if filter_patterns:
            options["filters"] = [_lambda.FilterCriteria.filter(pattern) for pattern in filter_patterns]
            if sources_config.get("encrypt_filters", False):
                options["filter_encryption"] = KMSFactory.create_filter_criteria_key(self, "FilterCriteriaKey")

        return options

    def _add_managed_source(self, managed_config, common_options):
        cluster_arn = managed_config["cluster_arn"]
        secret = None

        if managed_config.get("scram_username"):
            secret_key = KMSFactory.create_secret_key(self, "MSKCredentialsKey")
            secret = SecretFactory.create_scram_credentials_secret(
                scope=self,
                id="MSKCredentialsSecret",
                username=managed_config["scram_username"],
                secret_name=f"AmazonMSK_{self.stack_name}",
                encryption_key=secret_key,
            )
            NagSuppressionHelper.suppress_credentials_rotation(resources=[secret])
        else:
            # No secret means IAM authentication against the cluster
            for policy in MSKPolicyFactory.get_consumer_policies(
                cluster_arn,
                group_name=common_options.get("consumer_group_id") or "*",
            ):
                self.consumer_function.add_to_role_policy(policy)

        source = ManagedKafkaEventSource(cluster_arn=cluster_arn, secret=secret, **common_options)
        self.consumer_function.add_event_source(source)
        logger.info("Attached MSK event source for topic %s", common_options["topic"])
        return source

    def _add_self_managed_source(self, self_managed_config, common_options):
        options = dict(common_options)
        options["bootstrap_servers"] = self_managed_config["bootstrap_servers"]
        options["authentication_method"] = self_managed_config.get("authentication_method", "SASL_SCRAM_512_AUTH")

        if self_managed_config.get("scram_username"):
            options["secret"] = SecretFactory.create_scram_credentials_secret(
                scope=self,
                id="KafkaCredentialsSecret",
                username=self_managed_config["scram_username"],
            )
            NagSuppressionHelper.suppress_credentials_rotation(resources=[options["secret"]])

        if self_managed_config.get("root_ca_secret_arn"):
            options["root_ca_certificate"] = SecretFactory.import_secret(
                self, "KafkaRootCACertificate", self_managed_config["root_ca_secret_arn"]
            )

        if self_managed_config.get("use_vpc", False):
            vpc_config = self.config["vpc"]
            self.vpc = VPCFactory.create_vpc_with_flow_logs(
                scope=self,
                id="KafkaVPC",
                cidr_range=vpc_config["cidr_range"],
                cidr_mask=vpc_config.get("cidr_mask", 24),
            )
            options["vpc"] = self.vpc
            options["vpc_subnets"] = VPCFactory.private_subnets()
            options["security_group"] = SecurityGroupFactory.create_kafka_client_security_group(
                scope=self,
                id="KafkaEventSourceSecurityGroup",
                vpc=self.vpc,
            )
            if self_managed_config.get("broker_security_group_id"):
                broker_security_group = ec2.SecurityGroup.from_security_group_id(
                    self, "KafkaBrokerSecurityGroup", self_managed_config["broker_security_group_id"]
                )
                SecurityGroupFactory.allow_broker_access(
                    client_sg=options["security_group"],
                    broker_sg=broker_security_group,
                    port=self_managed_config.get("broker_port", 9096),
                )

        source = SelfManagedKafkaEventSource(**options)
        self.consumer_function.add_event_source(source)
        logger.info(
            "Attached self-managed Kafka event source for topic %s (%d broker(s))",
            options["topic"],
            len(options["bootstrap_servers"]),
        )
        return source
