## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

from aws_cdk import aws_iam as iam
from .helper import get_topic_name, get_group_name

MSK_EXECUTION_ROLE_POLICY_NAME = "service-role/AWSLambdaMSKExecutionRole"


class MSKPolicyFactory:
    """
    Factory class for the IAM policies Lambda needs to poll Kafka.
    """

    @staticmethod
    def get_cluster_discovery_policy(kafka_cluster_arn):
        """
        Creates a policy statement letting Lambda's pollers discover the brokers of an MSK cluster.
        """
        return iam.PolicyStatement(
            actions=[
                "kafka:DescribeCluster",
                "kafka:GetBootstrapBrokers",
                "kafka:ListScramSecrets",
            ],
            resources=[kafka_cluster_arn],
        )

    @staticmethod
    def get_msk_execution_role_policy():
        """
        Returns the AWS managed policy for Lambda functions reading from MSK.
        """
        return iam.ManagedPolicy.from_aws_managed_policy_name(MSK_EXECUTION_ROLE_POLICY_NAME)

    @staticmethod
    def get_consumer_cluster_policy(kafka_cluster_arn):
        """
        Creates a policy statement for connecting to an IAM-authenticated cluster.
        """
        return iam.PolicyStatement(
            effect=iam.Effect.ALLOW,
            actions=[
                "kafka-cluster:Connect",
                "kafka-cluster:DescribeClusterDynamicConfiguration",
            ],
            resources=[kafka_cluster_arn],
        )

    @staticmethod
    def get_consumer_topic_policy(kafka_cluster_arn, topic_name="*"):
        """
        Creates a policy statement for reading a Kafka topic.
        """
        return iam.PolicyStatement(
            effect=iam.Effect.ALLOW,
            actions=[
                "kafka-cluster:DescribeTopic",
                "kafka-cluster:ReadData",
            ],
            resources=[get_topic_name(kafka_cluster_arn=kafka_cluster_arn, topic_name=topic_name)],
        )

    @staticmethod
    def get_consumer_group_policy(kafka_cluster_arn, group_name="*"):
        """
        Creates a policy statement for joining a consumer group.
        """
        return iam.PolicyStatement(
            effect=iam.Effect.ALLOW,
            actions=[
                "kafka-cluster:DescribeGroup",
                "kafka-cluster:AlterGroup",
            ],
            resources=[get_group_name(kafka_cluster_arn=kafka_cluster_arn, group_name=group_name)],
        )

    @classmethod
    def get_consumer_policies(cls, kafka_cluster_arn, topic_name="*", group_name="*"):
        """
        Returns every statement a consumer of an IAM-authenticated cluster needs.
        """
        return [
            cls.get_consumer_cluster_policy(kafka_cluster_arn),
            cls.get_consumer_topic_policy(kafka_cluster_arn, topic_name),
            cls.get_consumer_group_policy(kafka_cluster_arn, group_name),
        ]
