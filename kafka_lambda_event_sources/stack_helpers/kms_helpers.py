## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

from aws_cdk import (
    Duration,
    RemovalPolicy,
    aws_iam as iam,
    aws_kms as kms,
)
from constructs import Construct


class KMSFactory:
    """
    Factory class for customer-managed keys used by Kafka event sources.
    """

    @staticmethod
    def create_filter_criteria_key(
        scope: Construct,
        id: str,
        description: str = "Customer-managed key encrypting Kafka event source filter criteria",
        enable_rotation: bool = True,
    ) -> kms.Key:
        """
        Creates a key for encrypting event filter criteria.

        Lambda decrypts the criteria itself, so the key policy allows the
        Lambda service principal to use it.

        Args:
            scope: CDK construct scope
            id: Unique identifier for the key
            description: Human-readable description
            enable_rotation: Enable automatic annual key rotation (default: True)

        Returns:
            KMS Key construct
        """
        key = kms.Key(
            scope,
            id,
            description=description,
            enable_key_rotation=enable_rotation,
            removal_policy=RemovalPolicy.RETAIN,  # Never auto-delete encryption keys
            pending_window=Duration.days(7),
        )
        key.grant_decrypt(iam.ServicePrincipal("lambda.amazonaws.com"))
        return key

    @staticmethod
    def create_secret_key(scope: Construct, id: str) -> kms.Key:
        """Creates a key for encrypting Kafka credential secrets."""
        return kms.Key(
            scope,
            id,
            description="Customer-managed key for Kafka credential secrets",
            enable_key_rotation=True,
            removal_policy=RemovalPolicy.RETAIN,
        )
