## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

import json

from aws_cdk import (
    RemovalPolicy,
    aws_secretsmanager as secretsmanager,
)


class SecretFactory:
    """
    Factory class for the secrets Kafka event sources authenticate with.
    """

    @staticmethod
    def create_scram_credentials_secret(scope, id, username, secret_name=None, encryption_key=None):
        """
        Creates a SASL/SCRAM credentials secret with a generated password.

        For Amazon MSK the secret name must start with "AmazonMSK_" and the
        secret must be encrypted with a customer-managed key.

        Args:
            scope: The CDK construct scope
            id: The ID for the secret
            username: The Kafka user the password is generated for
            secret_name: Optional physical name of the secret
            encryption_key: Optional customer-managed KMS key

        Returns:
            The created secret
        """
        return secretsmanager.Secret(
            scope,
            id,
            secret_name=secret_name,
            encryption_key=encryption_key,
            generate_secret_string=secretsmanager.SecretStringGenerator(
                secret_string_template=json.dumps({"username": username}),
                generate_string_key="password",
                exclude_punctuation=True,
            ),
            removal_policy=RemovalPolicy.DESTROY,
        )

    @staticmethod
    def import_secret(scope, id, secret_arn):
        """
        References an existing secret, e.g. a root CA certificate maintained outside the stack.
        """
        return secretsmanager.Secret.from_secret_complete_arn(scope, id, secret_arn)
