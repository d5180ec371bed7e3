## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

from cdk_nag import NagSuppressions

class NagSuppressionHelper:
    """
    Helper class for applying CDK Nag suppressions in a consistent way.
    """
    
    @staticmethod
    def suppress_kafka_consumer_role(resources, apply_to_children=True):
        """
        Applies suppressions for the role of a Lambda function bound to a Kafka event source.
        
        Args:
            resources: The resources to apply suppressions to
            apply_to_children: Whether to apply suppressions to child resources
        """
        NagSuppressions.add_resource_suppressions(
            resources,
            suppressions=[
                {
                    "id": "AwsSolutions-IAM4",
                    "reason": "Kafka event sources attach AWSLambdaBasicExecutionRole and AWSLambdaMSKExecutionRole to the consumer role.",
                },
                {
                    "id": "AwsSolutions-IAM5",
                    "reason": "Consumer group and topic permissions are granted per cluster with wildcard resource names.",
                },
            ],
            apply_to_children=apply_to_children,
        )
    
    @staticmethod
    def suppress_credentials_rotation(resources, apply_to_children=True):
        """
        Applies suppressions for Kafka credential secrets without rotation.
        
        Args:
            resources: The resources to apply suppressions to
            apply_to_children: Whether to apply suppressions to child resources
        """
        NagSuppressions.add_resource_suppressions(
            resources,
            suppressions=[
                {
                    "id": "AwsSolutions-SMG4",
                    "reason": "SASL/SCRAM users are managed on the brokers; rotation is driven by the cluster operator.",
                },
            ],
            apply_to_children=apply_to_children,
        )
    
    @staticmethod
    def suppress_lambda_runtime(resources, apply_to_children=True):
        """
        Applies suppressions for Lambda runtime warnings.
        
        Args:
            resources: The resources to apply suppressions to
            apply_to_children: Whether to apply suppressions to child resources
        """
        NagSuppressions.add_resource_suppressions(
            resources,
            suppressions=[
                {
                    "id": "AwsSolutions-L1",
                    "reason": "Consumer runtime is pinned by configuration rather than tracking the latest release.",
                },
            ],
            apply_to_children=apply_to_children,
        )
