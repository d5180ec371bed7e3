## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

from aws_cdk import (
    Duration,
    aws_lambda as _lambda,
)

class LambdaFactory:
    """
    Factory class for Lambda functions that consume Kafka event sources.
    """
    
    @staticmethod
    def create_kafka_consumer_lambda(
        scope,
        id,
        code,
        handler="consumer.handler",
        environment=None,
        timeout=Duration.seconds(60),
        memory_size=256,
        runtime=_lambda.Runtime.PYTHON_3_12,
        description=None,
        role_policies=None,
    ):
        """
        Creates the Lambda function Kafka records are delivered to.
        
        Lambda's Kafka pollers run outside the function, so the function
        itself needs no VPC placement even for VPC-only clusters.
        
        Args:
            scope: The CDK construct scope
            id: The ID for the Lambda function
            code: The Lambda code
            handler: The handler function
            environment: Environment variables for the Lambda
            timeout: The Lambda timeout
            memory_size: The Lambda memory size
            runtime: The Lambda runtime
            description: Description for the Lambda function
            role_policies: Additional IAM policies to add to the Lambda role
            
        Returns:
            The created Lambda function
        """
        lambda_function = _lambda.Function(
            scope,
            id,
            runtime=runtime,
            handler=handler,
            timeout=timeout,
            memory_size=memory_size,
            code=code,
            environment=environment or {},
            description=description,
        )
        
        # Add additional policies if provided
        for policy in role_policies or []:
            lambda_function.add_to_role_policy(policy)
        
        return lambda_function
