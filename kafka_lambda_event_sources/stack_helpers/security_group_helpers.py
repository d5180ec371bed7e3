## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

from aws_cdk import aws_ec2 as ec2

# Broker listener ports
KAFKA_PORTS = [(9092, "Kafka plaintext"), (9094, "Kafka TLS"), (9096, "Kafka SASL/SCRAM")]


class SecurityGroupFactory:
    """
    Factory class for security groups around Kafka event source pollers.
    """
    
    @staticmethod
    def create_kafka_client_security_group(scope, id, vpc, description="kafka event source poller security group"):
        """
        Creates the security group Lambda attaches to the pollers of a
        self-managed Kafka event source.
        
        Lambda requires the group to allow traffic to and from itself on the
        broker ports.
        
        Args:
            scope: The CDK construct scope
            id: The ID for the security group
            vpc: The VPC to create the security group in
            description: Description for the security group
            
        Returns:
            The created security group
        """
        security_group = ec2.SecurityGroup(
            scope,
            id,
            vpc=vpc,
            description=description,
        )
        
        for port, port_description in KAFKA_PORTS:
            security_group.connections.allow_internally(
                ec2.Port.tcp(port), description=port_description
            )
        
        return security_group
    
    @staticmethod
    def allow_broker_access(client_sg, broker_sg, port=9096):
        """
        Allows the pollers to reach the brokers on a specific port.
        
        Args:
            client_sg: The poller security group
            broker_sg: The security group of the brokers
            port: The broker port (default: 9096 for SASL/SCRAM)
        """
        broker_sg.connections.allow_from(
            other=client_sg.connections,
            port_range=ec2.Port.tcp(port),
            description=f"from KafkaEventSource{client_sg.node.id}:{port}",
        )
