#!/usr/bin/env python3
"""
Kafka Lambda Event Sources - CDK Main Application
=================================================

This application deploys a Lambda consumer bound to Kafka topics through
event source mappings:
1. Amazon MSK source: cluster referenced by ARN, SASL/SCRAM or IAM authentication
2. Self-managed source: bootstrap brokers, reached over the Internet or through a VPC

Environment Configuration:
- Use CDK_ENV environment variable to select environment (dev, prod)
- Configurations are loaded from config/{environment}.json
- Default environment is 'dev'
"""

import json
import logging
import os
import cdk_nag
from aws_cdk import Aspects
import aws_cdk as cdk

from kafka_lambda_event_sources.kafka_consumer_stack import KafkaConsumerStack

logger = logging.getLogger(__name__)


def load_config(base_path="project_config.json", config_dir="config"):
    """
    Load configuration from project_config.json and environment-specific config.

    Args:
        base_path: Path of the base configuration file
        config_dir: Directory holding the {environment}.json overrides

    Returns:
        dict: Merged configuration dictionary
    """
    with open(base_path, "r") as f:
        base_config = json.load(f)

    environment = os.environ.get("CDK_ENV", base_config.get("project", {}).get("environment", "dev"))
    config_path = os.path.join(config_dir, f"{environment}.json")

    try:
        with open(config_path, "r") as f:
            env_config = json.load(f)
    except FileNotFoundError:
        logger.warning("Environment config not found: %s. Using base configuration.", config_path)
        return base_config

    # Top-level sections of the environment config replace the base ones
    return {**base_config, **env_config}


def main():
    """Initialize and synthesize the CDK application."""

    config = load_config()
    logging.basicConfig(
        level=config.get("observability", {}).get("log_level", "INFO"),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    environment = config.get("environment", "dev")

    logger.info("Deploying Kafka consumer (environment=%s, project=%s)", environment, config["project"]["name"])

    app = cdk.App()

    env = cdk.Environment(
        account=app.node.try_get_context("account") or os.environ.get("CDK_DEFAULT_ACCOUNT"),
        region=app.node.try_get_context("region") or os.environ.get("CDK_DEFAULT_REGION"),
    )

    KafkaConsumerStack(
        app,
        config["stacks"]["kafka_consumer_stack_name"],
        config=config,
        env=env,
        description="Lambda consumer bound to Kafka through event source mappings",
    )

    # Add AWS Solutions Checks for best practices
    Aspects.of(app).add(cdk_nag.AwsSolutionsChecks(reports=True, verbose=True))

    app.synth()


if __name__ == "__main__":
    main()
