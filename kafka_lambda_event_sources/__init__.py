## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

"""
Kafka event sources for AWS Lambda.

Exports:
- ManagedKafkaEventSource: Amazon MSK cluster as a Lambda event source
- SelfManagedKafkaEventSource: self-hosted Kafka brokers as a Lambda event source
- AuthenticationMethod: authentication methods for self-managed clusters
"""

from .errors import (
    EventSourceNotBoundError,
    KafkaEventSourceError,
    KafkaEventSourceValidationError,
)
from .kafka import ManagedKafkaEventSource, SelfManagedKafkaEventSource
from .props import (
    AuthenticationMethod,
    BaseStreamEventSourceProps,
    KafkaEventSourceProps,
    ManagedKafkaEventSourceProps,
    SelfManagedKafkaEventSourceProps,
)

__all__ = [
    "AuthenticationMethod",
    "BaseStreamEventSourceProps",
    "EventSourceNotBoundError",
    "KafkaEventSourceError",
    "KafkaEventSourceProps",
    "KafkaEventSourceValidationError",
    "ManagedKafkaEventSource",
    "ManagedKafkaEventSourceProps",
    "SelfManagedKafkaEventSource",
    "SelfManagedKafkaEventSourceProps",
]
