## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

"""Exceptions raised while configuring Kafka event sources."""


class KafkaEventSourceError(Exception):
    """Base class for all Kafka event source errors."""


class KafkaEventSourceValidationError(KafkaEventSourceError, ValueError):
    """Raised when the supplied options cannot be combined into a valid mapping."""


class EventSourceNotBoundError(KafkaEventSourceError, RuntimeError):
    """Raised when mapping identifiers are read before the source is bound."""
