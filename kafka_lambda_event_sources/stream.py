## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

"""
Shared building blocks for stream event sources.

Both Kafka sources call into these functions rather than inheriting from a
common base class.
"""

import logging
from typing import Any, Dict, Optional, Tuple

from aws_cdk import aws_lambda as _lambda

from .errors import EventSourceNotBoundError, KafkaEventSourceError
from .props import BaseStreamEventSourceProps, KafkaEventSourceProps

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100

TIMESTAMP_REQUIRED_ID = "@aws-cdk/aws-lambda-event-source:needStartingPositionTimestamp"
TIMESTAMP_REQUIRED_MESSAGE = "startingPositionTimestamp must be provided when startingPosition is AT_TIMESTAMP"
TIMESTAMP_NOT_ALLOWED_ID = "@aws-cdk/aws-lambda-event-source:invalidStartingPosition"
TIMESTAMP_NOT_ALLOWED_MESSAGE = "startingPositionTimestamp can only be used when startingPosition is AT_TIMESTAMP"

NOT_BOUND_MESSAGE = "KafkaEventSource is not yet bound to an event source mapping"


def enrich_mapping_options(props: BaseStreamEventSourceProps, **options: Any) -> Dict[str, Any]:
    """
    Merges the common stream options into a source-specific option set.

    Args:
        props: The props of the event source being bound
        **options: Source-specific keyword options for add_event_source_mapping

    Returns:
        Keyword options ready for IFunction.add_event_source_mapping, with
        unset (None) values dropped
    """
    enriched = {
        **options,
        "batch_size": props.batch_size or DEFAULT_BATCH_SIZE,
        "starting_position": props.starting_position,
        "max_batching_window": props.max_batching_window,
        "enabled": props.enabled,
        "provisioned_poller_config": props.provisioned_poller_config,
        "metrics_config": props.metrics_config,
    }
    return {key: value for key, value in enriched.items() if value is not None}


def check_starting_position(props: KafkaEventSourceProps) -> Optional[Tuple[str, str]]:
    """
    Checks that a starting timestamp is given exactly when it is needed.

    A timestamp of 0 counts as not given.

    Returns:
        (warning id, message) describing the inconsistency, or None
    """
    at_timestamp = props.starting_position == _lambda.StartingPosition.AT_TIMESTAMP
    has_timestamp = bool(props.starting_position_timestamp)

    if at_timestamp and not has_timestamp:
        return TIMESTAMP_REQUIRED_ID, TIMESTAMP_REQUIRED_MESSAGE
    if has_timestamp and not at_timestamp:
        return TIMESTAMP_NOT_ALLOWED_ID, TIMESTAMP_NOT_ALLOWED_MESSAGE
    return None


def access_configurations_or_none(configurations: list) -> Optional[list]:
    """An empty access configuration list is left out of the mapping entirely."""
    return configurations or None


class BoundMapping:
    """
    Holds the identity of an event source mapping once a source is bound.

    The pair is written exactly once; reading it earlier raises
    EventSourceNotBoundError.
    """

    def __init__(self):
        self._mapping_id = None
        self._mapping_arn = None

    @property
    def is_bound(self) -> bool:
        return self._mapping_id is not None

    def record(self, event_source_mapping: _lambda.EventSourceMapping) -> None:
        if self.is_bound:
            raise KafkaEventSourceError("KafkaEventSource is already bound to an event source mapping")
        self._mapping_id = event_source_mapping.event_source_mapping_id
        self._mapping_arn = event_source_mapping.event_source_mapping_arn
        logger.debug("Recorded event source mapping %s", self._mapping_id)

    @property
    def mapping_id(self) -> str:
        if not self._mapping_id:
            raise EventSourceNotBoundError(NOT_BOUND_MESSAGE)
        return self._mapping_id

    @property
    def mapping_arn(self) -> str:
        if not self._mapping_arn:
            raise EventSourceNotBoundError(NOT_BOUND_MESSAGE)
        return self._mapping_arn
