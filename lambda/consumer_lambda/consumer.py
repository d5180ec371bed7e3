## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

import logging
import os

logger = logging.getLogger()
logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))


def handler(event, context):
    # Kafka events group records by "<topic>-<partition>"
    records = event.get("records", {})
    total = 0
    for partition, partition_records in records.items():
        total += len(partition_records)
        logger.info(
            "Received %d record(s) from %s (offsets %s-%s)",
            len(partition_records),
            partition,
            partition_records[0]["offset"] if partition_records else "-",
            partition_records[-1]["offset"] if partition_records else "-",
        )

    logger.info("Batch from %s contained %d record(s)", event.get("eventSource"), total)
    return {"batchItemFailures": []}
