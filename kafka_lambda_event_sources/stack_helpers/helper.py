## Copyright 2025 Amazon.com, Inc. or its affiliates. All Rights Reserved.
## SPDX-License-Identifier: LicenseRef-.amazon.com.-AmznSL-1.0
## Licensed under the Amazon Software License  https://aws.amazon.com/asl/

from aws_cdk import Fn as fn


## Helper functions
# MSK topic and group ARNs reuse the cluster's name and UUID:
#   arn:<partition>:kafka:<region>:<account>:cluster/<cluster name>/<cluster uuid>
#   arn:<partition>:kafka:<region>:<account>:<resource_type>/<cluster name>/<cluster uuid>/<name>
# Fn.split/Fn.select resolve literal ARNs immediately and fall back to
# intrinsics when the cluster ARN is a token.
def get_kafka_resource_arn(kafka_cluster_arn, resource_type, name):
    arn_parts = fn.split(":cluster/", kafka_cluster_arn, 2)
    return fn.join(
        delimiter="",
        list_of_values=[
            fn.select(0, arn_parts),
            f":{resource_type}/",
            fn.select(1, arn_parts),
            "/",
            name,
        ],
    )


def get_topic_name(kafka_cluster_arn, topic_name):
    return get_kafka_resource_arn(kafka_cluster_arn, "topic", topic_name)


def get_group_name(kafka_cluster_arn, group_name):
    return get_kafka_resource_arn(kafka_cluster_arn, "group", group_name)
