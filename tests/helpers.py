"""Shared constants and template inspection helpers for the test suite."""

CLUSTER_ARN = "arn:aws:kafka:us-east-1:123456789012:cluster/orders-cluster/3f1b6c9e-5d2a-4c1e-8b0f-7a9d2e4c6b10-2"
ROOT_CA_ARN = "arn:aws:secretsmanager:us-east-1:123456789012:secret:kafka-root-ca-AbCdEf"
MSK_EXECUTION_ROLE_POLICY = {
    "Fn::Join": [
        "",
        ["arn:", {"Ref": "AWS::Partition"}, ":iam::aws:policy/service-role/AWSLambdaMSKExecutionRole"],
    ]
}


class FakeEventSourceMapping:
    event_source_mapping_id = "5b1d2c3a-mapping-id"
    event_source_mapping_arn = "arn:aws:lambda:us-east-1:123456789012:event-source-mapping:5b1d2c3a-mapping-id"


def single_mapping(template):
    mappings = template.find_resources("AWS::Lambda::EventSourceMapping")
    assert len(mappings) == 1
    return next(iter(mappings.values()))["Properties"]


def access_configuration_types(template):
    return [entry["Type"] for entry in single_mapping(template)["SourceAccessConfigurations"]]


def policy_actions(template):
    actions = []
    for policy in template.find_resources("AWS::IAM::Policy").values():
        for statement in policy["Properties"]["PolicyDocument"]["Statement"]:
            statement_actions = statement["Action"]
            if isinstance(statement_actions, str):
                statement_actions = [statement_actions]
            actions.extend(statement_actions)
    return actions
