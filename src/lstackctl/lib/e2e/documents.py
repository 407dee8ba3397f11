# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""JSON documents handed to the cloud CLI as ``file://`` inputs."""

import json
from pathlib import Path
from typing import Any


def notification_configuration(
    function_arn: str, input_prefix: str, input_suffix: str
) -> dict[str, Any]:
    """S3 -> Lambda trigger for objects created under *input_prefix* ending in *input_suffix*."""
    return {
        "LambdaFunctionConfigurations": [
            {
                "LambdaFunctionArn": function_arn,
                "Events": ["s3:ObjectCreated:*"],
                "Filter": {
                    "Key": {
                        "FilterRules": [
                            {"Name": "prefix", "Value": input_prefix},
                            {"Name": "suffix", "Value": input_suffix},
                        ]
                    }
                },
            }
        ]
    }


def reader_task_definition(
    *,
    family: str,
    image: str,
    bucket: str,
    output_prefix: str,
    region: str,
    internal_endpoint: str,
) -> dict[str, Any]:
    """Fargate task that lists the bucket's output prefix every 30 seconds."""
    watch = (
        f"while true; do aws s3 ls s3://{bucket}/{output_prefix} "
        f"--endpoint-url={internal_endpoint} --no-verify-ssl; sleep 30; done"
    )
    return {
        "family": family,
        "networkMode": "awsvpc",
        "requiresCompatibilities": ["FARGATE"],
        "cpu": "256",
        "memory": "512",
        "containerDefinitions": [
            {
                "name": "reader-container",
                "image": image,
                "entryPoint": ["/bin/sh"],
                "command": ["-c", watch],
                "environment": [
                    {"name": "AWS_ENDPOINT_URL", "value": internal_endpoint},
                    {"name": "AWS_DEFAULT_REGION", "value": region},
                    {"name": "AWS_ACCESS_KEY_ID", "value": "test"},
                    {"name": "AWS_SECRET_ACCESS_KEY", "value": "test"},
                ],
                "logConfiguration": {
                    "logDriver": "awslogs",
                    "options": {
                        "awslogs-group": f"/ecs/{family}",
                        "awslogs-region": region,
                        "awslogs-stream-prefix": "ecs",
                        "awslogs-create-group": "true",
                    },
                },
            }
        ],
    }


def write_document(path: Path, document: dict[str, Any]) -> str:
    """Write *document* as JSON to *path* and return its ``file://`` URI."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
    # The AWS CLI opens the text after "file://" verbatim; it must not be percent-encoded.
    return f"file://{path.resolve()}"
