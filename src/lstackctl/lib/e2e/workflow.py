# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""End-to-end example: image-based Lambda triggered by S3, results read by Fargate.

Steps run in order and block. Mandatory steps go through ``run_tool`` and
stop the run with the tool's status. Tolerant steps (resources that may
already exist from a previous run) go through ``try_tool``/``capture_or``
and only warn.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path

from .._util.ansi import status, warn
from .._util.logging_utils import _log_debug
from .._util.template_utils import render_resource
from ..core.config import EmulatorSettings, get_global_section, load_settings
from ..core.errors import DelegateError, EmulatorNotReady
from ..ecr.operations import ecr_login
from ..ecr.registry import iam_role_arn, lambda_function_arn, local_image, registry_image
from ..health import poll_until, wait_for_emulator
from ..tools import capture_or, run_tool, try_tool
from .documents import notification_configuration, reader_task_definition, write_document


@dataclass(frozen=True)
class E2ESettings:
    """Resource names and knobs of the example; overridable under ``e2e:``."""

    ecr_repo: str = "data-processor"
    lambda_function: str = "data-processor"
    s3_bucket: str = "raw-data-ingest"
    fargate_family: str = "result-reader"
    cluster_name: str = "default"
    service_name: str = "result-reader-service"
    account_id: str = "000000000000"
    lambda_role: str = "lambda-ex"
    base_image: str = "public.ecr.aws/lambda/python:3.9"
    internal_endpoint: str = "http://localstack:4566"
    """Emulator URL as seen from inside Lambda/Fargate containers."""

    input_prefix: str = "input/"
    output_prefix: str = "output/"
    input_suffix: str = ".csv"
    build_dir: str = "build"
    log_interval: float = 2.0
    log_retries: int = 5


def load_e2e_settings() -> E2ESettings:
    """Apply the global config's ``e2e:`` section over the defaults.

    Unknown keys are ignored; values are coerced to the field's type.
    """
    section = get_global_section("e2e")
    defaults = E2ESettings()
    overrides = {}
    for f in fields(E2ESettings):
        if f.name in section and section[f.name] is not None:
            overrides[f.name] = type(getattr(defaults, f.name))(section[f.name])
    return replace(defaults, **overrides)


def prepare_build_context(dest: Path, e2e: E2ESettings) -> Path:
    """Write the Lambda handler, requirements and Dockerfile into *dest*."""
    dest.mkdir(parents=True, exist_ok=True)
    variables = {
        "BASE_IMAGE": e2e.base_image,
        "INTERNAL_ENDPOINT": e2e.internal_endpoint,
        "INPUT_PREFIX": e2e.input_prefix,
        "OUTPUT_PREFIX": e2e.output_prefix,
        "INPUT_SUFFIX": e2e.input_suffix,
    }
    for template, name in (
        ("e2e/app.py.template", "app.py"),
        ("e2e/requirements.txt.template", "requirements.txt"),
        ("e2e/Dockerfile.template", "Dockerfile"),
    ):
        (dest / name).write_text(render_resource(template, variables), encoding="utf-8")
    return dest


class EndToEndRun:
    """One pass of the example workflow against the local emulator."""

    def __init__(
        self,
        settings: EmulatorSettings | None = None,
        e2e: E2ESettings | None = None,
        build_dir: Path | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self.e2e = e2e or load_e2e_settings()
        self.build_dir = Path(build_dir or self.e2e.build_dir)
        self.subnet_id = ""
        self.security_group_id = ""

    # ---------- command builders ----------

    def aws(self, *args: str) -> list[str]:
        return [self.settings.aws_cli, *args]

    def engine(self, *args: str) -> list[str]:
        return [self.settings.container_engine, *args]

    @property
    def image_uri(self) -> str:
        return registry_image(self.settings.registry_domain, self.e2e.ecr_repo)

    @property
    def function_arn(self) -> str:
        return lambda_function_arn(
            self.settings.region, self.e2e.account_id, self.e2e.lambda_function
        )

    # ---------- steps ----------

    def wait_for_emulator(self) -> None:
        if not wait_for_emulator(
            self.settings.health_url,
            interval=self.settings.health_interval,
            retries=self.settings.health_retries,
        ):
            _log_debug(f"e2e: emulator not ready at {self.settings.health_url}")
            raise EmulatorNotReady(self.settings.health_url)

    def build_image(self) -> None:
        status("INFO", "Step 1: Building Docker image for Lambda/Fargate")
        prepare_build_context(self.build_dir, self.e2e)
        run_tool(self.engine("build", "-t", local_image(self.e2e.ecr_repo), str(self.build_dir)))
        status("INFO", "Docker image built successfully")

    def push_image(self) -> None:
        status("INFO", "Step 2: Creating ECR repository and pushing image")
        try_tool(self.aws("ecr", "create-repository", "--repository-name", self.e2e.ecr_repo))
        try:
            ecr_login(settings=self.settings)
        except DelegateError as e:
            warn(f"ECR login failed ({e}); continuing")
        run_tool(self.engine("tag", local_image(self.e2e.ecr_repo), self.image_uri))
        run_tool(self.engine("push", self.image_uri))
        status("INFO", "Image pushed to local ECR")

    def create_bucket(self) -> None:
        status("INFO", "Step 3: Creating S3 bucket")
        bucket = self.e2e.s3_bucket
        try_tool(self.aws("s3", "mb", f"s3://{bucket}"))
        for prefix in (self.e2e.input_prefix, self.e2e.output_prefix):
            run_tool(
                self.aws(
                    "s3api", "put-object", "--bucket", bucket, "--key", prefix,
                    "--content-length", "0",
                )
            )
        status(
            "INFO",
            f"S3 bucket created with {self.e2e.input_prefix} and "
            f"{self.e2e.output_prefix} prefixes",
        )

    def create_function(self) -> None:
        status("INFO", "Step 4: Creating Lambda function")
        environment = (
            f"Variables={{LOG_LEVEL=DEBUG,AWS_ENDPOINT_URL={self.e2e.internal_endpoint}}}"
        )
        created = try_tool(
            self.aws(
                "lambda",
                "create-function",
                "--function-name",
                self.e2e.lambda_function,
                "--package-type",
                "Image",
                "--code",
                f"ImageUri={self.image_uri}",
                "--role",
                iam_role_arn(self.e2e.account_id, self.e2e.lambda_role),
                "--timeout",
                "60",
                "--environment",
                environment,
            )
        )
        if not created:
            warn("Lambda function already exists")
        status("INFO", "Lambda function created")

    def configure_notification(self) -> None:
        status("INFO", "Step 5: Configuring S3 event notification")
        uri = write_document(
            self.build_dir / "notification.json",
            notification_configuration(
                self.function_arn, self.e2e.input_prefix, self.e2e.input_suffix
            ),
        )
        run_tool(
            self.aws(
                "s3api",
                "put-bucket-notification-configuration",
                "--bucket",
                self.e2e.s3_bucket,
                "--notification-configuration",
                uri,
            )
        )
        status("INFO", "S3 event notification configured")

    def register_task_definition(self) -> None:
        status("INFO", "Step 6: Creating Fargate task definition")
        try_tool(self.aws("ecs", "create-cluster", "--cluster-name", self.e2e.cluster_name))

        # The emulator may not support every EC2 call; fixed ids keep the run going.
        vpc_id = capture_or(
            self.aws(
                "ec2", "create-vpc", "--cidr-block", "10.0.0.0/16",
                "--query", "Vpc.VpcId", "--output", "text",
            ),
            "vpc-123",
        )
        self.subnet_id = capture_or(
            self.aws(
                "ec2", "create-subnet", "--vpc-id", vpc_id, "--cidr-block", "10.0.1.0/24",
                "--query", "Subnet.SubnetId", "--output", "text",
            ),
            "subnet-123",
        )
        self.security_group_id = capture_or(
            self.aws(
                "ec2", "create-security-group", "--group-name", "fargate-sg",
                "--description", "Fargate SG", "--query", "GroupId", "--output", "text",
            ),
            "sg-123",
        )

        uri = write_document(
            self.build_dir / "fargate-task.json",
            reader_task_definition(
                family=self.e2e.fargate_family,
                image=self.image_uri,
                bucket=self.e2e.s3_bucket,
                output_prefix=self.e2e.output_prefix,
                region=self.settings.region,
                internal_endpoint=self.e2e.internal_endpoint,
            ),
        )
        try_tool(self.aws("ecs", "register-task-definition", "--cli-input-json", uri))
        status("INFO", "Fargate task definition registered")

    def upload_sample(self) -> None:
        status("INFO", "Step 7: Uploading test file to S3")
        sample = self.build_dir / f"test-data{self.e2e.input_suffix}"
        sample.write_text(render_resource("e2e/test-data.csv"), encoding="utf-8")
        run_tool(
            self.aws(
                "s3", "cp", str(sample),
                f"s3://{self.e2e.s3_bucket}/{self.e2e.input_prefix}{sample.name}",
            )
        )
        status("INFO", "File uploaded. Lambda should be triggered automatically.")

    def _follow_logs(self, group: str, label: str) -> None:
        found = poll_until(
            lambda: try_tool(self.aws("logs", "tail", group, "--since", "1m")),
            interval=self.e2e.log_interval,
            retries=self.e2e.log_retries,
            waiting_message=f"Waiting for {label} logs...",
        )
        if not found:
            warn(f"No {label} logs yet")

    def monitor_function(self) -> None:
        status("INFO", "Step 8: Monitoring Lambda logs")
        self._follow_logs(f"/aws/lambda/{self.e2e.lambda_function}", "Lambda")
        status("INFO", "Verifying output file was created")
        run_tool(self.aws("s3", "ls", f"s3://{self.e2e.s3_bucket}/{self.e2e.output_prefix}"))

    def start_service(self) -> None:
        status("INFO", "Step 9: Starting Fargate service")
        network = (
            f"awsvpcConfiguration={{subnets=[{self.subnet_id or 'subnet-123'}],"
            f"securityGroups=[{self.security_group_id or 'sg-123'}],assignPublicIp=ENABLED}}"
        )
        started = try_tool(
            self.aws(
                "ecs",
                "create-service",
                "--cluster",
                self.e2e.cluster_name,
                "--service-name",
                self.e2e.service_name,
                "--task-definition",
                self.e2e.fargate_family,
                "--desired-count",
                "1",
                "--launch-type",
                "FARGATE",
                "--network-configuration",
                network,
            )
        )
        if not started:
            warn("Fargate service already exists")
        status("INFO", "Fargate service started")

    def monitor_service(self) -> None:
        status("INFO", "Step 10: Monitoring Fargate logs")
        self._follow_logs(f"/ecs/{self.e2e.fargate_family}", "Fargate")

    def print_summary(self) -> None:
        e = self.e2e
        cli = self.settings.aws_cli
        print()
        print("=== Summary ===")
        status("INFO", "✓ Docker image built and pushed to ECR")
        status("INFO", "✓ Lambda function created and triggered by S3")
        status("INFO", f"✓ S3 bucket created with {e.input_prefix} and {e.output_prefix} prefixes")
        status("INFO", "✓ Fargate service deployed and monitoring output")
        print()
        print("Next steps:")
        print(f"  - Monitor Lambda: {cli} logs tail /aws/lambda/{e.lambda_function} --follow")
        print(f"  - Monitor Fargate: {cli} logs tail /ecs/{e.fargate_family} --follow")
        print(f"  - List output files: {cli} s3 ls s3://{e.s3_bucket}/{e.output_prefix}")
        print(f"  - Upload more files: {cli} s3 cp <file> s3://{e.s3_bucket}/{e.input_prefix}")
        print()
        print("Cleanup:")
        print(
            f"  - Stop Fargate: {cli} ecs update-service --cluster {e.cluster_name} "
            f"--service {e.service_name} --desired-count 0"
        )
        print(f"  - Delete function: {cli} lambda delete-function --function-name {e.lambda_function}")
        print(f"  - Delete bucket: {cli} s3 rb s3://{e.s3_bucket} --force")
        print()

    def run(self, *, wait: bool = True) -> None:
        """Run every step in order; the first failing mandatory step raises."""
        print("=== LocalStack End-to-End Example ===")
        print("Prerequisites: LocalStack running via docker-compose up -d")
        print()
        _log_debug(f"e2e: start (build_dir={self.build_dir})")
        if wait:
            self.wait_for_emulator()
        self.build_image()
        self.push_image()
        self.create_bucket()
        self.create_function()
        self.configure_notification()
        self.register_task_definition()
        self.upload_sample()
        self.monitor_function()
        self.start_service()
        self.monitor_service()
        self.print_summary()
        status("INFO", "Example complete!")
        _log_debug("e2e: done")
