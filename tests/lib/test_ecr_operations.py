import io
import subprocess
import unittest
import unittest.mock
from contextlib import redirect_stdout

from lstackctl.lib.core.errors import DelegateError
from lstackctl.lib.ecr import operations
from test_utils import commands_of, config_env, fake_run, make_settings

DOMAIN = "localhost.localstack.cloud:4566"


class EcrOperationTests(unittest.TestCase):
    """Command lines assembled for each registry operation."""

    def _run(self, fn, *args, failures=None, stdout="secret\n", settings=None):
        """Call *fn* with subprocess.run patched; return (mock, captured stdout)."""
        out = io.StringIO()
        with config_env():
            with (
                unittest.mock.patch(
                    "lstackctl.lib.tools.subprocess.run",
                    side_effect=fake_run(failures, stdout),
                ) as mock_run,
                redirect_stdout(out),
            ):
                fn(*args, settings=settings or make_settings())
        return mock_run, out.getvalue()

    def test_create_repo(self) -> None:
        mock_run, out = self._run(operations.create_repo, "demo")
        self.assertEqual(
            commands_of(mock_run),
            [
                [
                    "awslocal", "ecr", "create-repository",
                    "--repository-name", "demo",
                    "--image-scanning-configuration", "scanOnPush=true",
                    "--region", "us-east-1",
                ]
            ],
        )
        self.assertIn("[ECR] Creating repository: demo", out)
        self.assertIn("[ECR] Repository created successfully", out)

    def test_list_repos(self) -> None:
        mock_run, _ = self._run(operations.list_repos)
        (cmd,) = commands_of(mock_run)
        self.assertEqual(cmd[:5], ["awslocal", "ecr", "describe-repositories", "--region", "us-east-1"])
        self.assertEqual(cmd[5:7], ["--query", operations.REPOSITORY_QUERY])
        self.assertEqual(cmd[-2:], ["--output", "table"])

    def test_list_images(self) -> None:
        mock_run, _ = self._run(operations.list_images, "demo")
        (cmd,) = commands_of(mock_run)
        self.assertEqual(
            cmd,
            [
                "awslocal", "ecr", "describe-images",
                "--repository-name", "demo",
                "--region", "us-east-1",
                "--query", operations.IMAGE_QUERY,
                "--output", "table",
            ],
        )

    def test_login_pipes_password_into_engine(self) -> None:
        mock_run, out = self._run(operations.ecr_login)
        calls = mock_run.call_args_list
        self.assertEqual(len(calls), 2)
        self.assertEqual(
            calls[0].args[0], ["awslocal", "ecr", "get-login-password", "--region", "us-east-1"]
        )
        self.assertEqual(calls[0].kwargs["stdout"], subprocess.PIPE)
        self.assertEqual(
            calls[1].args[0],
            ["docker", "login", "--username", "AWS", "--password-stdin", "localhost:4566"],
        )
        self.assertEqual(calls[1].kwargs["input"], "secret\n")
        self.assertIn("Login successful", out)

    def test_login_stops_when_password_query_fails(self) -> None:
        with self.assertRaises(DelegateError) as ctx:
            self._run(operations.ecr_login, failures={"get-login-password": 255})
        self.assertEqual(ctx.exception.returncode, 255)

    def test_login_failure_never_reaches_engine(self) -> None:
        with config_env():
            with (
                unittest.mock.patch(
                    "lstackctl.lib.tools.subprocess.run",
                    side_effect=fake_run({"get-login-password": 255}),
                ) as mock_run,
                redirect_stdout(io.StringIO()),
            ):
                with self.assertRaises(DelegateError):
                    operations.ecr_login(settings=make_settings())
        self.assertEqual(len(mock_run.call_args_list), 1)

    def test_build_push_default_tag(self) -> None:
        mock_run, out = self._run(operations.build_push, "./app", "demo")
        self.assertEqual(
            commands_of(mock_run),
            [
                ["docker", "build", "-t", "demo:latest", "./app"],
                ["docker", "tag", "demo:latest", f"{DOMAIN}/demo:latest"],
                ["awslocal", "ecr", "get-login-password", "--region", "us-east-1"],
                ["docker", "login", "--username", "AWS", "--password-stdin", "localhost:4566"],
                ["docker", "push", f"{DOMAIN}/demo:latest"],
            ],
        )
        self.assertTrue(out.rstrip().endswith(f"Image URI: {DOMAIN}/demo:latest"))

    def test_build_push_explicit_tag(self) -> None:
        mock_run, _ = self._run(operations.build_push, "./app", "demo", "v1.0.0")
        self.assertEqual(commands_of(mock_run)[-1], ["docker", "push", f"{DOMAIN}/demo:v1.0.0"])

    def test_build_push_stops_at_failed_build(self) -> None:
        with config_env():
            with (
                unittest.mock.patch(
                    "lstackctl.lib.tools.subprocess.run", side_effect=fake_run({"build": 1})
                ) as mock_run,
                redirect_stdout(io.StringIO()),
            ):
                with self.assertRaises(DelegateError) as ctx:
                    operations.build_push("./app", "demo", settings=make_settings())
        self.assertEqual(ctx.exception.returncode, 1)
        self.assertEqual(len(mock_run.call_args_list), 1)

    def test_pull_logs_in_then_pulls(self) -> None:
        mock_run, _ = self._run(operations.pull_image, "demo")
        cmds = commands_of(mock_run)
        self.assertEqual(cmds[0][:3], ["awslocal", "ecr", "get-login-password"])
        self.assertEqual(cmds[1][:2], ["docker", "login"])
        self.assertEqual(cmds[2], ["docker", "pull", f"{DOMAIN}/demo:latest"])

    def test_delete_image(self) -> None:
        mock_run, _ = self._run(operations.delete_image, "demo", "v1")
        self.assertEqual(
            commands_of(mock_run),
            [
                [
                    "awslocal", "ecr", "batch-delete-image",
                    "--repository-name", "demo",
                    "--image-ids", "imageTag=v1",
                    "--region", "us-east-1",
                ]
            ],
        )

    def test_delete_repo_without_force(self) -> None:
        mock_run, out = self._run(operations.delete_repo, "demo")
        (cmd,) = commands_of(mock_run)
        self.assertNotIn("--force", cmd)
        self.assertNotIn("[WARN]", out)

    def test_delete_repo_force_true(self) -> None:
        mock_run, out = self._run(operations.delete_repo, "demo", "true")
        (cmd,) = commands_of(mock_run)
        self.assertEqual(cmd[-1], "--force")
        self.assertIn("[WARN] Force deleting repository", out)

    def test_delete_repo_only_literal_true_forces(self) -> None:
        for value in ("false", "yes", "TRUE", "1"):
            with self.subTest(force=value):
                mock_run, _ = self._run(operations.delete_repo, "demo", value)
                self.assertNotIn("--force", commands_of(mock_run)[0])

    def test_get_uri_prints_nothing_itself(self) -> None:
        mock_run, out = self._run(operations.get_uri, "demo-repo")
        (cmd,) = commands_of(mock_run)
        self.assertEqual(
            cmd,
            [
                "awslocal", "ecr", "describe-repositories",
                "--repository-names", "demo-repo",
                "--region", "us-east-1",
                "--query", "repositories[0].repositoryUri",
                "--output", "text",
            ],
        )
        self.assertEqual(out, "")

    def test_settings_choose_tools_and_region(self) -> None:
        settings = make_settings(
            aws_cli="aws-emu", container_engine="podman", region="eu-west-1"
        )
        mock_run, _ = self._run(operations.build_push, "./app", "demo", settings=settings)
        cmds = commands_of(mock_run)
        self.assertEqual(cmds[0][0], "podman")
        self.assertEqual(cmds[2], ["aws-emu", "ecr", "get-login-password", "--region", "eu-west-1"])
