# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

import io
import sys
import unittest
import unittest.mock
from contextlib import redirect_stderr, redirect_stdout

from lstackctl.cli.ecr import dispatch, main
from lstackctl.lib.ecr.commands import ECR_COMMANDS, help_text
from test_utils import commands_of, config_env, fake_run


class EcrDispatchTests(unittest.TestCase):
    """Verb routing, validation and exit statuses of ``lstackctl-ecr``."""

    def _dispatch(self, argv, failures=None, on_call=None):
        """Return (status, stdout, stderr, mock_run) for one dispatcher run."""
        out, err = io.StringIO(), io.StringIO()
        with config_env():
            with (
                unittest.mock.patch(
                    "lstackctl.lib.tools.subprocess.run",
                    side_effect=fake_run(failures, "secret\n", on_call),
                ) as mock_run,
                redirect_stdout(out),
                redirect_stderr(err),
            ):
                status = dispatch(argv)
        return status, out.getvalue(), err.getvalue(), mock_run

    def test_missing_required_argument_exits_1_without_delegating(self) -> None:
        for verb, command in ECR_COMMANDS.items():
            if not command.required:
                continue
            with self.subTest(verb=verb):
                status, out, err, mock_run = self._dispatch([verb])
                self.assertEqual(status, 1)
                mock_run.assert_not_called()
                self.assertIn(f"Usage: lstackctl-ecr {verb}", err)
                self.assertIn("[ERROR]", err)
                self.assertEqual(out, "")

    def test_partially_missing_arguments(self) -> None:
        status, _, err, mock_run = self._dispatch(["build-push", "./app"])
        self.assertEqual(status, 1)
        mock_run.assert_not_called()
        self.assertIn("Missing required arguments", err)
        self.assertIn("<dockerfile-path> <repository-name> [tag]", err)

    def test_empty_string_counts_as_missing(self) -> None:
        status, _, err, mock_run = self._dispatch(["delete-image", "demo", ""])
        self.assertEqual(status, 1)
        mock_run.assert_not_called()

    def test_single_argument_message(self) -> None:
        _, _, err, _ = self._dispatch(["create"])
        self.assertIn("Repository name required", err)

    def test_help_for_missing_unknown_and_explicit_verbs(self) -> None:
        for argv in ([], [""], ["help"], ["--help"], ["-h"], ["frobnicate", "x"]):
            with self.subTest(argv=argv):
                status, out, err, mock_run = self._dispatch(argv)
                self.assertEqual(status, 0)
                mock_run.assert_not_called()
                self.assertEqual(out, help_text() + "\n")
                self.assertEqual(err, "")

    def test_help_lists_every_verb_with_an_example(self) -> None:
        text = help_text("ecr-tool")
        for verb, command in ECR_COMMANDS.items():
            self.assertIn(f"  {command.signature}", text)
            self.assertIn(f"  ecr-tool {verb}", text)
        self.assertIn("Usage: ecr-tool <command> [options]", text)
        self.assertIn("help", text)

    def test_every_verb_delegates_with_arguments(self) -> None:
        argv_by_verb = {
            "create": ["demo"],
            "list": [],
            "list-images": ["demo"],
            "login": [],
            "build-push": ["./app", "demo"],
            "pull": ["demo"],
            "delete-image": ["demo", "v1"],
            "delete-repo": ["demo"],
            "get-uri": ["demo"],
        }
        self.assertEqual(set(argv_by_verb), set(ECR_COMMANDS))
        for verb, args in argv_by_verb.items():
            with self.subTest(verb=verb):
                status, _, _, mock_run = self._dispatch([verb, *args])
                self.assertEqual(status, 0)
                self.assertTrue(mock_run.called)

    def test_build_push_defaults_tag_to_latest(self) -> None:
        status, _, _, mock_run = self._dispatch(["build-push", "./app", "demo"])
        self.assertEqual(status, 0)
        cmds = commands_of(mock_run)
        self.assertEqual([c[:2] for c in cmds], [
            ["docker", "build"],
            ["docker", "tag"],
            ["awslocal", "ecr"],
            ["docker", "login"],
            ["docker", "push"],
        ])
        self.assertEqual(cmds[0], ["docker", "build", "-t", "demo:latest", "./app"])
        self.assertEqual(cmds[-1][-1], "localhost.localstack.cloud:4566/demo:latest")

    def test_empty_optional_takes_default(self) -> None:
        _, _, _, mock_run = self._dispatch(["pull", "demo", ""])
        self.assertTrue(commands_of(mock_run)[-1][-1].endswith("/demo:latest"))

    def test_delete_repo_force_flag(self) -> None:
        _, _, _, mock_run = self._dispatch(["delete-repo", "demo"])
        self.assertNotIn("--force", commands_of(mock_run)[0])
        _, _, _, mock_run = self._dispatch(["delete-repo", "demo", "true"])
        self.assertIn("--force", commands_of(mock_run)[0])

    def test_surplus_arguments_are_ignored(self) -> None:
        status, _, _, mock_run = self._dispatch(["create", "demo", "extra", "more"])
        self.assertEqual(status, 0)
        self.assertNotIn("extra", commands_of(mock_run)[0])

    def test_delegate_status_becomes_exit_status(self) -> None:
        status, out, _, mock_run = self._dispatch(["create", "demo"], failures={"create-repository": 254})
        self.assertEqual(status, 254)
        self.assertEqual(len(mock_run.call_args_list), 1)
        self.assertNotIn("created successfully", out)

    def test_get_uri_emits_exactly_the_tool_output(self) -> None:
        uri = "000000000000.dkr.ecr.us-east-1.localhost.localstack.cloud:4566/demo-repo"

        def tool_writes_uri(cmd) -> None:
            sys.stdout.write(uri + "\n")

        status, out, err, _ = self._dispatch(["get-uri", "demo-repo"], on_call=tool_writes_uri)
        self.assertEqual(status, 0)
        self.assertEqual(out, uri + "\n")
        self.assertEqual(err, "")

    def test_main_reads_sys_argv(self) -> None:
        with config_env():
            with (
                unittest.mock.patch.object(sys, "argv", ["lstackctl-ecr"]),
                redirect_stdout(io.StringIO()) as out,
            ):
                self.assertEqual(main(), 0)
        self.assertIn("LocalStack ECR Management Tool", out.getvalue())
