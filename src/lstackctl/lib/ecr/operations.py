# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""ECR repository and image operations against the local emulator.

Each function assembles the command line for the cloud CLI or the container
engine and hands it to ``lstackctl.lib.tools``. A failing tool stops the
operation with a ``DelegateError`` carrying the tool's status; nothing is
retried. Argument validation lives in the verb table (``ecr.commands``).
"""

from .._util.ansi import status, warn
from ..core.config import EmulatorSettings, load_settings
from ..tools import capture_tool, run_tool
from .registry import DEFAULT_TAG, local_image, registry_image

REPOSITORY_QUERY = "repositories[].{Name:repositoryName,URI:repositoryUri,CreatedAt:createdAt}"
IMAGE_QUERY = (
    "imageDetails[].{Tags:imageTags[0],Digest:imageDigest,"
    "Size:imageSizeInBytes,PushedAt:imagePushedAt}"
)
URI_QUERY = "repositories[0].repositoryUri"


def _log(message: str) -> None:
    status("ECR", message)


def _ecr(settings: EmulatorSettings, *args: str) -> list[str]:
    return [settings.aws_cli, "ecr", *args]


def create_repo(repo_name: str, *, settings: EmulatorSettings | None = None) -> None:
    s = settings or load_settings()
    _log(f"Creating repository: {repo_name}")
    run_tool(
        _ecr(
            s,
            "create-repository",
            "--repository-name",
            repo_name,
            "--image-scanning-configuration",
            "scanOnPush=true",
            "--region",
            s.region,
        )
    )
    _log("Repository created successfully")


def list_repos(*, settings: EmulatorSettings | None = None) -> None:
    s = settings or load_settings()
    _log("Listing ECR repositories")
    run_tool(
        _ecr(
            s,
            "describe-repositories",
            "--region",
            s.region,
            "--query",
            REPOSITORY_QUERY,
            "--output",
            "table",
        )
    )


def list_images(repo_name: str, *, settings: EmulatorSettings | None = None) -> None:
    s = settings or load_settings()
    _log(f"Listing images in repository: {repo_name}")
    run_tool(
        _ecr(
            s,
            "describe-images",
            "--repository-name",
            repo_name,
            "--region",
            s.region,
            "--query",
            IMAGE_QUERY,
            "--output",
            "table",
        )
    )


def ecr_login(*, settings: EmulatorSettings | None = None) -> None:
    """Exchange the registry password for a container-engine login session.

    Equivalent to ``get-login-password | <engine> login --password-stdin``,
    except that a failing password query stops here instead of feeding an
    empty password to the engine.
    """
    s = settings or load_settings()
    _log("Authenticating with LocalStack ECR")
    password = capture_tool(_ecr(s, "get-login-password", "--region", s.region))
    run_tool(
        [s.container_engine, "login", "--username", "AWS", "--password-stdin", s.endpoint],
        input_text=password,
    )
    _log("Login successful")


def build_push(
    dockerfile_path: str,
    repo_name: str,
    tag: str = DEFAULT_TAG,
    *,
    settings: EmulatorSettings | None = None,
) -> str:
    """Build *dockerfile_path*, tag it for the registry, log in and push.

    Returns the pushed image URI.
    """
    s = settings or load_settings()
    image_name = local_image(repo_name, tag)
    ecr_image = registry_image(s.registry_domain, repo_name, tag)

    _log(f"Building image: {image_name}")
    run_tool([s.container_engine, "build", "-t", image_name, dockerfile_path])

    _log(f"Tagging image for ECR: {ecr_image}")
    run_tool([s.container_engine, "tag", image_name, ecr_image])

    _log("Logging in to ECR")
    ecr_login(settings=s)

    _log(f"Pushing image: {ecr_image}")
    run_tool([s.container_engine, "push", ecr_image])

    _log("Image pushed successfully")
    print()
    print(f"Image URI: {ecr_image}")
    return ecr_image


def pull_image(
    repo_name: str, tag: str = DEFAULT_TAG, *, settings: EmulatorSettings | None = None
) -> None:
    s = settings or load_settings()
    ecr_image = registry_image(s.registry_domain, repo_name, tag)

    _log("Logging in to ECR")
    ecr_login(settings=s)

    _log(f"Pulling image: {ecr_image}")
    run_tool([s.container_engine, "pull", ecr_image])

    _log("Image pulled successfully")


def delete_image(repo_name: str, tag: str, *, settings: EmulatorSettings | None = None) -> None:
    s = settings or load_settings()
    _log(f"Deleting image: {local_image(repo_name, tag)}")
    run_tool(
        _ecr(
            s,
            "batch-delete-image",
            "--repository-name",
            repo_name,
            "--image-ids",
            f"imageTag={tag}",
            "--region",
            s.region,
        )
    )
    _log("Image deleted successfully")


def _is_forced(force: str | bool) -> bool:
    # Only the literal "true" forces, anything else ("yes", "1", "") does not.
    return force is True or force == "true"


def delete_repo(
    repo_name: str, force: str | bool = "false", *, settings: EmulatorSettings | None = None
) -> None:
    s = settings or load_settings()
    cmd = _ecr(s, "delete-repository", "--repository-name", repo_name, "--region", s.region)
    if _is_forced(force):
        cmd.append("--force")
        warn("Force deleting repository (all images will be deleted)")

    _log(f"Deleting repository: {repo_name}")
    run_tool(cmd)
    _log("Repository deleted successfully")


def get_uri(repo_name: str, *, settings: EmulatorSettings | None = None) -> None:
    """Print the repository URI exactly as the cloud CLI returns it, nothing else."""
    s = settings or load_settings()
    run_tool(
        _ecr(
            s,
            "describe-repositories",
            "--repository-names",
            repo_name,
            "--region",
            s.region,
            "--query",
            URI_QUERY,
            "--output",
            "text",
        )
    )
