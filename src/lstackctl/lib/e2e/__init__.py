# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""End-to-end example workflow (ECR image -> Lambda on S3 -> Fargate)."""
