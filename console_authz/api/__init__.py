# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from .routes import router

__all__ = ["router"]
