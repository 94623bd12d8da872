# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0
