# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from console_authz.core.aggregator import GrantAggregator
from console_authz.core.catalog import Catalog, default_catalog, load_catalog
from console_authz.core.matcher import action_permitted, satisfies
from console_authz.core.resolver import merge_simple_rules, resolve, resolve_by_namespace
from console_authz.core.service import CapabilityService

__all__ = [
    "CapabilityService",
    "Catalog",
    "GrantAggregator",
    "action_permitted",
    "default_catalog",
    "load_catalog",
    "merge_simple_rules",
    "resolve",
    "resolve_by_namespace",
    "satisfies",
]
