# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from console_authz.models.policy import Action, Category, PolicyRule, SimpleRule
from console_authz.models.rbac import (
    Binding,
    ObjectMeta,
    OwnerReference,
    Principal,
    Role,
    RoleRef,
    Scope,
    ScopeKind,
    Subject,
)

__all__ = [
    # Policy
    "Action",
    "Category",
    "PolicyRule",
    "SimpleRule",
    # RBAC objects
    "Binding",
    "ObjectMeta",
    "OwnerReference",
    "Role",
    "RoleRef",
    "Subject",
    # Evaluation
    "Principal",
    "Scope",
    "ScopeKind",
]
