# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from pydantic import BaseModel, Field, field_validator


class PolicyRule(BaseModel):
    """A Kubernetes-style RBAC rule, used both for grants and for requirements."""

    verbs: tuple[str, ...] = ()
    api_groups: tuple[str, ...] = Field(default=(), alias="apiGroups")
    resources: tuple[str, ...] = ()
    resource_names: tuple[str, ...] = Field(default=(), alias="resourceNames")
    non_resource_urls: tuple[str, ...] = Field(default=(), alias="nonResourceURLs")

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator(
        "verbs", "api_groups", "resources", "resource_names", "non_resource_urls", mode="before"
    )
    @classmethod
    def _none_as_empty(cls, value):
        # Kubernetes serializes unset slices as null
        return () if value is None else value

    def without_resource_names(self) -> "PolicyRule":
        return self.model_copy(update={"resource_names": ()})


class Action(BaseModel):
    name: str
    rules: tuple[PolicyRule, ...] = ()

    model_config = {"frozen": True}


class Category(BaseModel):
    name: str
    actions: tuple[Action, ...] = ()

    model_config = {"frozen": True}


class SimpleRule(BaseModel):
    """Product-level projection: the permitted action names of one category."""

    name: str
    actions: list[str] = Field(default_factory=list)
