# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator, model_validator

from console_authz.constants import USER_KIND, WORKSPACE_KIND
from console_authz.models.policy import PolicyRule


class ScopeKind(StrEnum):
    CLUSTER = "cluster"
    NAMESPACE = "namespace"
    WORKSPACE = "workspace"


class Scope(BaseModel):
    kind: ScopeKind
    name: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_name(self) -> "Scope":
        if self.kind != ScopeKind.CLUSTER and not self.name:
            raise ValueError(f"{self.kind} scope requires a name")
        return self

    @classmethod
    def cluster(cls) -> "Scope":
        return cls(kind=ScopeKind.CLUSTER)

    @classmethod
    def namespace(cls, name: str) -> "Scope":
        return cls(kind=ScopeKind.NAMESPACE, name=name)

    @classmethod
    def workspace(cls, name: str) -> "Scope":
        return cls(kind=ScopeKind.WORKSPACE, name=name)


class Principal(BaseModel):
    username: str

    model_config = {"frozen": True}


class Subject(BaseModel):
    kind: str
    name: str
    namespace: str | None = None
    api_group: str | None = Field(default=None, alias="apiGroup")

    model_config = {"populate_by_name": True}


class RoleRef(BaseModel):
    kind: str
    name: str
    api_group: str | None = Field(default=None, alias="apiGroup")

    model_config = {"populate_by_name": True}


class OwnerReference(BaseModel):
    kind: str
    name: str
    api_version: str | None = Field(default=None, alias="apiVersion")
    uid: str | None = None

    model_config = {"populate_by_name": True}


class ObjectMeta(BaseModel):
    name: str = ""
    namespace: str | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    owner_references: list[OwnerReference] = Field(default_factory=list, alias="ownerReferences")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("labels", "annotations", "owner_references", mode="before")
    @classmethod
    def _none_as_empty(cls, value, info):
        if value is None:
            return [] if info.field_name == "owner_references" else {}
        return value


class Binding(BaseModel):
    """A RoleBinding or ClusterRoleBinding.

    ``workspaces`` is the scope tag: the names of every Workspace owning the
    binding through its owner references, computed once on validation.
    """

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    subjects: list[Subject] = Field(default_factory=list)
    role_ref: RoleRef = Field(alias="roleRef")
    workspaces: frozenset[str] = Field(default=frozenset(), exclude=True)

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("subjects", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def _tag_workspace(self) -> "Binding":
        if not self.workspaces:
            self.workspaces = frozenset(
                owner.name
                for owner in self.metadata.owner_references
                if owner.kind == WORKSPACE_KIND
            )
        return self

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str | None:
        return self.metadata.namespace

    def binds_user(self, username: str) -> bool:
        return any(s.kind == USER_KIND and s.name == username for s in self.subjects)


class Role(BaseModel):
    """A Role or ClusterRole; ClusterRoles carry no namespace."""

    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    rules: list[PolicyRule] = Field(default_factory=list)

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("rules", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str | None:
        return self.metadata.namespace

    def in_namespace(self, namespace: str) -> "Role":
        metadata = self.metadata.model_copy(update={"namespace": namespace})
        return self.model_copy(update={"metadata": metadata})
