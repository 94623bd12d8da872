# Copyright 2025 The OpenChoreo Authors
# SPDX-License-Identifier: Apache-2.0

import logging
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel, TypeAdapter, ValidationError

from console_authz.core.catalog_defaults import CLUSTER_RULES, NAMESPACE_RULES, WORKSPACE_RULES
from console_authz.models.policy import Category
from console_authz.models.rbac import ScopeKind

logger = logging.getLogger(__name__)

CatalogErrorHook = Callable[[Path, Exception], None]

_categories_adapter = TypeAdapter(tuple[Category, ...])


class Catalog(BaseModel):
    """Ordered category tables for each scope; built once, never mutated."""

    namespace_categories: tuple[Category, ...]
    cluster_categories: tuple[Category, ...]
    workspace_categories: tuple[Category, ...]

    model_config = {"frozen": True}

    def categories(self, kind: ScopeKind) -> tuple[Category, ...]:
        if kind == ScopeKind.NAMESPACE:
            return self.namespace_categories
        if kind == ScopeKind.WORKSPACE:
            return self.workspace_categories
        return self.cluster_categories


def parse_categories(data: object) -> tuple[Category, ...]:
    return _categories_adapter.validate_python(data)


def default_catalog() -> Catalog:
    return Catalog(
        namespace_categories=parse_categories(NAMESPACE_RULES),
        cluster_categories=parse_categories(CLUSTER_RULES),
        workspace_categories=parse_categories(WORKSPACE_RULES),
    )


def load_catalog(
    namespace_path: str | Path | None,
    cluster_path: str | Path | None,
    workspace_path: str | Path | None = None,
    on_error: CatalogErrorHook | None = None,
) -> Catalog:
    """Build the catalog from the built-in defaults and optional override documents.

    A document that exists and parses into a non-empty list replaces the
    matching default list wholesale; there is no merging. Missing,
    unreadable, unparsable or empty documents leave the default in place.
    ``on_error`` is called for unreadable or unparsable documents only and
    never changes the result.
    """
    defaults = default_catalog()
    return Catalog(
        namespace_categories=_load_override(namespace_path, on_error)
        or defaults.namespace_categories,
        cluster_categories=_load_override(cluster_path, on_error) or defaults.cluster_categories,
        workspace_categories=_load_override(workspace_path, on_error)
        or defaults.workspace_categories,
    )


def _load_override(
    path: str | Path | None, on_error: CatalogErrorHook | None
) -> tuple[Category, ...] | None:
    if not path:
        return None

    path = Path(path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError:
        logger.debug("No catalog override at %s, using defaults", path)
        return None
    except OSError as e:
        _report(path, e, on_error)
        return None

    try:
        categories = _categories_adapter.validate_json(raw)
    except ValidationError as e:
        _report(path, e, on_error)
        return None

    if not categories:
        logger.debug("Catalog override at %s is empty, using defaults", path)
        return None

    logger.info("Loaded %d categories from %s", len(categories), path)
    return categories


def _report(path: Path, error: Exception, on_error: CatalogErrorHook | None) -> None:
    if on_error is not None:
        on_error(path, error)
