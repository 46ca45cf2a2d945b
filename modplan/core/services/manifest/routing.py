"""
Generated-installer routing — which categories use generated entrypoints.

Categories migrate from hand-written installers to generated ones one
at a time. Environment variables decide, per category:

    MODPLAN_USE_GENERATED_<CATEGORY>       1/0, always wins
    MODPLAN_USE_GENERATED                  0 forces legacy everywhere
    MODPLAN_GENERATED_MIGRATED_CATEGORIES  comma list, generated by default
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from modplan.core.models.module import to_function_name
from modplan.core.services.manifest.graph import module_category

logger = logging.getLogger(__name__)

ENV_MIGRATED = "MODPLAN_GENERATED_MIGRATED_CATEGORIES"
ENV_GLOBAL = "MODPLAN_USE_GENERATED"
ENV_CATEGORY_PREFIX = "MODPLAN_USE_GENERATED_"


@dataclass(frozen=True)
class GeneratedRouting:
    """Snapshot of the routing flags."""

    migrated: frozenset[str] = frozenset()
    global_flag: str | None = None
    overrides: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GeneratedRouting":
        env = os.environ if environ is None else environ
        migrated = frozenset(
            c.strip() for c in env.get(ENV_MIGRATED, "").split(",") if c.strip()
        )
        overrides = {
            key[len(ENV_CATEGORY_PREFIX):].lower(): value
            for key, value in env.items()
            if key.startswith(ENV_CATEGORY_PREFIX) and len(key) > len(ENV_CATEGORY_PREFIX)
        }
        return cls(migrated=migrated, global_flag=env.get(ENV_GLOBAL), overrides=overrides)

    def use_generated_for_category(self, category: str) -> bool:
        override = self.overrides.get(category.lower())
        if override is not None:
            return override == "1"
        if self.global_flag == "0":
            return False
        return category in self.migrated

    def use_generated_for_module(self, module_id: str) -> bool:
        return self.use_generated_for_category(module_category(module_id))

    def module_installer(self, module_id: str) -> str:
        """Generated entrypoint for *module_id*, or ``""`` to use the legacy path."""
        if self.use_generated_for_module(module_id):
            return to_function_name(module_id)
        logger.debug("Module %s routed to legacy installer", module_id)
        return ""


def use_generated_for_category(category: str, environ: Mapping[str, str] | None = None) -> bool:
    return GeneratedRouting.from_env(environ).use_generated_for_category(category)


def use_generated_for_module(module_id: str, environ: Mapping[str, str] | None = None) -> bool:
    return GeneratedRouting.from_env(environ).use_generated_for_module(module_id)


def module_installer(module_id: str, environ: Mapping[str, str] | None = None) -> str:
    return GeneratedRouting.from_env(environ).module_installer(module_id)
