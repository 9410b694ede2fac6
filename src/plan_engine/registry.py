"""Rule registry.

Adjustment rules live as modules under ``plan_engine.rules``. The registry
walks that tree, instantiates every concrete ``AdjustmentRule`` it finds and
slots it by ``order``, which is the single evaluation sequence shared by the
engine and the decision trace.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from collections.abc import Iterator
from types import ModuleType

from plan_engine.rules.base import AdjustmentRule

logger = logging.getLogger(__name__)


def _rule_classes(module: ModuleType) -> Iterator[type[AdjustmentRule]]:
    """Concrete rules defined (not merely imported) in *module*."""
    for _, cls in inspect.getmembers(module, inspect.isclass):
        if (
            issubclass(cls, AdjustmentRule)
            and cls.__module__ == module.__name__
            and not inspect.isabstract(cls)
        ):
            yield cls


def iter_rule_classes(package: ModuleType) -> Iterator[type[AdjustmentRule]]:
    """Import every module below *package* and yield its rule classes."""
    for info in pkgutil.walk_packages(package.__path__, prefix=package.__name__ + "."):
        yield from _rule_classes(importlib.import_module(info.name))


class RuleRegistry:
    """Ordered collection of AdjustmentRule instances.

    Rules are slotted by their ``order``. Two different rules may not share
    a slot; registering a rule again under its own id replaces it.
    """

    def __init__(self) -> None:
        self._slots: dict[int, AdjustmentRule] = {}

    def discover_rules(self, package: ModuleType | None = None) -> None:
        """Register every rule found below *package* (``plan_engine.rules`` by default)."""
        if package is None:
            import plan_engine.rules as package

        found = sorted(iter_rule_classes(package), key=lambda cls: cls.order)
        for cls in found:
            self.register(cls())
        logger.debug("Discovered %d rules under %s", len(found), package.__name__)

    def register(self, rule: AdjustmentRule) -> None:
        """Slot *rule* at its ``order``.

        Raises:
            ValueError: If another rule already occupies the same ``order``.
        """
        occupant = self._slots.get(rule.order)
        if occupant is not None and occupant.rule_id != rule.rule_id:
            raise ValueError(
                f"Rule {rule.rule_id} reuses order {rule.order} of {occupant.rule_id}"
            )
        stale = [order for order, r in self._slots.items() if r.rule_id == rule.rule_id]
        for order in stale:
            del self._slots[order]
        self._slots[rule.order] = rule
        logger.debug("Registered rule %s (order %d)", rule.rule_id, rule.order)

    def get(self, rule_id: str) -> AdjustmentRule | None:
        return next((r for r in self._slots.values() if r.rule_id == rule_id), None)

    def get_all_rules(self) -> list[AdjustmentRule]:
        """All rules in evaluation order."""
        return [self._slots[order] for order in sorted(self._slots)]

    @property
    def rule_ids(self) -> list[str]:
        return [r.rule_id for r in self.get_all_rules()]

    def __len__(self) -> int:
        return len(self._slots)
