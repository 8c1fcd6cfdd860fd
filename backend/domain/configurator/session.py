"""
Configurator Domain - Session.

ConfiguratorSession is the context object that owns the list of
configurations for one user and the currently selected one.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from domain.catalog.aggregates import ProductCatalog

from . import cascade
from .entities import Configuration, QuoteLine, DEFAULT_CONFIGURATION_NAME
from .quote import build_quote_lines


@dataclass
class ConfiguratorSession:
    """
    In-memory configurator state.

    Index arguments outside the list are ignored rather than raising.
    The list never becomes empty: removing the last configuration is refused.
    """

    catalog: ProductCatalog
    configurations: List[Configuration] = field(default_factory=list)
    selected_index: int = 0

    def __post_init__(self):
        if not self.configurations:
            self.configurations.append(cascade.create_empty_configuration(self.catalog))
        self.selected_index = min(max(self.selected_index, 0), len(self.configurations) - 1)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def current(self) -> Configuration:
        return self.configurations[self.selected_index]

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self.configurations)

    # =========================================================================
    # COMMANDS
    # =========================================================================

    def add_configuration(self, name: Optional[str] = None) -> Configuration:
        configuration = cascade.create_empty_configuration(
            self.catalog, name or DEFAULT_CONFIGURATION_NAME
        )
        self.configurations.append(configuration)
        self.selected_index = len(self.configurations) - 1
        return configuration

    def clone_selected(self) -> Configuration:
        clone = cascade.clone_configuration(self.current)
        self.configurations.append(clone)
        self.selected_index = len(self.configurations) - 1
        return clone

    def remove_configuration(self, index: int) -> Optional[Configuration]:
        """Remove a configuration, keeping the selection on a valid neighbour."""
        if not self._in_range(index) or len(self.configurations) == 1:
            return None
        removed = self.configurations.pop(index)
        if index <= self.selected_index:
            self.selected_index = max(0, self.selected_index - 1)
        return removed

    def select(self, index: int) -> Configuration:
        if self._in_range(index):
            self.selected_index = index
        return self.current

    def update_current(self, fn: Callable[..., Configuration], *args: Any) -> Configuration:
        """Replace the selected configuration with fn(current, *args)."""
        self.configurations[self.selected_index] = fn(self.current, *args)
        return self.current

    def apply(self, field_name: str, value: Any, slot: Optional[int] = None) -> Configuration:
        return self.update_current(cascade.apply_change, self.catalog, field_name, value, slot)

    def quote_lines(self) -> List[QuoteLine]:
        return build_quote_lines(self.configurations, self.catalog)
