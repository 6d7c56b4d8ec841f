"""Response plugins and the capability registry.

Plugins extend a response with commands of their own without modifying the
core queue. The registry is built once by the host application and handed
to every queue; lookups never mutate it.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .protocol.queue import ResponseQueue

logger = logging.getLogger(__name__)


class ResponsePlugin:
    """Base class for response plugins.

    Subclasses set `name` and add verbs that call `add_command()`. A plugin
    taken from the registry is unbound; `bind()` returns a copy attached to
    one response, leaving the registered instance untouched.
    """

    name: str = "base_plugin"

    def __init__(self) -> None:
        self._response: ResponseQueue | None = None

    def get_name(self) -> str:
        return self.name

    @property
    def response(self) -> ResponseQueue:
        if self._response is None:
            raise RuntimeError(f"Plugin {self.name} is not bound to a response")
        return self._response

    def bind(self, response: ResponseQueue) -> ResponsePlugin:
        """Return a copy of this plugin bound to `response`."""
        bound = copy.copy(self)
        bound._response = response
        return bound

    def add_command(self, attributes: dict[str, Any], data: Any = "") -> ResponsePlugin:
        """Queue a command tagged with this plugin's name."""
        self.response.add_plugin_command(self, attributes, data)
        return self


class PluginRegistry:
    """Registry resolving plugin names to plugin instances."""

    def __init__(self) -> None:
        self._plugins: dict[str, ResponsePlugin] = {}

    def register(self, plugin: ResponsePlugin) -> None:
        """Register a plugin.

        Raises:
            ValueError: If a plugin with the same name is already registered
        """
        name = plugin.get_name()
        if name in self._plugins:
            raise ValueError(f"Plugin already registered: {name}")

        self._plugins[name] = plugin
        logger.info(f"Registered response plugin: {name}")

    def unregister(self, name: str) -> None:
        if self._plugins.pop(name, None) is not None:
            logger.info(f"Unregistered response plugin: {name}")

    def get_capability(self, name: str) -> ResponsePlugin | None:
        """Look up a plugin by name; None when nothing is registered under it."""
        return self._plugins.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    @property
    def count(self) -> int:
        return len(self._plugins)

    def list_plugins(self) -> list[dict[str, Any]]:
        return [
            {"name": name, "type": type(plugin).__name__}
            for name, plugin in self._plugins.items()
        ]
