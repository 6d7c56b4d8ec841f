"""Response command queue.

A ResponseQueue collects the commands one request handler sends back to the
browser. Commands are appended in order; adjacent scripts and adjacent
appends to the same element property are merged as they are added.
Queues are never shared between requests.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..config import ResponseSettings, settings as default_settings
from ..errors import DataError
from .commands import Command, CommandCode
from .verbs import ResponseVerbs

if TYPE_CHECKING:
    from ..plugins import PluginRegistry, ResponsePlugin

logger = logging.getLogger(__name__)


class ResponseQueue(ResponseVerbs):
    """Ordered commands and return value for one in-flight response.

    Mutating methods return the queue so calls can be chained:

        response = ResponseQueue()
        response.assign("status", "innerHTML", "Saved").script("refresh()")
    """

    def __init__(
        self,
        settings: ResponseSettings | None = None,
        registry: PluginRegistry | None = None,
    ) -> None:
        settings = settings or default_settings
        self._commands: list[Command] = []
        self.return_value: Any = None
        self.content_type = settings.content_type
        self.character_encoding = settings.character_encoding
        self._registry = registry

    # =========================================================================
    # Queue access
    # =========================================================================

    @property
    def commands(self) -> tuple[Command, ...]:
        """Snapshot of the queued commands."""
        return tuple(self._commands)

    @property
    def command_count(self) -> int:
        return len(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def set_return_value(self, value: Any) -> ResponseQueue:
        """Store a value returned to a synchronous caller on the browser."""
        self.return_value = value
        return self

    def set_content_type(self, content_type: str) -> ResponseQueue:
        self.content_type = content_type
        return self

    def set_character_encoding(self, character_encoding: str) -> ResponseQueue:
        self.character_encoding = character_encoding
        return self

    # =========================================================================
    # Appending
    # =========================================================================

    def add_command(self, attributes: dict[str, Any], data: Any = "") -> ResponseQueue:
        """Append a command built from `attributes` and `data`.

        Only the last queued command is compared with the new one: two
        scripts in a row become one script joined with `; `, and two appends
        to the same element property become one append joined with a space.
        """
        command = Command.create(attributes, data)

        if self._commands:
            merged = self._commands[-1].merge(command)
            if merged is not None:
                logger.debug(f"Merged {command.cmd} command into previous entry")
                self._commands[-1] = merged
                return self

        self._commands.append(command)
        return self

    def add_plugin_command(
        self,
        plugin: ResponsePlugin,
        attributes: dict[str, Any],
        data: Any = "",
    ) -> ResponseQueue:
        """Append a command generated by a plugin, tagged with its name."""
        return self.add_command({**attributes, "plg": plugin.get_name()}, data)

    def clear_commands(self) -> ResponseQueue:
        """Append a no-op marker.

        Commands already queued are kept; the marker only ends merge
        adjacency with them.
        """
        self._commands.append(Command(cmd=CommandCode.CLEAR.value))
        return self

    def append_response(
        self,
        commands: ResponseQueue | list[Command | Mapping[str, Any]] | tuple | None,
        before: bool = False,
    ) -> ResponseQueue:
        """Merge commands from another response into this one.

        Args:
            commands: Another ResponseQueue or a list of commands
            before: Put the merged commands ahead of this queue's commands

        Raises:
            DataError: If `commands` is non-empty and of any other type
        """
        if isinstance(commands, ResponseQueue):
            if commands.return_value is not None:
                self.return_value = commands.return_value
            incoming = list(commands._commands)
        elif isinstance(commands, (list, tuple)):
            incoming = [
                command if isinstance(command, Command) else Command.model_validate(command)
                for command in commands
            ]
        elif not commands:
            return self
        else:
            raise DataError(f"Cannot merge response data of type {type(commands).__name__}")

        logger.debug(f"Merging {len(incoming)} commands ({'before' if before else 'after'})")
        if before:
            self._commands = incoming + self._commands
        else:
            self._commands = self._commands + incoming
        return self

    # =========================================================================
    # Plugins
    # =========================================================================

    def get_capability(self, name: str) -> ResponsePlugin | None:
        """Return the named plugin bound to this response, or None."""
        plugin = self._registry.get_capability(name) if self._registry is not None else None
        if plugin is None:
            logger.warning(f"Response plugin not found: {name}")
            return None
        return plugin.bind(self)
