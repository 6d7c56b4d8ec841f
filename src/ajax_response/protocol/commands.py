"""Command definitions for the response protocol.

A command is one instruction replayed by the browser runtime. Each command
has a short `cmd` code, optional `id`/`prop` addressing, optional extra
fields specific to its code, and a `data` payload.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CommandCode(str, Enum):
    """All supported command codes."""

    # Element properties
    ASSIGN = "as"
    APPEND = "ap"
    PREPEND = "pp"
    REPLACE = "rp"

    # Context object (the request's `this`)
    CONTEXT_ASSIGN = "c:as"
    CONTEXT_APPEND = "c:ap"
    CONTEXT_PREPEND = "c:pp"

    # Element lifecycle
    REMOVE = "rm"
    CREATE = "ce"
    INSERT_BEFORE = "ie"
    INSERT_AFTER = "ia"
    CREATE_INPUT = "ci"
    INSERT_INPUT_BEFORE = "ii"
    INSERT_INPUT_AFTER = "iia"

    # Events
    SET_EVENT = "ev"
    ADD_HANDLER = "ah"
    REMOVE_HANDLER = "rh"

    # Functions
    SET_FUNCTION = "sf"
    WRAP_FUNCTION = "wpf"
    SCRIPT = "js"
    CALL = "jc"

    # Resources
    INCLUDE_SCRIPT = "in"
    INCLUDE_SCRIPT_ONCE = "ino"
    REMOVE_SCRIPT = "rjs"
    INCLUDE_CSS = "css"
    REMOVE_CSS = "rcss"

    # Flow control
    WAIT_FOR_CSS = "wcss"
    WAIT_FOR = "wf"
    SLEEP = "s"
    CONFIRM = "cc"

    # Dialogs
    ALERT = "al"
    DEBUG = "dbg"

    # DOM primitives
    DOM_CREATE_ELEMENT = "DCE"
    DOM_SET_ATTRIBUTE = "DSA"
    DOM_REMOVE_CHILDREN = "DRC"
    DOM_APPEND_CHILD = "DAC"
    DOM_INSERT_BEFORE = "DIB"
    DOM_INSERT_AFTER = "DIA"
    DOM_APPEND_TEXT = "DAT"

    # No-op marker left by ResponseQueue.clear_commands()
    CLEAR = "nop"


# Codes whose adjacent commands are merged at append time
MERGEABLE_CODES = frozenset({CommandCode.SCRIPT.value, CommandCode.APPEND.value})

SCRIPT_SEPARATOR = "; "
APPEND_SEPARATOR = " "


class SearchReplace(BaseModel):
    """Payload of a replace command."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    search: str = Field(alias="s")
    replacement: str = Field(alias="r")

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


class Command(BaseModel):
    """A command sent to the browser.

    Example:
        {
            "cmd": "as",
            "id": "status",
            "prop": "innerHTML",
            "data": "Saved"
        }

    Fields other than `cmd`, `id`, `prop` and `data` are kept as extras and
    serialized between the addressing fields and the payload.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    cmd: str = Field(min_length=1)
    id: str | int | None = None
    prop: str | int | None = None
    data: Any = ""

    @property
    def extra(self) -> dict[str, Any]:
        """Auxiliary fields carried for the client."""
        return dict(self.model_extra or {})

    def is_code(self, code: str | CommandCode) -> bool:
        """Check whether this command has the given code."""
        return self.cmd == (code.value if isinstance(code, CommandCode) else code)

    @classmethod
    def create(
        cls,
        attributes: dict[str, Any],
        data: Any = "",
    ) -> Command:
        """Factory method building a command from an attribute mapping."""
        fields = dict(attributes)
        code = fields.get("cmd")
        if isinstance(code, CommandCode):
            fields["cmd"] = code.value
        fields["data"] = data
        return cls.model_validate(fields)

    @classmethod
    def from_wire(cls, wire: dict[str, Any]) -> Command:
        """Rebuild a command from its wire mapping."""
        command = cls.model_validate(wire)
        if command.is_code(CommandCode.REPLACE) and isinstance(command.data, dict):
            return command.model_copy(update={"data": SearchReplace.model_validate(command.data)})
        return command

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the wire mapping, omitting unset fields."""
        wire: dict[str, Any] = {"cmd": self.cmd}
        if self.id is not None:
            wire["id"] = self.id
        if self.prop is not None:
            wire["prop"] = self.prop
        wire.update(self.extra)
        wire["data"] = self.data.to_wire() if isinstance(self.data, SearchReplace) else self.data
        return wire

    def merge(self, following: Command) -> Command | None:
        """Merge a command appended right after this one.

        Only adjacent scripts, and adjacent appends to the same element
        property, are merged. Returns None when the two stay separate.
        """
        if following.cmd != self.cmd or following.cmd not in MERGEABLE_CODES:
            return None

        if self.is_code(CommandCode.SCRIPT):
            separator = SCRIPT_SEPARATOR
        elif (
            self.id is not None
            and self.prop is not None
            and self.id == following.id
            and self.prop == following.prop
        ):
            separator = APPEND_SEPARATOR
        else:
            return None

        return following.model_copy(update={"data": f"{self.data}{separator}{following.data}"})
