"""Response verbs.

Each verb builds exactly one command and hands it to `add_command()`, so
merge-on-append applies to verbs the same way it applies to raw commands.
Elements are identified by their HTML id attribute.
"""

from __future__ import annotations

import warnings
from abc import ABC, abstractmethod
from typing import Any, Self

from .commands import CommandCode, SearchReplace
from .urls import encode_redirect_url

# Client-side array holding elements created by the DOM primitives
DOM_ELEMENTS_RESET = "xjxElm = []"


def _text(value: Any) -> str:
    """Coerce a verb argument to text; None becomes an empty string."""
    return "" if value is None else str(value)


class ResponseVerbs(ABC):
    """Verb layer mixed into ResponseQueue."""

    @abstractmethod
    def add_command(self, attributes: dict[str, Any], data: Any = "") -> Self:
        """Queue one command built from `attributes` and `data`."""

    # =========================================================================
    # Element properties
    # =========================================================================

    def assign(self, target: str, attribute: str, data: Any) -> Self:
        """Assign `data` to the element's attribute."""
        return self.add_command(
            {"cmd": CommandCode.ASSIGN, "id": _text(target), "prop": _text(attribute)},
            _text(data),
        )

    def append(self, target: str, attribute: str, data: Any) -> Self:
        """Append `data` to the element's attribute.

        Consecutive appends to the same element attribute are merged into a
        single command, separated by a space.
        """
        return self.add_command(
            {"cmd": CommandCode.APPEND, "id": _text(target), "prop": _text(attribute)},
            _text(data),
        )

    def prepend(self, target: str, attribute: str, data: Any) -> Self:
        """Prepend `data` to the element's attribute."""
        return self.add_command(
            {"cmd": CommandCode.PREPEND, "id": _text(target), "prop": _text(attribute)},
            _text(data),
        )

    def replace(self, target: str, attribute: str, search: Any, data: Any) -> Self:
        """Replace `search` with `data` in the element's attribute."""
        return self.add_command(
            {"cmd": CommandCode.REPLACE, "id": _text(target), "prop": _text(attribute)},
            SearchReplace(search=_text(search), replacement=_text(data)),
        )

    def clear(self, target: str, attribute: str) -> Self:
        """Clear the element's attribute."""
        return self.assign(_text(target), _text(attribute), "")

    # =========================================================================
    # Context object
    # =========================================================================

    def context_assign(self, attribute: str, data: Any) -> Self:
        """Assign `data` to a member of the request's context object.

        The context object is referenced with `this` in `attribute`.
        """
        return self.add_command(
            {"cmd": CommandCode.CONTEXT_ASSIGN, "prop": _text(attribute)},
            _text(data),
        )

    def context_append(self, attribute: str, data: Any) -> Self:
        return self.add_command(
            {"cmd": CommandCode.CONTEXT_APPEND, "prop": _text(attribute)},
            _text(data),
        )

    def context_prepend(self, attribute: str, data: Any) -> Self:
        return self.add_command(
            {"cmd": CommandCode.CONTEXT_PREPEND, "prop": _text(attribute)},
            _text(data),
        )

    def context_clear(self, attribute: str) -> Self:
        return self.context_assign(_text(attribute), "")

    # =========================================================================
    # Dialogs and scripts
    # =========================================================================

    def alert(self, message: Any) -> Self:
        """Display an alert dialog."""
        return self.add_command({"cmd": CommandCode.ALERT}, _text(message))

    def debug(self, message: Any) -> Self:
        return self.add_command({"cmd": CommandCode.DEBUG}, _text(message))

    def confirm_commands(self, count: int, message: Any) -> Self:
        """Ask the user to confirm; on cancel the next `count` commands are skipped."""
        return self.add_command({"cmd": CommandCode.CONFIRM, "id": count}, _text(message))

    def script(self, js: Any) -> Self:
        """Execute a portion of javascript.

        Consecutive scripts are merged into one command joined with `; `.
        """
        return self.add_command({"cmd": CommandCode.SCRIPT}, _text(js))

    def call(self, function: str, *args: Any) -> Self:
        """Call an existing javascript function with `args`."""
        return self.add_command({"cmd": CommandCode.CALL, "func": _text(function)}, list(args))

    def redirect(self, url: str, delay: float = 0) -> Self:
        """Navigate the browser to `url`, optionally after `delay` seconds."""
        url = encode_redirect_url(_text(url))
        if delay > 0:
            milliseconds = round(delay * 1000)
            return self.script(f"window.setTimeout(\"window.location = '{url}';\",{milliseconds});")
        return self.script(f'window.location = "{url}";')

    # =========================================================================
    # Element lifecycle
    # =========================================================================

    def remove(self, target: str) -> Self:
        """Remove an element from the document."""
        return self.add_command({"cmd": CommandCode.REMOVE, "id": _text(target)}, "")

    def create(self, parent: str, tag: str, element_id: str) -> Self:
        """Create a new `tag` element with id `element_id` inside `parent`."""
        return self.add_command(
            {"cmd": CommandCode.CREATE, "id": _text(parent), "prop": _text(element_id)},
            _text(tag),
        )

    def insert(self, before: str, tag: str, element_id: str) -> Self:
        """Insert a new element just before `before`."""
        return self.add_command(
            {"cmd": CommandCode.INSERT_BEFORE, "id": _text(before), "prop": _text(element_id)},
            _text(tag),
        )

    def insert_after(self, after: str, tag: str, element_id: str) -> Self:
        return self.add_command(
            {"cmd": CommandCode.INSERT_AFTER, "id": _text(after), "prop": _text(element_id)},
            _text(tag),
        )

    def create_input(self, parent: str, input_type: str, name: str, element_id: str) -> Self:
        """Create an input element inside `parent`."""
        return self.add_command(
            {
                "cmd": CommandCode.CREATE_INPUT,
                "id": _text(parent),
                "prop": _text(element_id),
                "type": _text(input_type),
            },
            _text(name),
        )

    def insert_input(self, before: str, input_type: str, name: str, element_id: str) -> Self:
        return self.add_command(
            {
                "cmd": CommandCode.INSERT_INPUT_BEFORE,
                "id": _text(before),
                "prop": _text(element_id),
                "type": _text(input_type),
            },
            _text(name),
        )

    def insert_input_after(
        self, after: str, input_type: str, name: str, element_id: str
    ) -> Self:
        return self.add_command(
            {
                "cmd": CommandCode.INSERT_INPUT_AFTER,
                "id": _text(after),
                "prop": _text(element_id),
                "type": _text(input_type),
            },
            _text(name),
        )

    # =========================================================================
    # Events
    # =========================================================================

    def set_event(self, target: str, event: str, script: Any) -> Self:
        """Set the element's `event` handler to a piece of javascript."""
        return self.add_command(
            {"cmd": CommandCode.SET_EVENT, "id": _text(target), "prop": _text(event)},
            _text(script),
        )

    def add_event(self, target: str, event: str, script: Any) -> Self:
        """Deprecated alias of `set_event()`."""
        warnings.warn(
            "add_event() is deprecated, use set_event()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.set_event(_text(target), _text(event), _text(script))

    def add_handler(self, target: str, event: str, handler: str) -> Self:
        """Attach the javascript function `handler` to the element's event."""
        return self.add_command(
            {"cmd": CommandCode.ADD_HANDLER, "id": _text(target), "prop": _text(event)},
            _text(handler),
        )

    def remove_handler(self, target: str, event: str, handler: str) -> Self:
        return self.add_command(
            {"cmd": CommandCode.REMOVE_HANDLER, "id": _text(target), "prop": _text(event)},
            _text(handler),
        )

    # =========================================================================
    # Functions
    # =========================================================================

    def set_function(self, function: str, args: str, script: Any) -> Self:
        """Define a javascript function with comma separated `args`."""
        return self.add_command(
            {"cmd": CommandCode.SET_FUNCTION, "func": _text(function), "prop": _text(args)},
            _text(script),
        )

    def wrap_function(
        self,
        function: str,
        args: str,
        scripts: list[str],
        return_value_variable: str,
    ) -> Self:
        """Wrap an existing javascript function.

        `scripts[0]` runs before the original function and `scripts[1]`
        after it; the original's result is kept in `return_value_variable`.
        """
        return self.add_command(
            {
                "cmd": CommandCode.WRAP_FUNCTION,
                "func": _text(function),
                "prop": _text(args),
                "type": _text(return_value_variable),
            },
            list(scripts),
        )

    # =========================================================================
    # Scripts and stylesheets
    # =========================================================================

    def include_script(
        self, file_name: str, script_type: str | None = None, element_id: str | None = None
    ) -> Self:
        """Load a javascript file."""
        return self.add_command(
            self._include_attributes(CommandCode.INCLUDE_SCRIPT, script_type, element_id),
            _text(file_name),
        )

    def include_script_once(
        self, file_name: str, script_type: str | None = None, element_id: str | None = None
    ) -> Self:
        """Load a javascript file unless it is already loaded."""
        return self.add_command(
            self._include_attributes(CommandCode.INCLUDE_SCRIPT_ONCE, script_type, element_id),
            _text(file_name),
        )

    def remove_script(self, file_name: str, unload: str = "") -> Self:
        """Remove a script reference, calling `unload` first when given."""
        return self.add_command(
            {"cmd": CommandCode.REMOVE_SCRIPT, "unld": _text(unload)},
            _text(file_name),
        )

    def include_css(self, file_name: str, media: str | None = None) -> Self:
        command: dict[str, Any] = {"cmd": CommandCode.INCLUDE_CSS}
        if media:
            command["media"] = _text(media)
        return self.add_command(command, _text(file_name))

    def remove_css(self, file_name: str, media: str | None = None) -> Self:
        command: dict[str, Any] = {"cmd": CommandCode.REMOVE_CSS}
        if media:
            command["media"] = _text(media)
        return self.add_command(command, _text(file_name))

    @staticmethod
    def _include_attributes(
        code: CommandCode, script_type: str | None, element_id: str | None
    ) -> dict[str, Any]:
        command: dict[str, Any] = {"cmd": code}
        if script_type:
            command["type"] = _text(script_type)
        if element_id:
            command["elm_id"] = _text(element_id)
        return command

    # =========================================================================
    # Flow control (timeouts in tenths of a second)
    # =========================================================================

    def wait_for_css(self, timeout: int = 600) -> Self:
        """Pause the response until included stylesheets are loaded."""
        return self.add_command({"cmd": CommandCode.WAIT_FOR_CSS, "prop": timeout}, "")

    def wait_for(self, script: Any, tenths: int) -> Self:
        """Pause the response until `script` evaluates to true."""
        return self.add_command({"cmd": CommandCode.WAIT_FOR, "prop": tenths}, _text(script))

    def sleep(self, tenths: int) -> Self:
        return self.add_command({"cmd": CommandCode.SLEEP, "prop": tenths}, "")

    # =========================================================================
    # DOM primitives
    # =========================================================================

    def dom_start_response(self) -> Self:
        return self.script(DOM_ELEMENTS_RESET)

    def dom_create_element(self, variable: str, tag: str) -> Self:
        return self.add_command({"cmd": CommandCode.DOM_CREATE_ELEMENT, "tgt": variable}, tag)

    def dom_set_attribute(self, variable: str, key: str, value: Any) -> Self:
        return self.add_command(
            {"cmd": CommandCode.DOM_SET_ATTRIBUTE, "tgt": variable, "key": key},
            value,
        )

    def dom_remove_children(
        self, parent: str, skip: int | None = None, remove: int | None = None
    ) -> Self:
        command: dict[str, Any] = {"cmd": CommandCode.DOM_REMOVE_CHILDREN}
        if skip:
            command["skip"] = skip
        if remove:
            command["remove"] = remove
        return self.add_command(command, parent)

    def dom_append_child(self, parent: str, variable: str) -> Self:
        return self.add_command({"cmd": CommandCode.DOM_APPEND_CHILD, "par": parent}, variable)

    def dom_insert_before(self, target: str, variable: str) -> Self:
        return self.add_command({"cmd": CommandCode.DOM_INSERT_BEFORE, "tgt": target}, variable)

    def dom_insert_after(self, target: str, variable: str) -> Self:
        return self.add_command({"cmd": CommandCode.DOM_INSERT_AFTER, "tgt": target}, variable)

    def dom_append_text(self, parent: str, text: Any) -> Self:
        return self.add_command({"cmd": CommandCode.DOM_APPEND_TEXT, "par": parent}, text)

    def dom_end_response(self) -> Self:
        return self.script(DOM_ELEMENTS_RESET)
