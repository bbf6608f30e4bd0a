# src/task_tracker/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Callable
from dataclasses import replace
from typing import cast

from ..core.state import AppState
from ..tasks.errors import IndexOutOfRangeError, PersistenceUnavailableError, TaskValidationError
from ..tasks.task_api import FORM_FIELDS, create_or_edit_task
from ..tasks.task_query import ViewOptions, parse_sort_key, parse_state
from .render import describe_view, format_task_list

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, /list, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like '/command arg key="some value"'.
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def parse_fields(args: list[str]) -> dict[str, str]:
    """
    Split 'key=value' arguments into form fields.

    Words without a known key are joined into the title, so `/add Buy milk` works.
    """
    fields: dict[str, str] = {}
    title_words: list[str] = []
    for arg in args:
        key, sep, value = arg.partition("=")
        if sep and key.lower() in FORM_FIELDS:
            fields[key.lower()] = value
        else:
            title_words.append(arg)
    if title_words and "title" not in fields:
        fields["title"] = " ".join(title_words)
    return fields


def _parse_number(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"Expected a task number, got {raw!r}.") from None


def _render_view(state: AppState) -> str:
    return format_task_list(state.current_view())


def _with_view(state: AppState, message: str) -> str:
    return f"{message}\n\n{_render_view(state)}"


def cmd_help(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    return registry.build_help()


def cmd_list(
    state: AppState,
    args: list[str],
) -> str:
    return f"[{describe_view(state.view_options)}]\n{_render_view(state)}"


def cmd_status(
    state: AppState,
    args: list[str],
) -> str:
    backend = getattr(state.settings, "storage_backend", "sqlite")
    validate = "ON" if getattr(state.settings, "validate_input", True) else "OFF"
    return (
        "Status:\n"
        f"  Storage backend: {backend}\n"
        f"  Input validation: {validate}\n"
        f"  Tasks stored: {len(state.task_store)}\n"
        f"  View: {describe_view(state.view_options)}"
    )


def cmd_add(
    state: AppState,
    args: list[str],
) -> str:
    """
    /add <title words> [summary=...] [state=...] [deadline=YYYY-MM-DD]
    /add title="..." summary="..." state="Doing right now" deadline=2024-05-01
    """
    fields = parse_fields(args)
    if not fields:
        return 'Usage: /add title="..." [summary="..."] [state=done|todo|doing] [deadline=YYYY-MM-DD]'

    try:
        create_or_edit_task(state.task_store, fields)
    except TaskValidationError as e:
        return f"Task not saved: {e}."
    except ValueError as e:
        return f"Task not saved: {e}"
    except PersistenceUnavailableError:
        logger.exception("Failed to persist new task.")
        return "Task not saved: storage is unavailable."

    return _with_view(state, "Task created.")


def cmd_edit(
    state: AppState,
    args: list[str],
) -> str:
    """
    /edit N key=value ...   (N is the number shown by the last /list)
    """
    if len(args) < 2:
        return 'Usage: /edit N [title="..."] [summary="..."] [state=...] [deadline=YYYY-MM-DD]'

    try:
        number = _parse_number(args[0])
        index = state.store_index_for(number)
        fields = parse_fields(args[1:])
        create_or_edit_task(state.task_store, fields, edit_index=index)
    except TaskValidationError as e:
        return f"Task not saved: {e}."
    except IndexOutOfRangeError as e:
        logger.warning("Edit rejected: %s", e)
        return f"No task at that position ({e})."
    except (IndexError, KeyError):
        return f"No task number {args[0]} in the current list. Use /list to refresh."
    except ValueError as e:
        return f"Task not saved: {e}"
    except PersistenceUnavailableError:
        logger.exception("Failed to persist edited task.")
        return "Task not saved: storage is unavailable."

    return _with_view(state, f"Task {number} updated.")


def cmd_delete(
    state: AppState,
    args: list[str],
) -> str:
    if len(args) != 1:
        return "Usage: /delete N"

    try:
        number = _parse_number(args[0])
        index = state.store_index_for(number)
        removed = state.task_store.delete(index)
    except IndexOutOfRangeError as e:
        logger.warning("Delete rejected: %s", e)
        return f"No task at that position ({e})."
    except (IndexError, KeyError):
        return f"No task number {args[0]} in the current list. Use /list to refresh."
    except ValueError as e:
        return str(e)
    except PersistenceUnavailableError:
        logger.exception("Failed to persist deletion.")
        return "Task not deleted: storage is unavailable."

    return _with_view(state, f"Deleted: {removed.title}")


def cmd_filter(
    state: AppState,
    args: list[str],
) -> str:
    """
    /filter <state>   -> show only tasks in that state
    /filter off       -> show all states
    """
    if not args:
        return "Usage: /filter done|todo|doing|off"

    raw = " ".join(args)
    if raw.lower() in ("off", "none", "all"):
        state.view_options = replace(state.view_options, filter_state=None)
    else:
        try:
            state.view_options = replace(state.view_options, filter_state=parse_state(raw))
        except ValueError as e:
            return f"{e}. Use done, todo or doing."

    return cmd_list(state, [])


def cmd_sort(
    state: AppState,
    args: list[str],
) -> str:
    """
    /sort deadline    -> ascending deadline, tasks without one last
    /sort <state>     -> tasks in that state first
    /sort off         -> stored order
    """
    if not args:
        return "Usage: /sort deadline|done|todo|doing|off"

    raw = " ".join(args)
    if raw.lower() in ("off", "none"):
        state.view_options = replace(state.view_options, sort_key=None)
    else:
        try:
            state.view_options = replace(state.view_options, sort_key=parse_sort_key(raw))
        except ValueError as e:
            return f"{e}. Use deadline, done, todo or doing."

    return cmd_list(state, [])


def cmd_reset(
    state: AppState,
    args: list[str],
) -> str:
    state.view_options = ViewOptions()
    return cmd_list(state, [])


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks with the current filter/sort.", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text='Create a task: /add title="..." summary="..." state=doing deadline=2024-05-01.',
    aliases=["new"],
)
registry.register("edit", cmd_edit, help_text="Edit task N from the last list: /edit N state=done.")
registry.register("delete", cmd_delete, help_text="Delete task N from the last list.", aliases=["rm"])
registry.register("filter", cmd_filter, help_text="Show only one state: /filter done|todo|doing|off.")
registry.register("sort", cmd_sort, help_text="Sort: /sort deadline | /sort done|todo|doing | /sort off.")
registry.register("reset", cmd_reset, help_text="Clear filter and sort.")
registry.register("status", cmd_status, help_text="Show storage backend, task count and view.")
