# src/velvet_todo/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_api import current_view, resolve_task_ref, sync_calendar
from ..tasks.task_models import Priority, Task

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_PRIORITY_MARK = {Priority.HIGH: "!!", Priority.MEDIUM: "! ", Priority.LOW: "  "}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /list, ...)."""

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
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
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
        lines.append("Anything else you type is turned into tasks.")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task(index: int, task: Task) -> str:
    box = "[x]" if task.is_completed else "[ ]"
    when = " ".join(p for p in (task.date, task.time) if p)
    line = f"{index:>3}. {box} {_PRIORITY_MARK[task.priority]} {task.title}"
    if when:
        line += f"  ({when})"
    line += f"  #{task.id[:8]}"
    if task.description:
        line += f"\n        {task.description}"
    return line


def render_task_list(state: AppState) -> str:
    view = current_view(state)
    heading = "Crucial Flow" if state.focus_mode else "Current Agenda"
    noun = "task" if len(view) == 1 else "tasks"
    lines = [f"{heading} ({len(view)} {noun})"]

    if not view:
        lines.append(
            "  Your path is clear. Pure tranquility awaits."
            if state.focus_mode
            else "  Your mind is a blank canvas. Start unburdening."
        )
        return "\n".join(lines)

    for i, task in enumerate(view, start=1):
        lines.append(format_task(i, task))
    return "\n".join(lines)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_task_list(state)


def cmd_status(state: AppState, args: list[str]) -> str:
    llm = state.llm
    model = getattr(llm, "model", None) or "offline demo"
    focus = "ON" if state.focus_mode else "OFF"
    return (
        "Status:\n"
        f"  Tasks stored: {state.task_store.count_tasks()}\n"
        f"  Focus mode: {focus}\n"
        f"  Model: {model}"
    )


def cmd_focus(state: AppState, args: list[str]) -> str:
    """
    /focus        -> toggle
    /focus on     -> only incomplete HIGH priority or due-today tasks
    /focus off    -> everything
    """
    if not args:
        state.focus_mode = not state.focus_mode
    else:
        arg = args[0].lower()
        if arg in ("on", "1", "true", "yes"):
            state.focus_mode = True
        elif arg in ("off", "0", "false", "no"):
            state.focus_mode = False
        else:
            return "Usage: /focus [on|off]."

    logger.debug("Focus mode -> %s", state.focus_mode)
    return render_task_list(state)


def cmd_done(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /done <number|id>."
    task = resolve_task_ref(state, args[0])
    if task is None:
        return f"No task matches {args[0]!r}. Use /list to see numbers."
    updated = state.task_store.toggle_task(task.id)
    if updated is None:
        return f"No task matches {args[0]!r}."
    mark = "done" if updated.is_completed else "not done"
    return f"Marked {mark}: {updated.title}\n\n{render_task_list(state)}"


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <number|id>."
    task = resolve_task_ref(state, args[0])
    if task is None:
        return f"No task matches {args[0]!r}. Use /list to see numbers."
    state.task_store.delete_task(task.id)
    return f"Deleted: {task.title}\n\n{render_task_list(state)}"


def cmd_sync(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    if emit:
        with contextlib.suppress(Exception):
            emit("[SYNC] Opening calendar links...")

    result = sync_calendar(state)
    if result.notice:
        return result.notice

    lines = [f"Opened {len(result.urls)} calendar link(s):"]
    for task in result.synced:
        lines.append(f"  - {task.title}")
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("focus", cmd_focus, help_text="Focus mode: /focus [on|off].")
registry.register("done", cmd_done, help_text="Toggle completion: /done <number|id>.", aliases=["toggle"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <number|id>.", aliases=["rm", "del"])
registry.register("sync", cmd_sync, help_text="Open calendar links for the top dated tasks (3 by default).")
registry.register("status", cmd_status, help_text="Show storage/focus/model status.")
