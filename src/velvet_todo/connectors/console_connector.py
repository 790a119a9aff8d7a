# src/velvet_todo/connectors/console_connector.py

from __future__ import annotations

import logging
import sys
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_task_list
from ..core.state import AppState
from ..llm.client import friendly_llm_error_message
from ..tasks.intake import IntakeBusyError, IntakeError
from ..tasks.task_api import INTAKE_FAILURE_NOTICE, add_tasks_from_text

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _rewrite_prev_line(line: str) -> None:
    """
    Replace the last terminal line with `line`.
    Best-effort: if not a TTY, just print a new line.
    """
    if sys.stdout.isatty():
        sys.stdout.write("\033[1A\033[2K\r")
        sys.stdout.write(line + "\n")
        sys.stdout.flush()
    else:
        print(line)


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_input(state: AppState, user_input: str) -> str:
    """
    One REPL turn: slash-commands go to the registry, anything else to the AI intake.
    Returns the text to show.
    """
    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    try:
        cmd_response = command_registry.handle(state, user_input, emit=emit)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    if cmd_response is not None:
        return cmd_response

    emit("[AI] Reading your note...")
    try:
        added = add_tasks_from_text(state, user_input)
    except IntakeBusyError as e:
        return str(e)
    except IntakeError as e:
        cause = e.__cause__
        if isinstance(cause, RuntimeError):
            logger.info("Intake failed: %s", friendly_llm_error_message(cause))
        else:
            logger.info("Intake failed: %s", e)
        return INTAKE_FAILURE_NOTICE
    except Exception:
        logger.exception("Saving new tasks failed.")
        return "Internal error while saving tasks."

    if not added:
        return "No tasks found in that note.\n\n" + render_task_list(state)

    noun = "task" if len(added) == 1 else "tasks"
    return f"Added {len(added)} {noun}.\n\n{render_task_list(state)}"


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (focus=%s).", state.focus_mode)
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "VelvetTodo"))

    _print_ts(f"[{app_name}] Write what's on your mind. Use /help for commands. Use /exit to quit.\n")
    print(render_task_list(state))
    print()

    while True:
        try:
            user_input = input(">>> ").strip()
            _rewrite_prev_line(f"[{_ts_local()}] >>> {user_input}")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        print(f"[{_ts_local()}] {handle_input(state, user_input)}\n")

    logger.info("Console connector finished.")
