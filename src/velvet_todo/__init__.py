"""VelvetTodo: a console to-do list that turns free-form notes into tasks with an LLM."""

__version__ = "0.1.0"
