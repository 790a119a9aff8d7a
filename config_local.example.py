# config_local.example.py

"""
Example local overrides.

Usage:
  1) Copy this file to `config_local.py`
  2) Adjust values for your machine
  3) Never commit `config_local.py` (it is gitignored)

Prefer `.env` for secrets. This file should contain only safe overrides.
"""

# Example: print calendar links instead of opening a browser (SSH sessions, containers)
# OPEN_LINKS = False

# Example: use another model for parsing notes
# LLM_MODEL = "openai/gpt-4o-mini"
