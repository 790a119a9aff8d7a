"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, AITaskCandidate)
- task_store.py: in-memory list mirrored to one key/value entry
- intake.py: LLM-backed parsing of free-form text into tasks
- view_model.py: focus filter + display sort
- calendar_sync.py: Google Calendar event links for the top dated tasks
- task_api.py: small high-level helpers used by the rest of the app
"""
