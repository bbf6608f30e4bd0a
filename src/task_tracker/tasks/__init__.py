"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskState) and the JSON snapshot codec
- task_store.py: write-through ordered collection over a key-value store
- task_query.py: filtered / sorted views (ViewOptions)
- task_api.py: form-level helpers used by the presentation layer
- errors.py: exception hierarchy
"""
