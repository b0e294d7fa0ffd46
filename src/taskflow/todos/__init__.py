"""
Todo subsystem.

Components:
- todo_models.py: Todo, Priority, due-date codec
- todo_store.py: TodoRepository backed by the key-value store
- views.py: derived read-time views (today, this week, calendar markers)
"""
