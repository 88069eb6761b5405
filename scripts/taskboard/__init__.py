"""
Taskboard - terminal list of prioritized tasks.

Architecture:
- models / store / form: task data, the task list with its cursor, and
  the add/edit form state (no I/O)
- session: the controller state machine driving those
- storage / config: the .dashboard workspace, JSON resources, theme
- views/ + app.py: Textual front end; a pure projection of the
  controller's view model
- cli.py: entry point
"""

__version__ = "0.1.0"
