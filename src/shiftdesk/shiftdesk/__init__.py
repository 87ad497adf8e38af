"""shiftdesk package.

Shift attendance (check-in/check-out with optional geofencing) and a Kanban
task board, organized by feature modules with a thin Flask controller layer
over service/repository layers.
"""
