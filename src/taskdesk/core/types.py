"""Table and role names shared across TaskDesk."""

from __future__ import annotations

# Logical tables in the row store.
PROJECTS_TABLE = "projects"
EMPLOYEES_TABLE = "employees"
TASKS_TABLE = "tasks"
PROFILES_TABLE = "profiles"
USER_ROLES_TABLE = "user_roles"

ADMIN_ROLE = "admin"
