"""TaskDesk backend: first-admin bootstrap and spreadsheet task import."""
