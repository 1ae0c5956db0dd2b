"""Layout engine and file collaborators for lsgrid."""
