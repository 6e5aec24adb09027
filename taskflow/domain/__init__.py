"""Domain layer for TaskFlow.

Pure models and functions - no I/O. Subpackages:
project, task, activity, user, analytics, shared.
"""
