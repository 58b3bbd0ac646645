"""Release Content Pipeline.

Turns a semi-structured release note into structured facts, gates them, and
renders a customer email plus an internal Jira comment.
"""

__version__ = "1.0.0"
