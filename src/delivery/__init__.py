"""
Terminal delivery layer for vocab study sessions.

Components:
- study_view: Rich panels for each session phase and the batch table
"""

from .study_view import (
    batch_table,
    render_home,
    render_session,
)

__all__ = [
    "batch_table",
    "render_home",
    "render_session",
]
