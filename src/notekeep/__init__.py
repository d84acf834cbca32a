"""
NoteKeep Backend - Personal Note Keeping API

Registration/login plus owner-scoped notes with tags, pinning and colors.
"""

__version__ = "1.0.0"
