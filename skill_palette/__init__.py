"""
Skill Palette

Command palette for explicitly choosing a skill to attach to the next
outgoing message of an interactive agent session.
"""

__version__ = "0.1.0"
