"""Quran reading-goal tracker.

Turns a reading goal (whole text, one part or one chapter, at a daily pace on
chosen weekdays) into a dated plan of assignments and tracks completion.
"""

__version__ = "0.1.0"
