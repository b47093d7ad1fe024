"""
codetracker

Daemon that watches directory trees via inotify and reports file
modifications by the tracked user to the activity collector.
"""

__version__ = "0.1.0"
