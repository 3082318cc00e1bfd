"""
Monitor package for changelog change detection.

This package contains:
- Changelog parsing and version diffing
- Notification message formatting
- Check orchestration with checkpoint commit
- Periodic scheduler service
"""

__version__ = "1.0.0"
