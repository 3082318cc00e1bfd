"""
FastAPI HTTP surface for the changelog monitor.

This module provides:
- Manual check trigger
- Scheduled trigger endpoint for external timers
- Health and checkpoint status endpoints
"""
