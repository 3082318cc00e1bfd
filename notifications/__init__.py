"""
Notification delivery to messaging platforms (Telegram, Discord, Slack).
"""
