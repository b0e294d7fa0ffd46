"""
Profile-change notifications.

Components:
- profile_changes.py: field-level diff between two account records
- sinks.py: notification sinks + fire-and-forget dispatch
"""
