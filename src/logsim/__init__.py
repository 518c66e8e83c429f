"""
Log Traffic Simulator - continuous synthetic log traffic for pipeline testing.

This package generates structured log events (user activity, API, database,
security, business, worker, notification, error and audit families), drives
them at several independent cadences, and instruments a small HTTP service so
live requests produce their own lifecycle events.
"""

__version__ = "1.0.0"
