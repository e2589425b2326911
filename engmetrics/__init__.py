"""
Engineering Metrics API

Read-only JSON API over team, member, Git and correlation metrics fixtures.
"""

__version__ = "1.0.0"
