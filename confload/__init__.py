"""
Conference client load-test orchestration.
Launch, monitor and tear down many numbered copies of a meeting client.
"""

__version__ = "1.0.0"
