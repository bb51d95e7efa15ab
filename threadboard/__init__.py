"""
ThreadBoard - minimal authenticated message board

Users register and log in, then post and reply to short text messages
in a threaded feed ordered by latest activity.
"""

__version__ = "0.1.0"
__author__ = "ThreadBoard Project"
