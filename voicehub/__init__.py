"""
VoiceHub Schedule Feed

Fetches the VoiceHub broadcast song schedule and keeps a display surface
showing today's (or the next) program, surviving flaky networks.
"""

__version__ = "1.0.0"
