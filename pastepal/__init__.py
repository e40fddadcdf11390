"""
PastePal - share text and image pastes behind bearer-token authentication.
"""

__version__ = "0.1.0"
