"""
SMS Utils - Codecs for SMS message data
=======================================

Text envelope format for SMS messages, validity period coding for
message centres, and human-transcribable codes for phone numbers.

License: MIT
Version: 1.0.0
"""

__version__ = "1.0.0"
__license__ = "MIT"
