"""
                Bistro Boss API

REST backend for the Bistro Boss restaurant site: menu, testimonials,
carts and users on MongoDB, with cookie-based session tokens.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
