"""
blockmail Modules
=================

Flask blueprint modules for the email builder.
"""

__all__ = ['builder']
