"""
Showcase Modules
================

Flask blueprint modules making up the REST API.
"""

__all__ = ['auth', 'projects', 'clients', 'contact', 'newsletter']
