"""
Folio Modules
=============

Flask blueprint modules for the portfolio admin.
"""

__all__ = ['auth', 'dashboard', 'projects', 'settings', 'skills', 'public']
