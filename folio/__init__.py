"""
Folio - A Portfolio Content Admin for Flask
===========================================

Authentication-gated content management for a personal portfolio site:
- Projects, with image upload
- Site settings (a single record)
- Skills, grouped by category
- A read-only public API for the site pages

Usage:
    from folio import Folio

    app = Flask(__name__)
    Folio(app)
"""

__version__ = '0.1.0'

from .extension import Folio, current_folio

__all__ = ['Folio', 'current_folio']
