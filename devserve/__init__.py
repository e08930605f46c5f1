"""
devserve - local development server that reloads the browser when the
HTML, CSS or JavaScript of a static app folder changes.
"""

__version__ = '0.1.0'
