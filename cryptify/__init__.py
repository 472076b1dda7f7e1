"""
Cryptify - text encryption toolkit.

Playfair digraph cipher and textbook RSA over individual characters.
For learning purposes only; neither cipher is secure.
"""

from .constants import APP_VERSION as __version__
