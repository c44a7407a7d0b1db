"""
Restaurant menus.

Responsibilities:
- Add dishes to a restaurant's embedded menu.
- Remove every dish with a given name from that menu.
"""
