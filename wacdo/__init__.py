"""
                Wacdo Catalog API

REST backend for a fast-food ordering system: users and roles, product
catalog, product options and menus, behind bearer-token authentication.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
