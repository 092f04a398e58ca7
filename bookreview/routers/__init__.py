"""
API Routers Package

Router Structure:
- general.py: public endpoints (registration, catalog, reviews read)
- customer.py: /customer/* endpoints (login, review management)

Each router is imported and registered in main.py.
"""

from bookreview.routers.customer import router as customer_router
from bookreview.routers.general import router as general_router

__all__ = [
    "customer_router",
    "general_router",
]
