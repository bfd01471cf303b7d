"""
API route modules.

Each module defines routes for one domain area.
"""

from routes.variants import router as variants_router
from routes.products import router as products_router
from routes.categories import router as categories_router
from routes.colors import router as colors_router
from routes.orders import router as orders_router
from routes.questions import router as questions_router
from routes.users import router as users_router
from routes.purchase_orders import router as purchase_orders_router

__all__ = [
    "variants_router",
    "products_router",
    "categories_router",
    "colors_router",
    "orders_router",
    "questions_router",
    "users_router",
    "purchase_orders_router",
]
