from postdeck.routes.categories import admin_router as admin_categories_router
from postdeck.routes.categories import router as categories_router
from postdeck.routes.posts import admin_router as admin_posts_router
from postdeck.routes.posts import router as posts_router
from postdeck.routes.uploads import router as uploads_router

__all__ = [
    "admin_categories_router",
    "admin_posts_router",
    "categories_router",
    "posts_router",
    "uploads_router",
]
