from copydesk.gateway.api.v1.articles import router as articles_router
from copydesk.gateway.api.v1.content import router as content_router
from copydesk.gateway.api.v1.media import router as media_router

__all__ = ["routers"]
routers = [content_router, media_router, articles_router]
