"""FastAPI application factory for the canteen."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from canteen.api.errors import register_exception_handlers
from canteen.api.routes import cart_router, favorites_router, menu_router, order_router, staff_router
from canteen.domain import canteen
from canteen.utils.logging import add_context, clear_context


def create_app() -> FastAPI:
    """Build the API. The ``canteen`` domain must already be initialized."""
    app = FastAPI(
        title="Canteen API",
        description="Canteen ordering: carts, orders, payment and fulfillment",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the canteen domain context for each request."""
        clear_context()
        add_context(method=request.method, path=request.url.path)
        with canteen.domain_context():
            return await call_next(request)

    register_exception_handlers(app)

    app.include_router(menu_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    app.include_router(staff_router)
    app.include_router(favorites_router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": canteen.name})

    return app
