from canteen.api.routes import cart_router, favorites_router, menu_router, order_router, staff_router

__all__ = ["cart_router", "favorites_router", "menu_router", "order_router", "staff_router"]
