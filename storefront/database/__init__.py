# Database modules

from .products import ProductDatabase
from .carts import CartStore, CartDatabase
from .orders import OrderDatabase, OrderPersistenceError

__all__ = [
    "ProductDatabase",
    "CartStore",
    "CartDatabase",
    "OrderDatabase",
    "OrderPersistenceError",
]
