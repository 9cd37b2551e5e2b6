"""Models package initialization"""

from .base import Base
from .user import User, UserRole
from .category import Category
from .product import Product, ProductVariant, ProductImage
from .cart import Cart, CartItem
from .order import Order, OrderItem, OrderTracking, OrderStatus, PaymentStatus
from .wishlist import WishlistItem
from .address import Address, AddressType
from .review import Review, ReviewImage, ReviewVote, VoteType

# Export all models
__all__ = [
    "Base",
    "User",
    "UserRole",
    "Category",
    "Product",
    "ProductVariant",
    "ProductImage",
    "Cart",
    "CartItem",
    "Order",
    "OrderItem",
    "OrderTracking",
    "OrderStatus",
    "PaymentStatus",
    "WishlistItem",
    "Address",
    "AddressType",
    "Review",
    "ReviewImage",
    "ReviewVote",
    "VoteType",
]
