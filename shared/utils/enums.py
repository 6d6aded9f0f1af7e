from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    RETURNED = "returned"


class InventoryChangeReason(str, Enum):
    INITIAL_STOCK = "initial stock"
    RESTOCK = "restock"
