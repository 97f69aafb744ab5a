"""Order fulfillment persistence core.

This package provides:
- The Order aggregate with its CREATED -> PAID -> SHIPPED lifecycle
- Money, Address and OrderItem value objects
- The OrderRepository port and its SQLAlchemy adapter
- Row mapping between aggregates and the orders/order_items tables
"""

__version__ = "0.1.0"
