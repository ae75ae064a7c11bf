"""
Custom exceptions for the POS order backend

Every error that reaches the command surface is flattened to its message;
``error_code`` is kept for logs only.
"""


class PosBackendError(Exception):
    """Base exception for the POS order backend"""

    def __init__(self, message: str, user_message: str = None, error_code: str = None):
        super().__init__(message)
        self.user_message = user_message or message
        self.error_code = error_code or "GENERAL_ERROR"


class DatabaseError(PosBackendError):
    """Database-related errors"""

    def __init__(self, message: str, operation: str = None):
        super().__init__(message, message, "DATABASE_ERROR")
        self.operation = operation


class DuplicateOrderNumberError(DatabaseError):
    """Order number already taken by another order"""

    def __init__(self, order_number: str):
        super().__init__(
            f"Order number already exists: {order_number}", operation="save_order"
        )
        self.order_number = order_number


class ValidationError(PosBackendError):
    """Input validation errors"""

    def __init__(self, message: str, field: str = None):
        super().__init__(message, message, "VALIDATION_ERROR")
        self.field = field


class BusinessLogicError(PosBackendError):
    """Business rule violations"""

    def __init__(self, message: str, user_message: str = None):
        super().__init__(message, user_message or message, "BUSINESS_ERROR")


class NotFoundError(BusinessLogicError):
    """A row looked up by id does not exist"""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class CustomerNotFoundError(NotFoundError):
    """Customer not found"""

    def __init__(self, customer_id: str):
        super().__init__("Customer", customer_id)


class OrderNotFoundError(NotFoundError):
    """Order not found"""

    def __init__(self, order_id: str):
        super().__init__("Order", order_id)


class ProductNotFoundError(NotFoundError):
    """Product not found"""

    def __init__(self, product_id: str):
        super().__init__("Product", product_id)


class CategoryNotFoundError(NotFoundError):
    """Category not found"""

    def __init__(self, category_id: str):
        super().__init__("Category", category_id)
