# freshconnect/domain/errors.py


class AppError(Exception):
    """Base for errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class NotFound(AppError):
    status_code = 404


class CartNotFound(NotFound):
    # checkout reports a missing cart as a bad request
    status_code = 400

    def __init__(self, message: str = "No cart found"):
        super().__init__(message)


class Forbidden(AppError):
    status_code = 403


class Conflict(AppError):
    status_code = 409


class BusinessRuleError(AppError):
    status_code = 400


class EmptyCart(BusinessRuleError):
    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class InsufficientStock(BusinessRuleError):
    def __init__(self, product_id: int):
        super().__init__(f"Insufficient stock for product_id={product_id}")
        self.product_id = product_id


class InternalError(AppError):
    status_code = 500
