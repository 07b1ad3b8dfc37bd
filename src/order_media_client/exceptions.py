GENERIC_FAILURE_MESSAGE = "Something went wrong. Please try again."


class OrderClientError(Exception):
    """Base class."""


class OrderValidationError(OrderClientError):
    pass


class DeletionNotConfirmedError(OrderValidationError):
    pass


class DuplicateOrderError(OrderClientError):
    def __init__(self, order_id: str):
        super().__init__("This order ID has already been used")
        self.order_id = order_id


class NotFoundError(OrderClientError):
    pass


class OrderNotFoundError(NotFoundError):
    pass


class StoredObjectNotFoundError(NotFoundError):
    pass


class BackendError(OrderClientError):
    """Сбой таблиц или хранилища."""


class DatabaseError(BackendError):
    pass


class StorageError(BackendError):
    pass


class AuthError(OrderClientError):
    pass


class SubmissionFailedError(OrderClientError):
    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE):
        super().__init__(message)
