from guestlist.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
