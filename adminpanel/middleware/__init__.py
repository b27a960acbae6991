"""HTTP middleware. Applied in the main app; first added = outermost."""

from adminpanel.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
