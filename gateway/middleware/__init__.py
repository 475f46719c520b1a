from gateway.middleware.cors import CORSPolicyMiddleware
from gateway.middleware.logging import LoggingMiddleware
from gateway.middleware.request_id import RequestIdMiddleware

__all__ = [
    "CORSPolicyMiddleware",
    "LoggingMiddleware",
    "RequestIdMiddleware",
]
