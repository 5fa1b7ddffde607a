"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from sales_gateway.domain.query import SalesQueryService
from sales_gateway.infrastructure.store import RecordStore


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_record_store(request: Request) -> RecordStore:
    """Provide the application-wide record store"""
    return request.app.state.record_store


def get_query_service(request: Request) -> SalesQueryService:
    """Provide the sales query service bound to the application's store"""
    return request.app.state.query_service
