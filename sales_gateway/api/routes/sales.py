"""GET /api/sales - paginated, filtered and sorted sales records"""

import time
import logging
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from sales_gateway.api.routes.schemas import ErrorResponse, SalesPageResponse
from sales_gateway.api.dependencies import get_query_service, get_request_id
from sales_gateway.domain.exceptions import DataSourceError, StoreNotReadyError
from sales_gateway.domain.query import SalesQueryService
from sales_gateway.infrastructure.observability.logging import log_query
from sales_gateway.infrastructure.observability.metrics import record_query

router = APIRouter()


@router.get(
    "/sales",
    response_model=SalesPageResponse,
    responses={500: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
)
async def list_sales(
    request: Request,
    service: SalesQueryService = Depends(get_query_service),
):
    """
    Search, filter, sort and paginate sales records.

    Query parameters are parsed permissively: malformed values fall back to
    their defaults instead of producing a 4xx. Multi-select filters accept
    comma-separated lists or repeated keys.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    raw_params = {key: request.query_params.getlist(key) for key in request.query_params.keys()}

    try:
        result = await service.execute(raw_params)

    except (DataSourceError, StoreNotReadyError) as e:
        logging.error(f"Sales data unavailable: {e}", extra={"request_id": request_id})
        return JSONResponse(status_code=503, content={"error": "Sales data unavailable"})

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id}, exc_info=True)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    sort_by = result.sort_by.value
    duration_ms = (time.time() - start_time) * 1000
    record_query(sort_by, result.total_items)
    log_query(request_id, sort_by, result.page, result.total_items, duration_ms)

    return SalesPageResponse.from_result(result)
