import time
from fastapi import Request

from loyalty.utils.logger import get_logger

logger = get_logger("access")

# Uptime probes hit "/" every few seconds
SKIP_PATHS = {"/"}


async def request_logging_middleware(request: Request, call_next):
    if request.url.path in SKIP_PATHS:
        return await call_next(request)

    start_time = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start_time) * 1000

    logger.info(
        "",
        extra={
            "client_addr": request.client.host if request.client else "unknown",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time_ms": round(elapsed_ms, 2),
        },
    )

    return response
