"""Example FastAPI service with a view registry.

Single init: one logger, one view registry; the HTTP views are registered
under the "http" namespace and exposed read-only on /debug/views.
"""

import asyncio
import os

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from dotenv import load_dotenv

load_dotenv()

from app.observability import (
    initialize_observability,
    get_logger,
    get_registry,
)
from metricviews import UnregisteredNamespaceError
from metricviews.http import HTTPMetricsMiddleware, register_http_views

SERVICE_NAME = "example-service-python"

initialize_observability(SERVICE_NAME)
http_views = register_http_views(get_registry())

app = FastAPI(title="Example Service")
app.add_middleware(HTTPMetricsMiddleware, service_name=SERVICE_NAME, views=http_views)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


@app.post("/api/payment")
async def process_payment():
    """Example payment endpoint."""
    logger = get_logger()
    logger.info("processing payment", payment_id="PAY-12345", amount=1500.50)
    await asyncio.sleep(0.1)  # Simulate processing
    logger.info("payment completed", payment_id="PAY-12345")
    return {"status": "completed", "payment_id": "PAY-12345"}


@app.get("/debug/views")
async def all_views():
    """List every registered view, grouped by namespace."""
    registry = get_registry()
    return {
        "namespaces": {
            namespace: [repr(view) for view in registry.lookup(namespace)]
            for namespace in registry.namespaces()
        },
        "total": len(registry.all_views()),
    }


@app.get("/debug/views/{namespace}")
async def namespace_views(namespace: str):
    """List the views registered under one namespace."""
    try:
        views = get_registry().lookup(namespace)
    except UnregisteredNamespaceError as e:
        return JSONResponse(status_code=404, content={"error": str(e)})
    return {"namespace": namespace, "views": [repr(view) for view in views]}


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "8081"))
    uvicorn.run(app, host="0.0.0.0", port=port)
