from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import router
from app.config.settings import get_settings
from app.errors import MissingCredentialsError
from app.integrations.upbit_rest import UpbitRestClient
from app.services.portfolio_service import PortfolioService

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'POST, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type',
}


def build_portfolio_service() -> PortfolioService:
    settings = app.state.get_settings()
    client = UpbitRestClient(
        base_url=settings.UPBIT_BASE_URL,
        timeout=settings.UPBIT_TIMEOUT_SEC,
    )
    return PortfolioService(client=client, base_currency=settings.PORTFOLIO_BASE_CURRENCY)


app = FastAPI(title="Upbit Portfolio Gateway", version="0.1.0")
app.include_router(router, prefix="/api")

# NOTE: lazy-loaded so app import does not read env.
app.state.get_settings = get_settings
app.state.build_portfolio_service = build_portfolio_service
app.state.portfolio_service = None


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error_envelope(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={'error': exc.detail},
        headers=getattr(exc, 'headers', None),
    )


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError):
    error = MissingCredentialsError()
    return JSONResponse(status_code=error.status_code, content={'error': error.message})


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.PORTFOLIO_HOST, port=settings.PORTFOLIO_PORT)
