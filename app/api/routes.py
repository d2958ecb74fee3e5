from fastapi import APIRouter, Body, Request, Response
from fastapi.responses import JSONResponse

from app.errors import MissingCredentialsError, UpstreamAccountsError
from app.schemas.portfolio import PortfolioRequest
from app.services.portfolio_service import PortfolioService

router = APIRouter()


def _portfolio_service(request: Request) -> PortfolioService:
    service = request.app.state.portfolio_service
    if service is None:
        service = request.app.state.build_portfolio_service()
        request.app.state.portfolio_service = service
    return service


@router.get('/health')
def health():
    return {'status': 'ok'}


@router.options('/portfolio')
def portfolio_preflight():
    return Response(status_code=204)


@router.post('/portfolio')
def get_portfolio(request: Request, req: PortfolioRequest | None = Body(default=None)):
    req = req or PortfolioRequest()
    try:
        summary = _portfolio_service(request).summarize(req.access_key, req.secret_key, req.user_id)
        # serialization errors map to the 500 envelope
        return JSONResponse(content=summary.model_dump())
    except MissingCredentialsError as exc:
        return JSONResponse(status_code=exc.status_code, content={'error': exc.message})
    except UpstreamAccountsError as exc:
        return JSONResponse(
            status_code=exc.status_code,
            content={'error': 'Upbit accounts error', 'detail': exc.detail},
        )
    except Exception as exc:
        print(f"[PORTFOLIO][server_error] type={type(exc).__name__} reason={exc}", flush=True)
        return JSONResponse(status_code=500, content={'error': 'Server error', 'detail': str(exc)})
