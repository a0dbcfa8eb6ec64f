import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from medistock.config import settings
from medistock.exceptions import NotFoundError, PersistenceError, ValidationError
from medistock.logging_config import setup_logging
from medistock.rate_limit import limiter
from medistock.routers import movements_api, products_api, stock_api
from medistock.services.validation import schema_error

# Loglama sistemini baslat (uygulama ayaga kalkmadan once)
setup_logging()

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Tibbi sarf malzemesi icin lot bazli stok takibi",
    version="0.1.0",
    debug=settings.DEBUG,
)

logger.info("%s uygulamasi baslatiliyor (depo: %s)...", settings.APP_NAME, settings.STORAGE_BACKEND)

# slowapi'yi FastAPI state'e bagla
app.state.limiter = limiter

# ---------------------------------------------------------------------------
# CORS Ayarlari
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:8000", "http://localhost:5173"],
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)


# ---------------------------------------------------------------------------
# Guvenlik Header'lari Middleware
# ---------------------------------------------------------------------------
class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Her yanita guvenlik header'lari ekler."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app.add_middleware(SecurityHeadersMiddleware)


# ---------------------------------------------------------------------------
# Hata yonetimi
# ---------------------------------------------------------------------------
@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Rate limit asildiginda kullaniciya uygun hata mesaji dondur."""
    logger.warning("Rate limit asildi: %s %s", request.method, request.url)
    return JSONResponse(
        status_code=429,
        content={
            "detail": "Cok fazla istek gonderdiniz. Lutfen biraz bekleyip tekrar deneyin.",
            "retry_after": exc.detail,
        },
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    """Kullanici girdisi hatali: form durumu korunur, mesaj gosterilir."""
    logger.info("Dogrulama hatasi: %s %s - %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=400, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Sema hatalari da domain dogrulama hatalariyla ayni 400 govdesiyle doner."""
    error = schema_error(exc.errors())
    logger.info("Sema hatasi: %s %s - %s", request.method, request.url.path, error.message)
    return JSONResponse(status_code=400, content=error.to_dict())


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning("Kayit bulunamadi: %s %s - %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=404, content=exc.to_dict())


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    """Depo hatasi: bellekteki defter gecerli kalir, otomatik tekrar denenmez."""
    logger.error("Depo hatasi: %s %s - %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=503, content=exc.to_dict())


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Yakalanmamis hatalar 500 olarak doner."""
    logger.error("Yakalanmamis hata: %s %s", request.method, request.url, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": "Beklenmeyen bir hata olustu.", "details": {}},
    )


# API Router'lari
app.include_router(movements_api.router, prefix="/api/v1/movements", tags=["Hareketler"])
app.include_router(stock_api.router, prefix="/api/v1", tags=["Stok"])
app.include_router(products_api.router, prefix="/api/v1/products", tags=["Urunler"])


@app.get("/")
def root():
    return {"app": settings.APP_NAME, "version": app.version, "docs": "/docs"}


@app.get("/health")
def health():
    return {"status": "ok"}
