# medaccess/main.py

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from medaccess.api.dependencies import close_audit_publisher
from medaccess.api.middleware import (
    CorrelationIdMiddleware,
    PrincipalContextMiddleware,
    RequestAuditMiddleware,
)
from medaccess.api.routers import access, admin, health, records
from medaccess.application.exceptions import ApplicationError, AuditDeliveryError
from medaccess.config.logging import configure_logging
from medaccess.config.settings import get_settings
from medaccess.domain.exceptions import (
    CooldownActiveError,
    DomainError,
    InvalidInputError,
    InvalidRangeError,
)
from medaccess.security.exceptions import UnauthorizedError

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_audit_publisher()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> PrincipalContext -> RequestAudit.
app.add_middleware(RequestAuditMiddleware)
app.add_middleware(PrincipalContextMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(UnauthorizedError)
async def unauthorized_error_handler(request, exc: UnauthorizedError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(InvalidInputError)
async def invalid_input_error_handler(request, exc: InvalidInputError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(InvalidRangeError)
async def invalid_range_error_handler(request, exc: InvalidRangeError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(CooldownActiveError)
async def cooldown_active_error_handler(request, exc: CooldownActiveError):
    retry_after = max(1, int(exc.retry_after.total_seconds() + 0.999))
    return JSONResponse(
        status_code=429,
        content={"detail": exc.message},
        headers={"Retry-After": str(retry_after)},
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(AuditDeliveryError)
async def audit_delivery_error_handler(request, exc: AuditDeliveryError):
    return JSONResponse(status_code=503, content={"detail": exc.message})


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /records, /access, /admin
app.include_router(health.router)
app.include_router(records.router, prefix="/records")
app.include_router(access.router, prefix="/access")
app.include_router(admin.router, prefix="/admin")
