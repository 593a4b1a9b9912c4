import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from datetime import datetime
from starlette.middleware.sessions import SessionMiddleware

from catalog.core.config import settings
from catalog.core.exceptions import LoginRequired, format_validation_errors, validation_error_response
from catalog.core.logging import setup_logging
from catalog.core.web import redirect
from catalog.middleware.request_logging import RequestLoggingMiddleware
from catalog.database.connection import Base, engine
from catalog.models import product, user  # noqa: F401  (register tables on Base.metadata)
from catalog.routes import system
from catalog.routes.auth import router as auth_router, web_router as auth_web_router, INTENDED_URL_KEY
from catalog.routes.products import router as product_router
from catalog.routes.api_products import router as api_product_router

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME)

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(SessionMiddleware, secret_key=settings.SECRET_KEY, same_site="lax")


app.include_router(auth_router)
app.include_router(auth_web_router)
app.include_router(product_router)
app.include_router(api_product_router)
app.include_router(system.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return validation_error_response(format_validation_errors(exc.errors()))


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    if request.method == "GET":
        request.session[INTENDED_URL_KEY] = exc.next_path
    return redirect("/login")


@app.on_event("startup")
async def startup_event():
    Base.metadata.create_all(bind=engine)
    app.state.start_time = datetime.utcnow()
    app.state.requests_count = 0
    logger.info("%s started", settings.APP_NAME)
