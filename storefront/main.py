# storefront/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from storefront.config import settings
from storefront.database import init_db
from storefront.exceptions import ConstraintViolationError, NotFoundError

# Router imports
from storefront.routes.auth import router as auth_router
from storefront.routes.admin import router as admin_router
from storefront.routes.categories import router as categories_router
from storefront.routes.products import router as products_router
from storefront.routes.cart import router as cart_router
from storefront.routes.addresses import router as addresses_router
from storefront.routes.orders import router as orders_router
from storefront.routes.stats import router as stats_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Storefront API", version="1.0.0", lifespan=lifespan)

# CORS Configuration
origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
if settings.FRONTEND_URL:
    origins.append(settings.FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Domain errors -> HTTP
@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(ConstraintViolationError)
async def constraint_handler(request: Request, exc: ConstraintViolationError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(IntegrityError)
async def integrity_handler(request: Request, exc: IntegrityError):
    logger.warning("Unhandled integrity error on %s: %s", request.url.path, exc.orig)
    return JSONResponse(status_code=400, content={"detail": "Constraint violation"})


# Router registration
app.include_router(auth_router)
app.include_router(admin_router)
app.include_router(categories_router)
app.include_router(products_router)
app.include_router(cart_router)
app.include_router(addresses_router)
app.include_router(orders_router)
app.include_router(stats_router)


@app.get("/healthcheck")
def healthcheck():
    return {"status": "ok", "timestamp": datetime.now().isoformat()}
