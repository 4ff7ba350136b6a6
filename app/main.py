from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, HTMLResponse
from fastapi.staticfiles import StaticFiles
from starlette.templating import Jinja2Templates
from pathlib import Path
from sqlalchemy.ext.asyncio import AsyncSession
from app.api import products
from app.client.formatting import display_or_dash, format_price
from app.client.state import ProductViewState
from app.config import settings
from app.database import async_engine, get_db, init_db
from app.exceptions import ProductNotFoundError, ProductValidationError
from app.logging_config import configure_logging, get_logger
from app.schemas import ProductResponse
from app.services import product_store
from dotenv import load_dotenv

load_dotenv()

configure_logging(settings.log_level, sql_echo=settings.debug)
logger = get_logger(__name__)

BASE_DIR = Path(__file__).resolve().parent

app = FastAPI(
    title=settings.api_title,
    description="API for managing a product inventory",
    version=settings.api_version,
)

# Mount static files
app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")

# Templates
templates = Jinja2Templates(directory=BASE_DIR / "templates")
templates.env.filters["price"] = lambda value: format_price(value, settings.currency_symbol)
templates.env.filters["or_dash"] = display_or_dash

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)

# Include routers
app.include_router(products.router)


@app.on_event("startup")
async def startup_event():
    # Production schemas come from Alembic migrations
    if settings.create_tables_on_startup:
        await init_db()
    logger.info("%s %s started (%s)", settings.api_title, settings.api_version, settings.environment)


@app.on_event("shutdown")
async def shutdown_event():
    await async_engine.dispose()


async def _page_state(request: Request, db: AsyncSession) -> ProductViewState:
    state = ProductViewState()
    rows = await product_store.list_products(db)
    state.set_products([ProductResponse.model_validate(p) for p in rows])
    state.set_search_term(request.query_params.get("search", ""))
    state.set_category_filter(request.query_params.get("category", ""))
    return state


@app.get("/", response_class=HTMLResponse)
@app.get("/products", response_class=HTMLResponse)
async def root(request: Request, db: AsyncSession = Depends(get_db)):
    state = await _page_state(request, db)
    context = {"state": state, "currency_symbol": settings.currency_symbol}
    return templates.TemplateResponse(request, "index.html", context)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}


@app.exception_handler(ProductNotFoundError)
async def product_not_found_handler(request: Request, exc: ProductNotFoundError):
    return JSONResponse(status_code=404, content={"message": exc.message})


@app.exception_handler(ProductValidationError)
async def product_validation_handler(request: Request, exc: ProductValidationError):
    logger.info("Validation failed on %s %s: %s", request.method, request.url.path, list(exc.errors))
    return JSONResponse(status_code=422, content={"errors": exc.errors})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        if error["type"] == "json_invalid" or len(error["loc"]) < 2:
            field = "body"
        else:
            field = str(error["loc"][-1])
        errors.setdefault(field, []).append(error["msg"])
    return JSONResponse(status_code=422, content={"errors": errors})


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )
