"""
SEO Checker - FastAPI Application Entry Point
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from seo_checker.config import settings
from seo_checker.api.v1.endpoints import health, seo_analysis
from seo_checker.exceptions import FetchError, SeoAnalysisError
from seo_checker.logger import logger

# Create app
app = FastAPI(
    title=settings.APP_NAME,
    description="SEO analysis and scoring engine: fetch a page, score it, suggest improvements",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(seo_analysis.router)


@app.exception_handler(SeoAnalysisError)
async def seo_analysis_error_handler(request: Request, exc: SeoAnalysisError):
    """InputError / FetchError -> 400, InternalError -> 500."""
    body = {"error": exc.message}
    if isinstance(exc, FetchError):
        body["status"] = exc.upstream_status
    if exc.status_code >= 500:
        logger.error(f"Internal error on {request.url.path}: {exc.message}")
    else:
        logger.info(f"Rejected {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": f"Invalid request body: {message}"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


@app.on_event("startup")
async def startup():
    """Initialize on startup."""
    logger.info(f"Starting {settings.APP_NAME}...")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.APP_NAME,
        "version": "1.0.0",
        "docs": "/docs"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("seo_checker.main:app", host="0.0.0.0", port=8000)
