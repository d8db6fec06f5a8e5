import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from truthguard.api.v1.endpoints import router as v1_router
from truthguard.core.cache import cache_stats, init_global_cache
from truthguard.core.config import config
from truthguard.core.errors import VerificationError
from truthguard.services.sources.panel import get_default_panel

logging.basicConfig(
    level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
log = logging.getLogger(__name__)

app = FastAPI(
    title=config.PROJECT_NAME,
    description="Claim verification against a panel of trusted news sources",
    version=config.VERSION,
    openapi_url=f"{config.API_PREFIX}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.exception_handler(VerificationError)
async def verification_error_handler(request: Request, exc: VerificationError) -> JSONResponse:
    log.warning(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.on_event("startup")
async def startup_event():
    panel = get_default_panel()
    log.info(f"Lookup provider: {config.LOOKUP_PROVIDER}; {len(panel)} trusted sources")
    if config.CACHE_ENABLED:
        init_global_cache()


@app.get("/")
async def root():
    return {"message": "Welcome to the TruthGuard Verification API! Check /docs for API documentation."}


@app.get("/health")
async def health_check():
    return {
        "status": "operational",
        "message": "The TruthGuard Verification API is running smoothly.",
        "version": config.VERSION,
        "lookup_provider": config.LOOKUP_PROVIDER,
        "cache": cache_stats(),
    }
