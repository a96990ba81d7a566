"""
Atlas Fulfillment - Serviço de ciclo de vida de pedidos
FastAPI Application
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from .config import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

# Criar aplicação FastAPI
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="""
    Serviço de fulfillment que conecta lojistas independentes ao armazém.

    ## Funcionalidades

    * **Lojistas**: cadastro e comissão, mantidos pelo admin
    * **Produtos**: catálogo do lojista, movimentações de estoque, localização no armazém
    * **Pedidos**: lançamento de vendas e fluxo separação → embalagem → envio
    * **Notificações**: canal do admin e canal de cada lojista
    * **Painéis**: contagens por etapa e alertas de estoque baixo
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Configurar CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Importar routers depois de criar a app para evitar imports circulares
from .models import Base, engine  # noqa: E402
from .routers import (  # noqa: E402
    sellers_router,
    products_router,
    orders_router,
    notifications_router,
    dashboard_router,
    email_router
)
from .services.errors import DomainError  # noqa: E402

app.include_router(sellers_router, prefix=settings.API_PREFIX, tags=["sellers"])
app.include_router(products_router, prefix=settings.API_PREFIX, tags=["products"])
app.include_router(orders_router, prefix=settings.API_PREFIX, tags=["orders"])
app.include_router(notifications_router, prefix=settings.API_PREFIX, tags=["notifications"])
app.include_router(dashboard_router, prefix=settings.API_PREFIX, tags=["dashboard"])
app.include_router(email_router, prefix=settings.API_PREFIX, tags=["email"])


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Erros de regra de negócio com código estável"""
    logger.info(f"{request.method} {request.url.path} rejeitado: {exc.code} - {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code}
    )


@app.get("/", include_in_schema=False)
async def root():
    """Redirecionar para a documentação"""
    return RedirectResponse(url="/docs")


@app.get("/health", tags=["Health"])
async def root_health():
    """Health check raiz"""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


# Event handlers
@app.on_event("startup")
async def startup_event():
    """Evento de início da aplicação"""
    if settings.AUTO_CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
    logger.info(f"[STARTUP] {settings.APP_NAME} v{settings.APP_VERSION} iniciado")
    logger.info(f"[INFO] Documentação em: http://{settings.SERVICE_HOST}:{settings.SERVICE_PORT}/docs")
    logger.info(f"[INFO] Endpoints em: {settings.API_PREFIX}")
    if settings.CANCELLATION_ENABLED:
        logger.info(f"[INFO] Cancelamento habilitado a partir de: {settings.CANCELLABLE_STATUSES}")


@app.on_event("shutdown")
async def shutdown_event():
    """Evento de encerramento da aplicação"""
    logger.info(f"[SHUTDOWN] {settings.APP_NAME} encerrado")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.SERVICE_HOST,
        port=settings.SERVICE_PORT,
        reload=settings.DEBUG
    )
