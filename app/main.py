import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import Depends, FastAPI
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.database import create_engine, create_session_factory
from app.middleware import RequestContextLogFilter, RequestIDMiddleware


def configure_logging(log_level: str) -> None:
    """Set up logging with request ID and caller id injected into every log line."""
    log_filter = RequestContextLogFilter()
    formatter = logging.Formatter(
        "%(asctime)s [%(request_id)s] [user=%(user_id)s] %(levelname)s %(name)s: %(message)s"
    )

    # Replace existing handlers on the root logger rather than using basicConfig
    # (basicConfig is a no-op if handlers are already set, which uvicorn does at startup)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    handler.addFilter(log_filter)
    root_logger.addHandler(handler)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncGenerator:
    """Manage application lifecycle: set up DB engine on startup, dispose on shutdown."""
    settings: Settings = application.state.settings
    engine = create_engine(settings)
    application.state.engine = engine
    application.state.session_factory = create_session_factory(engine)

    yield

    await application.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory."""
    settings = settings or Settings()

    application = FastAPI(
        title="Clausewright",
        description="Contract templates, contracts and clauses",
        version="0.1.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    application.state.settings = settings

    configure_logging(settings.LOG_LEVEL)
    application.add_middleware(RequestIDMiddleware)

    # Database session dependency: one transaction per request, so each
    # operation's ownership check and write commit or roll back together
    async def get_session() -> AsyncGenerator[AsyncSession, None]:
        async with application.state.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    from app.repositories.clause_repo import ClauseRepository
    from app.repositories.contract_repo import ContractRepository
    from app.repositories.template_repo import TemplateRepository
    from app.routers.contracts import get_contract_service, router as contracts_router
    from app.routers.templates import router as templates_router
    from app.services.contract_service import ContractService

    # Override the service dependency so the routers get a real DB session
    async def get_contract_service_with_session(
        session: AsyncSession = Depends(get_session),
    ) -> ContractService:
        return ContractService(
            TemplateRepository(session),
            ContractRepository(session),
            ClauseRepository(session),
        )

    application.include_router(templates_router, prefix="/api/v1")
    application.include_router(contracts_router, prefix="/api/v1")
    application.dependency_overrides[get_contract_service] = get_contract_service_with_session

    @application.get("/health", tags=["Health Check"])
    async def health_check():
        return {"status": "healthy", "version": "0.1.0"}

    return application


app = create_app()
