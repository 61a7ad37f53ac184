import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.exc import SQLAlchemyError

from student_portal.core.config import Settings, load_settings, validate_runtime_config
from student_portal.core.errors import install_exception_handlers
from student_portal.core.logging import configure_logging
from student_portal.core.views import templates
from student_portal.database import build_engine, build_session_factory, init_schema
from student_portal.routes import auth_routes, student_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_schema(app.state.engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL.')
    yield
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    validate_runtime_config(settings)

    app = FastAPI(title='Student Portal', lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)

    install_exception_handlers(app)

    @app.get('/', response_class=HTMLResponse)
    def index(request: Request):
        return templates.TemplateResponse(request, 'index.html', {})

    app.include_router(auth_routes.router)
    app.include_router(student_routes.router, prefix='/students')
    return app


def run() -> None:
    settings = load_settings()
    app = create_app(settings)
    logger.info('Server is running on port %s', settings.port)
    uvicorn.run(app, host='0.0.0.0', port=settings.port)


if __name__ == '__main__':
    run()
