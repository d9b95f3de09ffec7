import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

# Load .env before settings are read
env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=env_path)

from core.config import settings  # noqa: E402
from core.db.base import Base  # noqa: E402
from core.db.session import engine  # noqa: E402
import models  # noqa: E402,F401
from api.v1.auth.routes import router as auth_router  # noqa: E402
from api.v1.workspaces.routes import workspace_router  # noqa: E402
from api.v1.projects.routes import project_router  # noqa: E402
from api.v1.tasks.routes import task_router  # noqa: E402
from api.v1.feedback.routes import feedback_router  # noqa: E402
from api.v1.reports.routes import report_router  # noqa: E402

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if settings.using_default_secret:
    logger.warning("SECRET_KEY is not set; using the development default")

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.PROJECT_NAME)
app.include_router(auth_router, prefix=settings.API_PREFIX)
app.include_router(workspace_router, prefix=settings.API_PREFIX)
app.include_router(project_router, prefix=settings.API_PREFIX)
app.include_router(task_router, prefix=settings.API_PREFIX)
app.include_router(feedback_router, prefix=settings.API_PREFIX)
app.include_router(report_router, prefix=settings.API_PREFIX)


@app.get("/")
def root():
    return {"message": "Service is running"}
