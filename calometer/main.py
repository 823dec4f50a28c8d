import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from calometer.config import settings
from calometer.database import Base, engine
from calometer.models import body, calorie_log, user, user_session  # noqa: F401  (register tables)
from calometer.routers import auth, balance, logs
from calometer.routers import body as body_router
from calometer.utils.db_migrations import ensure_caloric_balance_unique_log
from calometer.utils.response import create_response, handle_exception

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title=settings.PROJECT_NAME)

logger = logging.getLogger(__name__)

# Auto create tables
Base.metadata.create_all(bind=engine)
ensure_caloric_balance_unique_log(engine)

# CORS for the web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)

# Add routes
app.include_router(auth.router)
app.include_router(body_router.router)
app.include_router(logs.router)
app.include_router(balance.router)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # the rejected input is left out, it may not be JSON encodable (NaN, Infinity)
    errors = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    logger.info("Rejected request to %s: %s", request.url.path, errors)
    return create_response(
        message="Invalid request data",
        data={"errors": errors},
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
    )


@app.get("/")
def home():
    try:
        return create_response(
            message="Calometer API running",
            data={"service": "calometer"},
            status_code=status.HTTP_200_OK
        )
    except Exception as exc:
        return handle_exception(exc)
