import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from chefmaster.container import container
from chefmaster.exception import BusinessException
from chefmaster.session.router import router as sheet_router

# 로거 설정
logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """애플리케이션 라이프사이클 관리"""
    # Startup
    logger.info("🚀 ChefMaster Sheets API 시작 중...")
    container.wire(modules=[__name__])
    yield
    # Shutdown
    logger.info("🔄 ChefMaster Sheets API 종료 중...")


app = FastAPI(
    title="ChefMaster Sheets",
    version="1.0.0",
    lifespan=lifespan
)

Instrumentator().instrument(app).expose(app)


@app.exception_handler(BusinessException)
async def business_exception_handler(request: Request, exc: BusinessException):
    logger.info("business_exception", extra={"path": str(request.url), "error_code": exc.error_code})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.get("/health")
async def health():
    return {"status": "ok"}


# 라우터 등록
app.include_router(sheet_router)
