import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import tasks
from .config import settings
from .exceptions import BadInputError, StoreUnavailableError, TaskNotFoundError
from .services.task_service import TaskService

# 配置日志
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"🚀 {settings.app_name} 启动")
    logger.info(f"📡 监听地址: {settings.host}:{settings.port}")
    yield
    logger.info(f"👋 {settings.app_name} 关闭，共 {tasks.get_task_service().count_tasks()} 条任务")


app = FastAPI(
    title=settings.app_name,
    description="内存任务管理服务：创建、查询、部分更新和归档任务",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(TaskNotFoundError)
async def task_not_found_handler(request: Request, exc: TaskNotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


@app.exception_handler(BadInputError)
async def bad_input_handler(request: Request, exc: BadInputError):
    logger.warning(f"请求体无效: {request.method} {request.url.path}, {exc}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # 请求体无法解码或结构不对时统一返回 400
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "请求体无效"
    logger.warning(f"请求体无效: {request.method} {request.url.path}, {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": f"请求体格式错误: {message}"},
    )


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    logger.error(f"存储不可用: {exc}")
    return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})


# 路由注册
app.include_router(tasks.router)


@app.get("/", summary="服务信息", tags=["系统"])
async def root():
    """获取 API 服务信息"""
    return {"message": f"{settings.app_name} is running", "version": __version__}


@app.get("/health", summary="健康检查", tags=["系统"])
def health(service: TaskService = Depends(tasks.get_task_service)):
    """检查服务健康状态"""
    return {"status": "healthy", "tasks": service.count_tasks()}


def run():
    import uvicorn
    # 数据保存在进程内存中，只能单 worker 运行
    uvicorn.run(
        "taskboard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
