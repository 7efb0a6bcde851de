#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
FastAPI 应用主入口
"""

import json
import logging
import os
import sys
import time

from fastapi import FastAPI, Request
from fastapi.responses import Response


# 自定义UTF-8 JSONResponse类，确保中文正确编码
class UTF8JSONResponse(Response):
    media_type = "application/json; charset=utf-8"

    def render(self, content) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,  # 不转义非ASCII字符
            allow_nan=False,
            indent=None,
            separators=(",", ":"),
        ).encode("utf-8")


# 添加项目根目录到路径
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

# 优先加载 .env 文件（必须在读取配置之前）
from dotenv import load_dotenv

env_path = os.path.join(project_root, '.env')
if os.path.exists(env_path):
    load_dotenv(env_path, override=True)

from server.config.app_config import get_config

config = get_config()

logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

from core.config.geju_config import get_weights
from server.api.v1.geju import router as geju_router

APP_VERSION = "1.0.0"

app = FastAPI(
    title="HiFate格局API",
    description="八字五行力量、日主旺衰与格局分析API服务",
    version=APP_VERSION,
    debug=config.debug,
    default_response_class=UTF8JSONResponse  # 使用UTF-8编码的JSON响应
)


# 添加请求日志中间件
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """记录请求日志，包括处理时间"""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    logger.info(
        f"{request.method} {request.url.path} - "
        f"Status: {response.status_code} - "
        f"Time: {process_time:.3f}s - "
        f"Client: {request.client.host if request.client else 'unknown'}"
    )
    response.headers["X-Process-Time"] = str(process_time)
    return response


# 注册路由
app.include_router(geju_router, prefix="/api/v1", tags=["格局分析"])

# 预加载权重（配置错误在启动日志中可见）
get_weights()
logger.info(f"✓ 服务启动完成: env={config.env}, weights_file={config.weights_file or '默认'}")


@app.get("/")
async def root():
    """根路径"""
    return {
        "message": "HiFate格局API服务",
        "version": APP_VERSION,
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """健康检查"""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "env": config.env,
    }


# 健康检查别名（部署脚本使用）
@app.get("/api/v1/health")
async def health_check_api():
    """健康检查 API 别名"""
    return await health_check()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "server.main:app",
        host=config.host,
        port=config.port,
        reload=config.debug,
        workers=1
    )
