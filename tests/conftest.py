#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pytest 全局配置

提供：
- 共享 fixtures（应用、客户端、示例命盘）
- 测试钩子
"""

import os
import sys
from typing import Any, Dict

import pytest

# 添加项目根目录到路径
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)


# ==================== 应用和客户端 Fixtures ====================

@pytest.fixture(scope="session")
def app():
    """
    创建 FastAPI 应用实例（整个测试会话共享）

    Returns:
        FastAPI 应用实例
    """
    from server.main import app
    return app


@pytest.fixture(scope="session")
def client(app):
    """
    创建测试客户端（整个测试会话共享）

    Returns:
        TestClient 实例
    """
    from fastapi.testclient import TestClient
    return TestClient(app)


# ==================== 数据 Fixtures ====================

@pytest.fixture(scope="function")
def sample_chart():
    """
    示例命盘：甲子 丙寅 戊午 庚申（日主戊土）
    """
    from core.models import Chart
    return Chart.from_ganzhi('甲子', '丙寅', '戊午', '庚申')


@pytest.fixture(scope="function")
def sample_geju_request() -> Dict[str, Any]:
    """示例格局请求"""
    return {
        "year": "甲子",
        "month": "丙寅",
        "day": "戊午",
        "hour": "庚申",
    }


@pytest.fixture(scope="function")
def default_weights():
    """默认权重（不读环境变量）"""
    from core.config.geju_config import GejuWeights
    return GejuWeights()


# ==================== Pytest Hooks ====================

def pytest_configure(config):
    """
    pytest 配置钩子

    在 pytest 初始化时调用
    """
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "api: API 测试")


def pytest_collection_modifyitems(config, items):
    """
    修改测试收集

    根据路径自动添加标记
    """
    for item in items:
        if "unit" in item.nodeid:
            item.add_marker(pytest.mark.unit)
        elif "api" in item.nodeid:
            item.add_marker(pytest.mark.api)

