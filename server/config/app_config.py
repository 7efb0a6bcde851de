#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
统一应用配置管理
所有配置统一从这里读取，避免配置分散
"""

import os
from dataclasses import dataclass
from typing import Optional

# ENV / APP_ENV 的取值归一
_ENV_ALIASES = {
    'local': 'local',
    'dev': 'local',
    'development': 'local',
    'stage': 'staging',
    'staging': 'staging',
    'prod': 'production',
    'production': 'production',
}


def _get_bool(key: str, default: bool = False) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in ('true', '1', 'yes', 'on')


@dataclass
class AppConfig:
    """应用配置"""
    env: str = 'local'
    debug: bool = False
    log_level: str = 'INFO'
    host: str = '0.0.0.0'
    port: int = 8001
    # 格局权重覆盖文件（JSON），为空则使用默认权重
    weights_file: Optional[str] = None

    @property
    def is_production(self) -> bool:
        return self.env == 'production'

    @classmethod
    def from_env(cls) -> 'AppConfig':
        """从环境变量创建完整配置"""
        # 优先读取 ENV，其次 APP_ENV，未知取值按本地开发处理
        raw_env = os.getenv('ENV', os.getenv('APP_ENV', 'local')).lower()
        return cls(
            env=_ENV_ALIASES.get(raw_env, 'local'),
            debug=_get_bool('DEBUG', default=False),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            host=os.getenv('HOST', '0.0.0.0'),
            port=int(os.getenv('PORT', '8001')),
            weights_file=os.getenv('GEJU_WEIGHTS_FILE') or None,
        )


# 全局配置实例（单例模式）
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """获取全局配置实例（单例）"""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reload_config():
    """重新加载配置（用于热更新）"""
    global _config
    _config = AppConfig.from_env()
    return _config
