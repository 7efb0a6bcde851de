#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
格局/旺衰计算权重配置

所有启发式数值集中在 GejuWeights 中，可通过 GEJU_WEIGHTS_FILE 指向的
JSON 文件覆盖（只需写要改的键），例如：

    {"commanding_bonus": 1.8, "clash_retain": {"peak": 0.5}}
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


def _frozen(mapping: Dict[str, float]) -> Mapping[str, float]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class GejuWeights:
    """格局/旺衰权重"""

    # 天干位置权重（日干为日主本身，不计入）
    stem_weights: Mapping[str, float] = field(default_factory=lambda: _frozen({
        'year': 1.0, 'month': 1.2, 'day': 0.0, 'hour': 1.0,
    }))
    # 地支位置权重
    branch_weights: Mapping[str, float] = field(default_factory=lambda: _frozen({
        'year': 1.0, 'month': 2.5, 'day': 1.5, 'hour': 1.0,
    }))
    base_unit: float = 1.0
    # 月令司令本气加成
    commanding_bonus: float = 1.5

    # 三合/三会
    full_combination_ratio: float = 1.5
    partial_with_peak_ratio: float = 1.2
    partial_without_peak_ratio: float = 1.1
    # 六合
    paired_combination_fraction: float = 0.2
    # 天干合化
    stem_transform_fraction: float = 0.5

    # 冲：各地势保留比例（库地冲损耗最小）
    clash_retain: Mapping[str, float] = field(default_factory=lambda: _frozen({
        'peak': 0.6, 'growth': 0.7, 'vault': 0.85,
    }))
    # 冲开库
    open_vault_fraction: float = 0.1

    # 通根系数
    rootedness: Mapping[str, float] = field(default_factory=lambda: _frozen({
        'month': 1.5, 'day': 1.3, 'hour': 1.1, 'year': 1.1, 'none': 1.0,
    }))
    seasonal_bonus: float = 2.0
    seat_bonus: float = 1.0
    # 得令判定：月令藏干中帮身五行所占司令天数比例
    seasonal_ratio: float = 0.5
    # 旺衰等级下限（极旺 >= ，身旺 > ，中和 >= ，身弱 > ，其余为极弱）
    strength_thresholds: Mapping[str, float] = field(default_factory=lambda: _frozen({
        'extreme_strong': 6.0, 'strong': 2.0, 'neutral': -2.0, 'weak': -6.0,
    }))

    # 特殊格局
    strong_command_days: int = 16
    follow_root_limit: float = 10.0
    follow_dominance_ratio: float = 1.5
    follow_stem_score: float = 50.0
    balance_spread: float = 30.0

    def to_dict(self) -> Dict[str, Any]:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = dict(value) if isinstance(value, Mapping) else value
        return data

    def merged(self, overrides: Mapping[str, Any]) -> 'GejuWeights':
        """
        合并覆盖项，返回新实例

        字典型字段按键合并；未知键记录告警后忽略。
        """
        known = {f.name for f in fields(self)}
        changes: Dict[str, Any] = {}
        for key, value in overrides.items():
            if key not in known:
                logger.warning(f"⚠️ 忽略未知权重配置项: {key}")
                continue
            current = getattr(self, key)
            if isinstance(current, Mapping):
                if not isinstance(value, Mapping):
                    raise ValueError(f"权重配置项 {key} 必须是对象")
                merged = dict(current)
                for sub_key, sub_value in value.items():
                    if sub_key not in merged:
                        logger.warning(f"⚠️ 忽略未知权重配置项: {key}.{sub_key}")
                        continue
                    merged[sub_key] = float(sub_value)
                changes[key] = _frozen(merged)
            else:
                changes[key] = type(current)(value)
        return replace(self, **changes)

    @classmethod
    def from_file(cls, path: str) -> 'GejuWeights':
        """从 JSON 文件加载（只包含需要覆盖的键）"""
        with open(path, 'r', encoding='utf-8') as f:
            overrides = json.load(f)
        if not isinstance(overrides, dict):
            raise ValueError(f"权重配置文件格式错误（需要 JSON 对象）: {path}")
        return cls().merged(overrides)

    @classmethod
    def from_env(cls) -> 'GejuWeights':
        """从环境变量 GEJU_WEIGHTS_FILE 加载，未配置或加载失败时使用默认值"""
        path = os.getenv('GEJU_WEIGHTS_FILE')
        if not path:
            return cls()
        try:
            weights = cls.from_file(path)
            logger.info(f"✅ 已加载权重配置: {path}")
            return weights
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"❌ 权重配置加载失败，使用默认值: {path}, 错误: {e}")
            return cls()


# 全局权重实例（单例模式）
_weights: Optional[GejuWeights] = None


def get_weights() -> GejuWeights:
    """获取全局权重实例（单例）"""
    global _weights
    if _weights is None:
        _weights = GejuWeights.from_env()
    return _weights


def reload_weights() -> GejuWeights:
    """重新加载权重（用于热更新）"""
    global _weights
    _weights = GejuWeights.from_env()
    return _weights
