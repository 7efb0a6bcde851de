#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
格局分析对外入口

    from core.geju import compute_force_matrix, classify_strength, classify_pattern

    chart = Chart.from_ganzhi('甲子', '丙寅', '戊午', '庚申')
    matrix = compute_force_matrix(chart)
    strength = classify_strength(chart, matrix)
    pattern = classify_pattern(chart, is_hour_unknown=False)

四个入口都是纯函数，任何异常都在入口内转换为结果值，不会向调用方抛出。
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from core.analyzers import ForceAnalyzer, GejuAnalyzer, InteractionAnalyzer, WangShuaiAnalyzer
from core.config.geju_config import GejuWeights
from core.models import (
    Chart,
    ForceMatrix,
    InteractionRecord,
    PatternResult,
    StrengthResult,
)

logger = logging.getLogger(__name__)


def detect_interactions(
    branches: Sequence[str],
    stems: Sequence[str],
    month_branch: str,
    weights: Optional[GejuWeights] = None,
) -> List[InteractionRecord]:
    """检测四柱刑冲合会，出错返回空列表"""
    return InteractionAnalyzer(weights).detect(branches, stems, month_branch)


def compute_force_matrix(
    chart: Chart,
    commanding_override: Optional[str] = None,
    weights: Optional[GejuWeights] = None,
) -> ForceMatrix:
    """计算五行力量矩阵，出错时返回带 error 的全零矩阵"""
    return ForceAnalyzer(weights).compute(chart, commanding_override)


def classify_strength(
    chart: Chart,
    force_matrix: Optional[ForceMatrix],
    weights: Optional[GejuWeights] = None,
) -> StrengthResult:
    """判断日主旺衰，出错时 level 为 None 并带 error"""
    return WangShuaiAnalyzer(weights).analyze(chart, force_matrix)


def classify_pattern(
    chart: Chart,
    is_hour_unknown: bool = False,
    weights: Optional[GejuWeights] = None,
) -> PatternResult:
    """判断格局，出错时返回 Undeterminable"""
    return GejuAnalyzer(weights).analyze(chart, is_hour_unknown)


def analyze_chart(
    chart: Chart,
    commanding_override: Optional[str] = None,
    is_hour_unknown: bool = False,
    weights: Optional[GejuWeights] = None,
) -> Dict[str, Any]:
    """
    完整分析：刑冲合会 + 五行力量 + 旺衰 + 格局

    Returns:
        可直接 JSON 序列化的结果字典
    """
    if is_hour_unknown and isinstance(chart, Chart):
        chart = chart.without_hour()

    matrix = compute_force_matrix(chart, commanding_override, weights)
    strength = classify_strength(chart, matrix, weights)
    pattern = classify_pattern(chart, is_hour_unknown, weights)
    chart_data = chart.to_dict() if isinstance(chart, Chart) else None

    logger.info(
        f"✅ 命盘分析完成: 旺衰={strength.level_name}, "
        f"格局={getattr(pattern, 'name', pattern.kind)}"
    )
    return {
        'chart': chart_data,
        'is_hour_unknown': is_hour_unknown,
        'interactions': [r.to_dict() for r in matrix.interactions],
        'force_matrix': matrix.to_dict(),
        'strength': strength.to_dict(),
        'pattern': pattern.to_dict(),
    }
