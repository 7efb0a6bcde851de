#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
格局服务层 - 业务逻辑封装

所有方法返回 {'success': True, 'data': ...} 或
{'success': False, 'error': ..., 'invalid_input': bool}。
"""

import logging
from typing import Any, Dict, Optional

from core.config.geju_config import get_weights
from core.geju import (
    analyze_chart,
    classify_pattern,
    classify_strength,
    compute_force_matrix,
    detect_interactions,
)
from core.models import Chart, ChartValidationError

logger = logging.getLogger(__name__)


def _invalid(e: Exception) -> Dict[str, Any]:
    logger.warning(f"⚠️ 格局服务: 命盘数据无效 - {e}")
    return {'success': False, 'error': f"命盘数据无效: {e}", 'invalid_input': True}


def _failed(action: str, e: Exception) -> Dict[str, Any]:
    logger.error(f"❌ 格局服务: {action}失败 - {e}", exc_info=True)
    return {'success': False, 'error': str(e), 'invalid_input': False}


class GejuService:
    """格局服务层"""

    @staticmethod
    def build_chart(year: str, month: str, day: str, hour: Optional[str] = None,
                    is_hour_unknown: bool = False) -> Chart:
        chart = Chart.from_ganzhi(year, month, day, None if is_hour_unknown else hour)
        chart.validate()
        return chart

    @staticmethod
    def detect_interactions(year: str, month: str, day: str, hour: Optional[str] = None,
                            is_hour_unknown: bool = False) -> Dict[str, Any]:
        """检测刑冲合会"""
        try:
            chart = GejuService.build_chart(year, month, day, hour, is_hour_unknown)
            stems, branches = chart.symbols()
            records = detect_interactions(branches, stems, chart.month.branch, get_weights())
            return {
                'success': True,
                'data': {
                    'chart': chart.to_dict(),
                    'interactions': [r.to_dict() for r in records],
                },
            }
        except ChartValidationError as e:
            return _invalid(e)
        except Exception as e:
            return _failed('刑冲合会检测', e)

    @staticmethod
    def compute_force(year: str, month: str, day: str, hour: Optional[str] = None,
                      commanding_stem: Optional[str] = None, is_hour_unknown: bool = False) -> Dict[str, Any]:
        """计算五行力量矩阵"""
        try:
            chart = GejuService.build_chart(year, month, day, hour, is_hour_unknown)
            matrix = compute_force_matrix(chart, commanding_stem, get_weights())
            if matrix.error:
                return {'success': False, 'error': matrix.error, 'invalid_input': False}
            logger.info(f"✅ 格局服务: 五行力量计算成功 - 最旺: {matrix.dominant_element}")
            return {'success': True, 'data': matrix.to_dict()}
        except ChartValidationError as e:
            return _invalid(e)
        except Exception as e:
            return _failed('五行力量计算', e)

    @staticmethod
    def classify_strength(year: str, month: str, day: str, hour: Optional[str] = None,
                          commanding_stem: Optional[str] = None, is_hour_unknown: bool = False) -> Dict[str, Any]:
        """判断日主旺衰"""
        try:
            chart = GejuService.build_chart(year, month, day, hour, is_hour_unknown)
            weights = get_weights()
            matrix = compute_force_matrix(chart, commanding_stem, weights)
            strength = classify_strength(chart, matrix, weights)
            if strength.error:
                return {'success': False, 'error': strength.error, 'invalid_input': False}
            logger.info(f"✅ 格局服务: 旺衰判断成功 - {strength.level_name}, 指数: {strength.index:.2f}")
            return {
                'success': True,
                'data': {
                    'strength': strength.to_dict(),
                    'force_matrix': matrix.to_dict(),
                },
            }
        except ChartValidationError as e:
            return _invalid(e)
        except Exception as e:
            return _failed('旺衰判断', e)

    @staticmethod
    def classify_pattern(year: str, month: str, day: str, hour: Optional[str] = None,
                         is_hour_unknown: bool = False) -> Dict[str, Any]:
        """判断格局（无法判定时仍返回 success=True，kind 为 undeterminable）"""
        try:
            chart = GejuService.build_chart(year, month, day, hour, is_hour_unknown)
            pattern = classify_pattern(chart, is_hour_unknown or not chart.has_hour, get_weights())
            logger.info(f"✅ 格局服务: 格局判断完成 - {getattr(pattern, 'name', pattern.kind)}")
            return {'success': True, 'data': pattern.to_dict()}
        except ChartValidationError as e:
            return _invalid(e)
        except Exception as e:
            return _failed('格局判断', e)

    @staticmethod
    def analyze(year: str, month: str, day: str, hour: Optional[str] = None,
                commanding_stem: Optional[str] = None, is_hour_unknown: bool = False) -> Dict[str, Any]:
        """完整分析"""
        logger.info(f"🔍 格局服务: 开始分析 - {year} {month} {day} {hour or '-'}")
        try:
            chart = GejuService.build_chart(year, month, day, hour, is_hour_unknown)
            result = analyze_chart(chart, commanding_stem, is_hour_unknown or not chart.has_hour, get_weights())
            return {'success': True, 'data': result}
        except ChartValidationError as e:
            return _invalid(e)
        except Exception as e:
            return _failed('命盘分析', e)
