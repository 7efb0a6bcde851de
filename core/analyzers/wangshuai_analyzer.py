#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
日主旺衰分析器

输入命盘与五行力量矩阵，计算：
- 得令：月令藏干中帮身五行（同我、生我）的司令天数占比是否达到一半
- 得地：日支五行帮身，或日干坐日支处于 长生/冠带/临官/帝旺
- 帮身分与耗身分（我生、我克、克我）之差
- 通根系数：各地支藏干含日主五行时取柱位系数的最大值（月 > 日 > 时/年）

旺衰指数 = 帮身分 × 通根系数 − 耗身分 + 得令加分 + 得地加分，
再按阈值划分为 极旺 / 身旺 / 中和 / 身弱 / 极弱。
"""

import logging
from typing import List, Optional, Tuple

from core.calculators.bazi_core import (
    ally_elements,
    get_life_stage,
    opposing_elements,
    STRONG_STAGES,
)
from core.config.geju_config import GejuWeights, get_weights
from core.data.stems_branches import BRANCH_ELEMENTS, MONTH_DAYS, get_hidden_stems
from core.models.chart import POSITION_NAMES, Chart, ChartValidationError
from core.models.results import STRENGTH_LEVEL_NAMES, ForceMatrix, StrengthResult

logger = logging.getLogger(__name__)


class WangShuaiAnalyzer:
    """日主旺衰分析器"""

    def __init__(self, weights: Optional[GejuWeights] = None):
        self.weights = weights or get_weights()

    def analyze(self, chart: Chart, force_matrix: Optional[ForceMatrix]) -> StrengthResult:
        """
        分析日主旺衰

        Args:
            chart: 四柱命盘
            force_matrix: 同一命盘的五行力量矩阵

        Returns:
            StrengthResult；输入有误或计算出错时 level 为 None 并带 error
        """
        try:
            return self._analyze(chart, force_matrix)
        except ChartValidationError as e:
            logger.warning(f"⚠️ 命盘数据无效，无法分析旺衰: {e}")
            return StrengthResult(level=None, error=f"命盘数据无效: {e}")
        except Exception as e:
            logger.error(f"❌ 旺衰分析失败: {e}", exc_info=True)
            return StrengthResult(level=None, error=str(e))

    def _analyze(self, chart: Chart, force_matrix: Optional[ForceMatrix]) -> StrengthResult:
        chart.validate()
        if force_matrix is None:
            return StrengthResult(level=None, error="缺少五行力量矩阵")
        if force_matrix.error:
            return StrengthResult(level=None, error=f"五行力量矩阵无效: {force_matrix.error}")
        if force_matrix.day_master != chart.day_master:
            return StrengthResult(
                level=None,
                error=f"五行力量矩阵日主({force_matrix.day_master})与命盘日主({chart.day_master})不一致",
            )

        day_element = chart.day_master_element
        logger.debug(f"🔍 开始分析旺衰: 日主={chart.day_master}({day_element})")

        # 1. 得令
        seasonal_ratio = self._seasonal_ratio(chart.month.branch, day_element)
        seasonal_support = seasonal_ratio >= self.weights.seasonal_ratio
        logger.debug(f"📊 步骤1: 得令 比例={seasonal_ratio:.2f}, 得令={seasonal_support}")

        # 2. 得地
        seat_reasons = self._seat_reasons(chart, day_element)
        seat_support = bool(seat_reasons)
        logger.debug(f"📊 步骤2: 得地={seat_support} {seat_reasons}")

        # 3. 帮身 / 耗身
        support = sum(force_matrix.scores.get(e, 0.0) for e in ally_elements(day_element))
        opposition = sum(force_matrix.scores.get(e, 0.0) for e in opposing_elements(day_element))
        net_ally_score = support - opposition
        logger.debug(f"📊 步骤3: 帮身={support:.3f}, 耗身={opposition:.3f}")

        # 4. 通根
        rootedness, rooted_positions = self._rootedness(chart, day_element)
        logger.debug(f"📊 步骤4: 通根系数={rootedness}, 通根柱={rooted_positions}")

        # 5. 指数与等级
        index = support * rootedness - opposition
        if seasonal_support:
            index += self.weights.seasonal_bonus
        if seat_support:
            index += self.weights.seat_bonus
        level = self.determine_level(index)
        logger.debug(f"📊 步骤5: 旺衰指数={index:.3f}, 判定={STRENGTH_LEVEL_NAMES[level]}")

        return StrengthResult(
            level=level,
            index=index,
            seasonal_support=seasonal_support,
            seat_support=seat_support,
            net_ally_score=net_ally_score,
            rootedness=rootedness,
            support_score=support,
            opposition_score=opposition,
            seasonal_ratio=seasonal_ratio,
            seat_reasons=tuple(seat_reasons),
            rooted_positions=tuple(rooted_positions),
            description=self._describe(
                chart, level, index, seasonal_support, seat_reasons, rooted_positions,
            ),
        )

    @staticmethod
    def _seasonal_ratio(month_branch: str, day_element: str) -> float:
        allies = ally_elements(day_element)
        days = sum(e.command_days for e in get_hidden_stems(month_branch) if e.element in allies)
        return days / MONTH_DAYS

    @staticmethod
    def _seat_reasons(chart: Chart, day_element: str) -> List[str]:
        reasons = []
        day_branch = chart.day.branch
        if BRANCH_ELEMENTS.get(day_branch) in ally_elements(day_element):
            reasons.append(f"日支{day_branch}五行{BRANCH_ELEMENTS[day_branch]}帮身")
        stage = get_life_stage(chart.day_master, day_branch)
        if stage in STRONG_STAGES:
            reasons.append(f"日主坐{day_branch}为{stage}")
        return reasons

    def _rootedness(self, chart: Chart, day_element: str) -> Tuple[float, List[str]]:
        coefficients = self.weights.rootedness
        best = coefficients['none']
        rooted = []
        for pillar in chart.pillars():
            entries = get_hidden_stems(pillar.branch)
            if any(e.element == day_element or e.stem == chart.day_master for e in entries):
                rooted.append(pillar.position)
                best = max(best, coefficients[pillar.position])
        return best, rooted

    def determine_level(self, index: float) -> str:
        """
        按阈值判定旺衰等级

        - 指数 >= 极旺下限          → extreme_strong
        - 身旺下限 < 指数 < 极旺下限 → strong
        - 中和下限 <= 指数 <= 身旺下限 → neutral
        - 身弱下限 < 指数 < 中和下限 → weak
        - 其余                      → extreme_weak
        """
        thresholds = self.weights.strength_thresholds
        if index >= thresholds['extreme_strong']:
            return 'extreme_strong'
        elif index > thresholds['strong']:
            return 'strong'
        elif index >= thresholds['neutral']:
            return 'neutral'
        elif index > thresholds['weak']:
            return 'weak'
        return 'extreme_weak'

    @staticmethod
    def _describe(
        chart: Chart,
        level: str,
        index: float,
        seasonal_support: bool,
        seat_reasons: List[str],
        rooted_positions: List[str],
    ) -> str:
        lines = [f"日主{chart.day_master}（{chart.day_master_element}）{STRENGTH_LEVEL_NAMES[level]}，旺衰指数 {index:.2f}"]
        lines.append(f"月令{chart.month.branch}：{'得令' if seasonal_support else '失令'}")
        lines.append(f"坐下{chart.day.branch}：{'；'.join(seat_reasons) if seat_reasons else '不得地'}")
        if rooted_positions:
            lines.append("通根：" + '、'.join(POSITION_NAMES[p] for p in rooted_positions))
        else:
            lines.append("通根：无根")
        return '\n'.join(lines)
