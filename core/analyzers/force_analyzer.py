#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
五行力量矩阵分析器

功能：
- 天干按柱位权重计分（日干为日主本身，不计入）
- 地支按藏干司令天数拆分计分，月令司令本气可额外加成
- 叠加刑冲合会对五行的增减，最终分数不小于 0
- 输出五行分数、百分比、逐项贡献与最旺/最弱五行
"""

import logging
from typing import Any, Dict, List, Optional, Set

from core.analyzers.interaction_analyzer import InteractionAnalyzer
from core.config.geju_config import GejuWeights, get_weights
from core.data.stems_branches import (
    FIVE_ELEMENTS,
    MONTH_DAYS,
    STEM_ELEMENTS,
    get_hidden_stems,
    is_stem,
)
from core.models.chart import Chart, ChartValidationError
from core.models.results import ForceMatrix, InteractionRecord

logger = logging.getLogger(__name__)


class ForceAnalyzer:
    """五行力量矩阵分析器"""

    def __init__(self, weights: Optional[GejuWeights] = None):
        self.weights = weights or get_weights()
        self.interaction_analyzer = InteractionAnalyzer(self.weights)

    def compute(self, chart: Chart, commanding_override: Optional[str] = None) -> ForceMatrix:
        """
        计算五行力量矩阵

        Args:
            chart: 四柱命盘
            commanding_override: 当日司令藏干（由排盘方按节气天数给出），
                仅当其等于月令本气时才给予司令加成；不传则不加成

        Returns:
            ForceMatrix；出错时返回全零矩阵并带 error，不向外抛异常
        """
        try:
            return self._compute(chart, commanding_override)
        except ChartValidationError as e:
            logger.warning(f"⚠️ 命盘数据无效，无法计算五行力量: {e}")
            return self.error_matrix(chart, f"命盘数据无效: {e}")
        except Exception as e:
            logger.error(f"❌ 五行力量计算失败: {e}", exc_info=True)
            return self.error_matrix(chart, str(e))

    @staticmethod
    def error_matrix(chart: Any, message: str) -> ForceMatrix:
        day = getattr(chart, 'day', None)
        day_master = getattr(day, 'stem', '') if day is not None else ''
        day_master = day_master if isinstance(day_master, str) else ''
        return ForceMatrix(
            day_master=day_master,
            day_master_element=STEM_ELEMENTS.get(day_master, ''),
            day_master_polarity='',
            error=message,
        )

    def _compute(self, chart: Chart, commanding_override: Optional[str]) -> ForceMatrix:
        chart.validate()
        logger.debug(f"🔍 开始计算五行力量: 日主={chart.day_master}")

        if commanding_override is not None and not is_stem(commanding_override):
            logger.warning(f"⚠️ 司令藏干无效，忽略: {commanding_override!r}")
            commanding_override = None

        stems, branches = chart.symbols()
        interactions = self.interaction_analyzer.detect(branches, stems, chart.month.branch)
        neutralized = self._neutralized_positions(interactions)

        contributions, commanding_applied = self._collect_contributions(chart, commanding_override, neutralized)

        base_scores = {element: 0.0 for element in FIVE_ELEMENTS}
        for item in contributions:
            base_scores[item['element']] += item['score']

        adjustments = {element: 0.0 for element in FIVE_ELEMENTS}
        for record in interactions:
            for element, coefficient in record.score_effects.items():
                adjustments[element] += base_scores[element] * coefficient

        scores = {element: max(0.0, base_scores[element] + adjustments[element]) for element in FIVE_ELEMENTS}
        total = sum(scores.values())
        percentages = {
            element: (round(scores[element] / total * 100, 1) if total > 0 else 0.0)
            for element in FIVE_ELEMENTS
        }

        dominant = max(FIVE_ELEMENTS, key=lambda e: scores[e])
        weakest = min(FIVE_ELEMENTS, key=lambda e: scores[e])
        spread = percentages[dominant] - percentages[weakest]

        matrix = ForceMatrix(
            day_master=chart.day_master,
            day_master_element=chart.day_master_element,
            day_master_polarity=chart.day_master_polarity,
            base_scores=base_scores,
            adjustments=adjustments,
            scores=scores,
            percentages=percentages,
            contributions=tuple(contributions),
            interactions=tuple(interactions),
            commanding_stem=commanding_override if commanding_applied else None,
            dominant_element=dominant if total > 0 else None,
            weakest_element=weakest if total > 0 else None,
            balanced=total > 0 and spread <= self.weights.balance_spread,
        )
        logger.debug(f"📊 五行力量: {matrix.percentages}")
        return matrix

    @staticmethod
    def _neutralized_positions(interactions: List[InteractionRecord]) -> Set[str]:
        """合而不化的天干所在柱位"""
        positions: Set[str] = set()
        for record in interactions:
            if record.subtype == 'stem' and record.tier == 'tied':
                positions.update(record.positions)
        return positions

    def _collect_contributions(
        self,
        chart: Chart,
        commanding_override: Optional[str],
        neutralized: Set[str],
    ):
        weights = self.weights
        contributions: List[Dict[str, Any]] = []
        commanding_applied = False

        for pillar in chart.pillars():
            position = pillar.position

            if position != 'day':
                stem_weight = weights.stem_weights[position]
                tied = position in neutralized
                contributions.append({
                    'symbol': pillar.stem,
                    'element': STEM_ELEMENTS[pillar.stem],
                    'position': position,
                    'source': 'stem',
                    'weight': stem_weight,
                    'score': 0.0 if tied else weights.base_unit * stem_weight,
                    'neutralized': tied,
                })

            branch_weight = weights.branch_weights[position]
            for entry in get_hidden_stems(pillar.branch):
                score = entry.command_days / MONTH_DAYS * branch_weight * weights.base_unit
                commanding = (
                    position == 'month'
                    and entry.rank == 'dominant'
                    and commanding_override == entry.stem
                )
                if commanding:
                    score *= weights.commanding_bonus
                    commanding_applied = True
                contributions.append({
                    'symbol': entry.stem,
                    'element': entry.element,
                    'position': position,
                    'source': 'hidden',
                    'branch': pillar.branch,
                    'rank': entry.rank,
                    'command_days': entry.command_days,
                    'weight': branch_weight,
                    'score': score,
                    'commanding': commanding,
                })

        return contributions, commanding_applied
