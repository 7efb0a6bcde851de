#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
格局分析器

按优先级依次判断，命中即返回：
1. 专旺格（曲直/炎上/稼穑/从革/润下）
2. 化气格（日干与相邻天干合化，月令本气为化神）
3. 从格（从儿/从财/从杀）
4. 正格：取月令本气定格，库地本气未透干时待透干，不强行定格

格局只看原局干支（不用五行力量矩阵）。
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from core.analyzers.interaction_analyzer import InteractionAnalyzer
from core.calculators.bazi_core import (
    CATEGORY_NAMES,
    LU_BRANCH,
    YANGREN_BRANCH,
    dominated_by,
    generated_by,
    get_ten_god,
    get_ten_god_category,
)
from core.config.geju_config import GejuWeights, get_weights
from core.data.relations import STEM_HE_NAMES
from core.data.stems_branches import (
    BRANCH_TERRAIN,
    STEM_ELEMENTS,
    HiddenStemEntry,
    get_dominant_entry,
    get_hidden_stems,
)
from core.models.chart import Chart, ChartValidationError
from core.models.results import (
    INTERACTION_SUBTYPE_NAMES,
    InteractionRecord,
    NormalPattern,
    PatternResult,
    SpecialPattern,
    Undeterminable,
)

logger = logging.getLogger(__name__)

# 专旺格名称（按日主五行）
DOMINANCE_PATTERN_NAMES = {
    '木': '曲直格',
    '火': '炎上格',
    '土': '稼穑格',
    '金': '从革格',
    '水': '润下格',
}

# 从格名称（按占优十神大类）
FOLLOWING_PATTERN_NAMES = {
    'output': '从儿格',
    'wealth': '从财格',
    'authority': '从杀格',
}

# 从格通根强度：本气按司令天数全计，中气减半，余气三成
ROOT_RANK_FACTORS = {
    'dominant': 1.0,
    'transitional': 0.5,
    'residual': 0.3,
}

CONFIDENCE_DOMINANCE = 90
CONFIDENCE_TRANSFORMATION = 85
CONFIDENCE_FOLLOWING_ROOTLESS = 90
CONFIDENCE_FOLLOWING_WEAK_ROOT = 70
CONFIDENCE_NORMAL_REVEALED = 80
CONFIDENCE_NORMAL_UNREVEALED = 60

STATUS_INTACT = '成格'
STATUS_FLAWED = '破格'


@dataclass
class _PatternContext:
    """单次格局判断的工作数据"""
    chart: Chart
    day_master: str
    day_element: str
    month_dominant: Optional[HiddenStemEntry]
    interactions: List[InteractionRecord] = field(default_factory=list)

    @property
    def visible_stems(self) -> List[Tuple[str, str]]:
        return [(p.position, p.stem) for p in self.chart.pillars()]

    def revealed_positions(self, stem: str) -> List[str]:
        return [position for position, s in self.visible_stems if s == stem]


class GejuAnalyzer:
    """格局分析器"""

    def __init__(self, weights: Optional[GejuWeights] = None):
        self.weights = weights or get_weights()
        self.interaction_analyzer = InteractionAnalyzer(self.weights)
        # 特殊格局按优先级排列
        self.special_rules: Tuple[Callable[[_PatternContext], Optional[SpecialPattern]], ...] = (
            self._match_dominance,
            self._match_transformation,
            self._match_following,
        )

    def analyze(self, chart: Chart, is_hour_unknown: bool = False) -> PatternResult:
        """
        判断格局

        Args:
            chart: 四柱命盘
            is_hour_unknown: 时辰未知，为 True 时时柱不参与任何判断

        Returns:
            Undeterminable / SpecialPattern / NormalPattern 三者之一，不向外抛异常
        """
        try:
            return self._analyze(chart, is_hour_unknown)
        except ChartValidationError as e:
            logger.warning(f"⚠️ 命盘数据无效，无法判断格局: {e}")
            return Undeterminable(reasons=(f"命盘数据无效: {e}",))
        except Exception as e:
            logger.error(f"❌ 格局分析失败: {e}", exc_info=True)
            return Undeterminable(reasons=(str(e),))

    def _analyze(self, chart: Chart, is_hour_unknown: bool) -> PatternResult:
        if not isinstance(chart, Chart):
            raise ChartValidationError("缺少命盘数据")
        chart.validate()
        if is_hour_unknown:
            chart = chart.without_hour()

        stems, branches = chart.symbols()
        ctx = _PatternContext(
            chart=chart,
            day_master=chart.day_master,
            day_element=chart.day_master_element,
            month_dominant=get_dominant_entry(chart.month.branch),
            interactions=self.interaction_analyzer.detect(branches, stems, chart.month.branch),
        )
        logger.debug(f"🔍 开始判断格局: {' '.join(p.ganzhi for p in chart.pillars())}")

        for rule in self.special_rules:
            result = rule(ctx)
            if result is not None:
                logger.debug(f"✅ 命中特殊格局: {result.name}")
                return result

        result = self._match_normal(ctx)
        logger.debug(f"✅ 格局判断完成: {getattr(result, 'name', result.kind)}")
        return result

    # ==================== 特殊格局 ====================

    def _is_present_and_strong(self, ctx: _PatternContext, element: str) -> bool:
        """五行透于天干，或为某地支本气且司令天数达到强势线"""
        if any(STEM_ELEMENTS.get(stem) == element for _, stem in ctx.visible_stems):
            return True
        for pillar in ctx.chart.pillars():
            entry = get_dominant_entry(pillar.branch)
            if entry and entry.element == element and entry.command_days >= self.weights.strong_command_days:
                return True
        return False

    @staticmethod
    def _is_hidden_anywhere(ctx: _PatternContext, element: str) -> bool:
        return any(
            e.element == element
            for pillar in ctx.chart.pillars()
            for e in get_hidden_stems(pillar.branch)
        )

    def _match_dominance(self, ctx: _PatternContext) -> Optional[SpecialPattern]:
        """专旺格：月令本气同日主五行，地支成全三合/三会日主局，且克我者无力"""
        if ctx.month_dominant is None or ctx.month_dominant.element != ctx.day_element:
            return None

        combination = next(
            (r for r in ctx.interactions
             if r.subtype in ('trine', 'directional')
             and r.tier == 'full'
             and r.result_element == ctx.day_element),
            None,
        )
        if combination is None:
            return None

        controller = dominated_by(ctx.day_element)
        if self._is_present_and_strong(ctx, controller):
            logger.debug(f"⚠️ 专旺格不成: 克我五行{controller}有力")
            return None

        flawed = self._is_hidden_anywhere(ctx, controller)
        return SpecialPattern(
            name=DOMINANCE_PATTERN_NAMES[ctx.day_element],
            category='dominance',
            basis={
                'rule': 'dominance',
                'rule_name': '专旺格',
                'combination': combination.subtype,
                'combination_name': INTERACTION_SUBTYPE_NAMES[combination.subtype],
                'members': list(combination.members),
                'result_element': combination.result_element,
                'month_dominant': ctx.month_dominant.stem,
                'revealed_positions': ctx.revealed_positions(ctx.month_dominant.stem),
                'controller_element': controller,
                'controller_hidden': flawed,
            },
            confidence=CONFIDENCE_DOMINANCE,
            status=STATUS_FLAWED if flawed else STATUS_INTACT,
        )

    def _match_transformation(self, ctx: _PatternContext) -> Optional[SpecialPattern]:
        """化气格：日干与相邻天干合化成立"""
        for record in ctx.interactions:
            if record.subtype != 'stem' or record.tier != 'transformed' or 'day' not in record.positions:
                continue

            day_index = record.positions.index('day')
            partner_position = record.positions[1 - day_index]
            partner = record.members[1 - day_index]
            pair_name = STEM_HE_NAMES[frozenset(record.members)]
            return SpecialPattern(
                name=f"{pair_name}化{record.result_element}格",
                category='transformation',
                basis={
                    'rule': 'transformation',
                    'rule_name': '化气格',
                    'partner': partner,
                    'partner_position': partner_position,
                    'combined': list(record.members),
                    'transformed_element': record.result_element,
                    'month_branch': ctx.chart.month.branch,
                    'month_dominant': ctx.month_dominant.stem if ctx.month_dominant else None,
                },
                confidence=CONFIDENCE_TRANSFORMATION,
            )
        return None

    def _root_strength(self, ctx: _PatternContext) -> float:
        """日主五行在各地支藏干中的根气强度"""
        strength = 0.0
        for pillar in ctx.chart.pillars():
            for entry in get_hidden_stems(pillar.branch):
                if entry.element == ctx.day_element:
                    strength += entry.command_days * ROOT_RANK_FACTORS[entry.rank]
        return strength

    def _category_scores(self, ctx: _PatternContext) -> Dict[str, float]:
        scores = {'output': 0.0, 'wealth': 0.0, 'authority': 0.0}
        for position, stem in ctx.visible_stems:
            if position == 'day':
                continue
            category = get_ten_god_category(get_ten_god(ctx.day_master, stem) or '')
            if category in scores:
                scores[category] += self.weights.follow_stem_score
        for pillar in ctx.chart.pillars():
            entry = get_dominant_entry(pillar.branch)
            if entry is None:
                continue
            category = get_ten_god_category(get_ten_god(ctx.day_master, entry.stem) or '')
            if category in scores:
                scores[category] += entry.command_days
        return scores

    def _match_following(self, ctx: _PatternContext) -> Optional[SpecialPattern]:
        """从格：日主无根（或根极弱）、印星无力，食伤/财/官杀中一类独旺"""
        root = self._root_strength(ctx)
        if root >= self.weights.follow_root_limit:
            return None

        resource = generated_by(ctx.day_element)
        if self._is_present_and_strong(ctx, resource):
            logger.debug(f"⚠️ 从格不成: 印星{resource}有力")
            return None

        scores = self._category_scores(ctx)
        ranked = sorted(scores.items(), key=lambda kv: -kv[1])
        (top, top_score), (_, second_score) = ranked[0], ranked[1]
        if top_score <= 0 or top_score < second_score * self.weights.follow_dominance_ratio:
            logger.debug(f"⚠️ 从格不成: 无独旺十神 {scores}")
            return None

        return SpecialPattern(
            name=FOLLOWING_PATTERN_NAMES[top],
            category='following',
            basis={
                'rule': 'following',
                'rule_name': '从格',
                'dominant_category': top,
                'dominant_category_name': CATEGORY_NAMES[top],
                'category_scores': scores,
                'root_strength': round(root, 2),
                'resource_element': resource,
            },
            confidence=CONFIDENCE_FOLLOWING_ROOTLESS if root == 0 else CONFIDENCE_FOLLOWING_WEAK_ROOT,
        )

    # ==================== 正格 ====================

    def _match_normal(self, ctx: _PatternContext) -> PatternResult:
        """正格：取月令本气（透干优先），库地本气不透则待透干"""
        month_branch = ctx.chart.month.branch
        entry = ctx.month_dominant
        if entry is None:
            return Undeterminable(reasons=(f"月令{month_branch}缺少藏干数据",))

        revealed_positions = ctx.revealed_positions(entry.stem)
        terrain = BRANCH_TERRAIN[month_branch]
        if not revealed_positions and terrain == 'vault':
            return Undeterminable(reasons=(f"月令{month_branch}为库地，本气{entry.stem}未透干，待透干",))

        ten_god = get_ten_god(ctx.day_master, entry.stem)
        if ten_god is None:
            return Undeterminable(reasons=(f"无法确定{entry.stem}与日主{ctx.day_master}的十神关系",))

        name, rule_name = self._normal_pattern_name(ctx, ten_god)
        month_clashes = [
            r.description for r in ctx.interactions
            if r.kind == 'clash' and 'month' in r.positions
        ]
        combined = [
            r.description for r in ctx.interactions
            if r.kind == 'combination' and 'month' in r.positions
        ]
        return NormalPattern(
            name=name,
            basis={
                'rule': 'normal',
                'rule_name': rule_name,
                'month_branch': month_branch,
                'month_terrain': terrain,
                'month_dominant': entry.stem,
                'revealed': bool(revealed_positions),
                'revealed_positions': revealed_positions,
                'combined': combined,
                'clashed': month_clashes,
            },
            forming_stem=entry.stem,
            ten_god=ten_god,
            confidence=CONFIDENCE_NORMAL_REVEALED if revealed_positions else CONFIDENCE_NORMAL_UNREVEALED,
            status=STATUS_FLAWED if month_clashes else STATUS_INTACT,
        )

    @staticmethod
    def _normal_pattern_name(ctx: _PatternContext, ten_god: str) -> Tuple[str, str]:
        month_branch = ctx.chart.month.branch
        polarity = ctx.chart.day_master_polarity
        if ten_god == '比肩' and LU_BRANCH.get(ctx.day_master) == month_branch:
            return '建禄格', 'career_seat'
        # 羊刃只论阳干，刃支皆为旺地
        if ten_god == '劫财' and YANGREN_BRANCH.get(ctx.day_master) == month_branch:
            return '羊刃格', 'blade_seat'
        if ten_god == '劫财' and polarity == '阴':
            return '月劫格', 'monthly_peer'
        return f"{ten_god}格", 'month_command'
