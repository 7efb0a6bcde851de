#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
原局刑冲合会分析器

检测四柱地支的 六冲 / 三合 / 三会 / 六合 / 三刑 / 相刑 / 自刑，
以及相邻天干的五合（合化或合绊），输出带五行增减比例的互动记录。

规则：
- 六冲、三合、三会、刑按地支集合判断，与柱位无关
- 六合、天干五合只看相邻柱（年-月、月-日、日-时）
- 未知符号与时辰未知的占位符 '-' 不参与任何检测
"""

import logging
from collections import Counter
from typing import Dict, List, Optional, Sequence, Tuple

from core.config.geju_config import GejuWeights, get_weights
from core.data.relations import (
    ADJACENT_POSITIONS,
    BRANCH_CHONG,
    BRANCH_LIUHE,
    BRANCH_SANHE_GROUPS,
    BRANCH_SANHUI_GROUPS,
    BRANCH_SELF_XING,
    BRANCH_XING_MUTUAL,
    BRANCH_XING_TRIPLES,
    BranchGroup,
    STEM_HE,
    STEM_HE_NAMES,
)
from core.data.stems_branches import (
    BRANCH_ELEMENTS,
    BRANCH_TERRAIN,
    TERRAIN_NAMES,
    get_dominant_entry,
    is_branch,
    is_stem,
)
from core.models.chart import POSITIONS
from core.models.results import InteractionRecord

logger = logging.getLogger(__name__)


def _add_effect(effects: Dict[str, float], element: str, value: float) -> None:
    effects[element] = effects.get(element, 0.0) + value


class InteractionAnalyzer:
    """原局刑冲合会分析器"""

    def __init__(self, weights: Optional[GejuWeights] = None):
        self.weights = weights or get_weights()

    def detect(
        self,
        branches: Sequence[str],
        stems: Sequence[str],
        month_branch: str,
    ) -> List[InteractionRecord]:
        """
        检测刑冲合会

        Args:
            branches: 年/月/日/时 地支（时辰未知用 '-'）
            stems: 年/月/日/时 天干
            month_branch: 月令地支（决定天干五合能否合化）

        Returns:
            互动记录列表；出错时返回空列表，不向外抛异常
        """
        try:
            return self._detect(branches, stems, month_branch)
        except Exception as e:
            logger.error(f"❌ 刑冲合会检测失败: {e}", exc_info=True)
            return []

    def _detect(
        self,
        branches: Sequence[str],
        stems: Sequence[str],
        month_branch: str,
    ) -> List[InteractionRecord]:
        branch_slots = self._known_slots(branches, is_branch)
        stem_slots = self._known_slots(stems, is_stem)

        records: List[InteractionRecord] = []
        records.extend(self._detect_clashes(branch_slots))
        records.extend(self._detect_groups(branch_slots, BRANCH_SANHUI_GROUPS, 'directional', '三会'))
        records.extend(self._detect_groups(branch_slots, BRANCH_SANHE_GROUPS, 'trine', '三合'))
        records.extend(self._detect_paired(branch_slots))
        records.extend(self._detect_stem_combinations(stem_slots, month_branch))
        records.extend(self._detect_punishments(branch_slots))

        logger.debug(f"✅ 刑冲合会检测完成: {len(records)} 条")
        return records

    @staticmethod
    def _known_slots(symbols: Sequence[str], is_known) -> List[Tuple[str, str]]:
        """(柱位, 符号) 列表，跳过未知符号"""
        slots = []
        for position, symbol in zip(POSITIONS, symbols or ()):
            if isinstance(symbol, str) and is_known(symbol):
                slots.append((position, symbol))
            elif symbol:
                logger.debug(f"⚠️ 跳过未知符号: {position}={symbol!r}")
        return slots

    @staticmethod
    def _positions_of(slots: List[Tuple[str, str]], members) -> Tuple[str, ...]:
        return tuple(position for position, symbol in slots if symbol in members)

    def _detect_clashes(self, slots: List[Tuple[str, str]]) -> List[InteractionRecord]:
        present = {symbol for _, symbol in slots}
        records = []
        for pair in BRANCH_CHONG:
            if not pair <= present:
                continue
            first, second = sorted(pair, key=lambda b: self._slot_order(slots, b))
            terrain = BRANCH_TERRAIN[first]
            loss = 1.0 - self.weights.clash_retain[terrain]

            # 每支各损耗一次，同五行相冲（库地冲皆为土）损耗叠加
            clashing = (BRANCH_ELEMENTS[first], BRANCH_ELEMENTS[second])
            effects: Dict[str, float] = {}
            for element in clashing:
                _add_effect(effects, element, -loss)

            opens_vault = terrain == 'vault'
            if opens_vault:
                # 开库：两支基础分之和 × 比例，回补给相冲的两个五行；
                # 库地冲两支同五行，折算为该五行基础分的系数
                for element in clashing:
                    _add_effect(effects, element, self.weights.open_vault_fraction * len(clashing))

            description = f"{first}{second}相冲（{TERRAIN_NAMES[terrain]}）"
            if opens_vault:
                description += "，冲开库藏"
            records.append(InteractionRecord(
                kind='clash',
                subtype=terrain,
                members=(first, second),
                positions=self._positions_of(slots, pair),
                tier=terrain,
                description=description,
                opens_vault=opens_vault,
                score_effects=effects,
            ))
        return records

    @staticmethod
    def _slot_order(slots: List[Tuple[str, str]], symbol: str) -> int:
        for i, (_, s) in enumerate(slots):
            if s == symbol:
                return i
        return len(slots)

    def _detect_groups(
        self,
        slots: List[Tuple[str, str]],
        groups: Tuple[BranchGroup, ...],
        subtype: str,
        label: str,
    ) -> List[InteractionRecord]:
        present = {symbol for _, symbol in slots}
        records = []
        for group in groups:
            members = tuple(b for b in group.members if b in present)
            if len(members) < 2:
                continue

            if len(members) == 3:
                tier = 'full'
                ratio = self.weights.full_combination_ratio
                description = f"{group.name}{label}{group.element}局"
            elif group.peak in members:
                tier = 'partial_with_peak'
                ratio = self.weights.partial_with_peak_ratio
                description = f"{''.join(members)}半{label}{group.element}局（含旺支{group.peak}）"
            else:
                tier = 'partial_without_peak'
                ratio = self.weights.partial_without_peak_ratio
                description = f"{''.join(members)}半{label}{group.element}局（缺旺支{group.peak}）"

            records.append(InteractionRecord(
                kind='combination',
                subtype=subtype,
                members=members,
                positions=self._positions_of(slots, members),
                result_element=group.element,
                tier=tier,
                description=description,
                score_effects={group.element: ratio - 1.0},
            ))
        return records

    def _detect_paired(self, slots: List[Tuple[str, str]]) -> List[InteractionRecord]:
        by_position = dict(slots)
        records = []
        for left, right in ADJACENT_POSITIONS:
            a, b = by_position.get(left), by_position.get(right)
            if a is None or b is None:
                continue
            element = BRANCH_LIUHE.get(frozenset({a, b}))
            if element is None:
                continue
            records.append(InteractionRecord(
                kind='combination',
                subtype='paired',
                members=(a, b),
                positions=(left, right),
                result_element=element,
                tier='full',
                description=f"{a}{b}六合{element}",
                score_effects={element: self.weights.paired_combination_fraction},
            ))
        return records

    def _detect_stem_combinations(
        self,
        slots: List[Tuple[str, str]],
        month_branch: str,
    ) -> List[InteractionRecord]:
        by_position = dict(slots)
        month_entry = get_dominant_entry(month_branch) if isinstance(month_branch, str) else None
        month_element = month_entry.element if month_entry else None

        records = []
        for left, right in ADJACENT_POSITIONS:
            a, b = by_position.get(left), by_position.get(right)
            if a is None or b is None:
                continue
            pair = frozenset({a, b})
            element = STEM_HE.get(pair)
            if element is None:
                continue

            name = STEM_HE_NAMES[pair]
            if element == month_element:
                tier = 'transformed'
                effects = {element: self.weights.stem_transform_fraction}
                description = f"{name}合化{element}（月令{month_branch}本气为{element}）"
            else:
                tier = 'tied'
                effects = {}
                description = f"{name}合而不化，两干合绊"
            records.append(InteractionRecord(
                kind='combination',
                subtype='stem',
                members=(a, b),
                positions=(left, right),
                result_element=element,
                tier=tier,
                description=description,
                score_effects=effects,
            ))
        return records

    def _detect_punishments(self, slots: List[Tuple[str, str]]) -> List[InteractionRecord]:
        present = {symbol for _, symbol in slots}
        counts = Counter(symbol for _, symbol in slots)
        records = []

        for members, name in BRANCH_XING_TRIPLES:
            if members <= present:
                ordered = tuple(b for _, b in slots if b in members)
                ordered = tuple(dict.fromkeys(ordered))
                records.append(InteractionRecord(
                    kind='punishment',
                    subtype='triple',
                    members=ordered,
                    positions=self._positions_of(slots, members),
                    tier='full',
                    description=f"{''.join(ordered)}三刑（{name}）",
                ))

        mutual, mutual_name = BRANCH_XING_MUTUAL
        if mutual <= present:
            ordered = tuple(dict.fromkeys(b for _, b in slots if b in mutual))
            records.append(InteractionRecord(
                kind='punishment',
                subtype='mutual',
                members=ordered,
                positions=self._positions_of(slots, mutual),
                tier='full',
                description=f"{''.join(ordered)}相刑（{mutual_name}）",
            ))

        for branch in sorted(BRANCH_SELF_XING, key=lambda b: self._slot_order(slots, b)):
            if counts[branch] >= 2:
                records.append(InteractionRecord(
                    kind='punishment',
                    subtype='self',
                    members=(branch,) * counts[branch],
                    positions=self._positions_of(slots, {branch}),
                    tier='full',
                    description=f"{branch * counts[branch]}自刑",
                ))
        return records
