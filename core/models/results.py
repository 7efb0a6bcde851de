#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
分析结果模型

InteractionRecord / ForceMatrix / StrengthResult / PatternResult 均为每次调用
新建的只读结果，to_dict() 输出可直接 JSON 序列化的数据。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from core.data.stems_branches import FIVE_ELEMENTS

# 刑冲合的中文名
INTERACTION_KIND_NAMES = {
    'clash': '冲',
    'combination': '合',
    'punishment': '刑',
}

INTERACTION_SUBTYPE_NAMES = {
    'peak': '旺地冲',
    'growth': '生地冲',
    'vault': '库地冲',
    'paired': '六合',
    'trine': '三合',
    'directional': '三会',
    'stem': '天干五合',
    'triple': '三刑',
    'mutual': '相刑',
    'self': '自刑',
}

TIER_NAMES = {
    'full': '全合',
    'partial_with_peak': '半合（含旺支）',
    'partial_without_peak': '半合（无旺支）',
    'transformed': '合化',
    'tied': '合绊',
}


def _round(value: float) -> float:
    return round(value, 4)


@dataclass(frozen=True, eq=False)
class InteractionRecord:
    """
    刑冲合会记录

    score_effects: 五行 -> 相对该五行基础分的增减比例，
    如全三合火局 {'火': 0.5}，子午冲 {'水': -0.4, '火': -0.4}。

    相等与哈希只看 identity（类型、成员集合、合化五行、层级），
    与地支排列顺序和柱位无关，可直接放入 set 比较。
    """
    kind: str
    subtype: str
    members: Tuple[str, ...]
    positions: Tuple[str, ...] = ()
    result_element: Optional[str] = None
    tier: Optional[str] = None
    description: str = ''
    opens_vault: bool = False
    score_effects: Mapping[str, float] = field(default_factory=dict)

    @property
    def identity(self) -> Tuple:
        """与输入顺序无关的记录标识"""
        return (self.kind, self.subtype, tuple(sorted(self.members)), self.result_element, self.tier)

    def __eq__(self, other):
        if not isinstance(other, InteractionRecord):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self):
        return hash(self.identity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'kind_name': INTERACTION_KIND_NAMES.get(self.kind, self.kind),
            'subtype': self.subtype,
            'subtype_name': INTERACTION_SUBTYPE_NAMES.get(self.subtype, self.subtype),
            'members': list(self.members),
            'positions': list(self.positions),
            'result_element': self.result_element,
            'tier': self.tier,
            'tier_name': TIER_NAMES.get(self.tier) if self.tier else None,
            'description': self.description,
            'opens_vault': self.opens_vault,
            'score_effects': {k: _round(v) for k, v in self.score_effects.items()},
        }


def _empty_scores() -> Dict[str, float]:
    return {element: 0.0 for element in FIVE_ELEMENTS}


@dataclass(frozen=True)
class ForceMatrix:
    """五行力量矩阵"""
    day_master: str
    day_master_element: str
    day_master_polarity: str
    base_scores: Mapping[str, float] = field(default_factory=_empty_scores, hash=False)
    adjustments: Mapping[str, float] = field(default_factory=_empty_scores, hash=False)
    scores: Mapping[str, float] = field(default_factory=_empty_scores, hash=False)
    percentages: Mapping[str, float] = field(default_factory=_empty_scores, hash=False)
    contributions: Tuple[Dict[str, Any], ...] = field(default=(), hash=False)
    interactions: Tuple[InteractionRecord, ...] = ()
    commanding_stem: Optional[str] = None
    dominant_element: Optional[str] = None
    weakest_element: Optional[str] = None
    balanced: bool = False
    error: Optional[str] = None

    @property
    def total(self) -> float:
        return sum(self.scores.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            'day_master': self.day_master,
            'day_master_element': self.day_master_element,
            'day_master_polarity': self.day_master_polarity,
            'base_scores': {k: _round(v) for k, v in self.base_scores.items()},
            'adjustments': {k: _round(v) for k, v in self.adjustments.items()},
            'scores': {k: _round(v) for k, v in self.scores.items()},
            'percentages': dict(self.percentages),
            'contributions': [dict(c) for c in self.contributions],
            'interactions': [r.to_dict() for r in self.interactions],
            'commanding_stem': self.commanding_stem,
            'summary': {
                'dominant_element': self.dominant_element,
                'weakest_element': self.weakest_element,
                'balanced': self.balanced,
            },
            'error': self.error,
        }


STRENGTH_LEVEL_NAMES = {
    'extreme_strong': '极旺',
    'strong': '身旺',
    'neutral': '中和',
    'weak': '身弱',
    'extreme_weak': '极弱',
}


@dataclass(frozen=True)
class StrengthResult:
    """日主旺衰结果"""
    level: Optional[str]
    index: float = 0.0
    seasonal_support: bool = False
    seat_support: bool = False
    net_ally_score: float = 0.0
    rootedness: float = 1.0
    support_score: float = 0.0
    opposition_score: float = 0.0
    seasonal_ratio: float = 0.0
    seat_reasons: Tuple[str, ...] = ()
    rooted_positions: Tuple[str, ...] = ()
    description: str = ''
    error: Optional[str] = None

    @property
    def level_name(self) -> Optional[str]:
        return STRENGTH_LEVEL_NAMES.get(self.level) if self.level else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'level': self.level,
            'level_name': self.level_name,
            'index': _round(self.index),
            'seasonal_support': self.seasonal_support,
            'seat_support': self.seat_support,
            'net_ally_score': _round(self.net_ally_score),
            'rootedness': self.rootedness,
            'support_score': _round(self.support_score),
            'opposition_score': _round(self.opposition_score),
            'seasonal_ratio': _round(self.seasonal_ratio),
            'seat_reasons': list(self.seat_reasons),
            'rooted_positions': list(self.rooted_positions),
            'description': self.description,
            'error': self.error,
        }


@dataclass(frozen=True)
class Undeterminable:
    """无法判定格局"""
    reasons: Tuple[str, ...]
    kind: str = field(default='undeterminable', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind, 'reasons': list(self.reasons)}


@dataclass(frozen=True)
class SpecialPattern:
    """特殊格局（专旺 / 化气 / 从格）"""
    name: str
    category: str
    basis: Mapping[str, Any] = field(hash=False)
    confidence: int
    status: str = '成格'
    kind: str = field(default='special', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'name': self.name,
            'category': self.category,
            'basis': dict(self.basis),
            'confidence': self.confidence,
            'status': self.status,
        }


@dataclass(frozen=True)
class NormalPattern:
    """正格（内格）"""
    name: str
    basis: Mapping[str, Any] = field(hash=False)
    forming_stem: str
    ten_god: str
    confidence: int
    status: str = '成格'
    category: str = field(default='normal', init=False)
    kind: str = field(default='normal', init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'kind': self.kind,
            'name': self.name,
            'category': self.category,
            'basis': dict(self.basis),
            'forming_stem': self.forming_stem,
            'ten_god': self.ten_god,
            'confidence': self.confidence,
            'status': self.status,
        }


PatternResult = Union[Undeterminable, SpecialPattern, NormalPattern]

__all__ = [
    'INTERACTION_KIND_NAMES',
    'INTERACTION_SUBTYPE_NAMES',
    'TIER_NAMES',
    'STRENGTH_LEVEL_NAMES',
    'InteractionRecord',
    'ForceMatrix',
    'StrengthResult',
    'Undeterminable',
    'SpecialPattern',
    'NormalPattern',
    'PatternResult',
]
