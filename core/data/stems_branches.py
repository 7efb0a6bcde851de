#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
天干地支基础数据

包含：
- 天干/地支序列、五行、阴阳
- 地支地势分类（旺地/生地/库地）
- 地支藏干（含司令天数与本气/中气/余气等级）

所有表均为只读结构（MappingProxyType / tuple），不可在运行期修改。
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal, Mapping, Optional, Tuple

Element = Literal['木', '火', '土', '金', '水']
Polarity = Literal['阳', '阴']
Terrain = Literal['peak', 'growth', 'vault']
HiddenRank = Literal['residual', 'transitional', 'dominant']

HEAVENLY_STEMS: Tuple[str, ...] = ('甲', '乙', '丙', '丁', '戊', '己', '庚', '辛', '壬', '癸')
EARTHLY_BRANCHES: Tuple[str, ...] = ('子', '丑', '寅', '卯', '辰', '巳', '午', '未', '申', '酉', '戌', '亥')
FIVE_ELEMENTS: Tuple[str, ...] = ('木', '火', '土', '金', '水')

# 时辰未知的占位符
UNKNOWN_SYMBOL = '-'

STEM_ELEMENTS: Mapping[str, str] = MappingProxyType({
    '甲': '木', '乙': '木',
    '丙': '火', '丁': '火',
    '戊': '土', '己': '土',
    '庚': '金', '辛': '金',
    '壬': '水', '癸': '水',
})

STEM_YINYANG: Mapping[str, str] = MappingProxyType({
    '甲': '阳', '乙': '阴',
    '丙': '阳', '丁': '阴',
    '戊': '阳', '己': '阴',
    '庚': '阳', '辛': '阴',
    '壬': '阳', '癸': '阴',
})

BRANCH_ELEMENTS: Mapping[str, str] = MappingProxyType({
    '子': '水', '丑': '土', '寅': '木', '卯': '木',
    '辰': '土', '巳': '火', '午': '火', '未': '土',
    '申': '金', '酉': '金', '戌': '土', '亥': '水',
})

BRANCH_YINYANG: Mapping[str, str] = MappingProxyType({
    '子': '阳', '丑': '阴', '寅': '阳', '卯': '阴',
    '辰': '阳', '巳': '阴', '午': '阳', '未': '阴',
    '申': '阳', '酉': '阴', '戌': '阳', '亥': '阴',
})

# 地势：子午卯酉为旺地，寅申巳亥为生地，辰戌丑未为库地
BRANCH_TERRAIN: Mapping[str, str] = MappingProxyType({
    '子': 'peak', '午': 'peak', '卯': 'peak', '酉': 'peak',
    '寅': 'growth', '申': 'growth', '巳': 'growth', '亥': 'growth',
    '辰': 'vault', '戌': 'vault', '丑': 'vault', '未': 'vault',
})

TERRAIN_NAMES = MappingProxyType({
    'peak': '旺地',
    'growth': '生地',
    'vault': '库地',
})

HIDDEN_RANK_NAMES = MappingProxyType({
    'residual': '余气',
    'transitional': '中气',
    'dominant': '本气',
})


@dataclass(frozen=True)
class HiddenStemEntry:
    """地支藏干条目"""
    stem: str
    command_days: int
    rank: str

    @property
    def element(self) -> str:
        return STEM_ELEMENTS[self.stem]

    def to_dict(self) -> dict:
        return {
            'stem': self.stem,
            'element': self.element,
            'command_days': self.command_days,
            'rank': self.rank,
            'rank_name': HIDDEN_RANK_NAMES[self.rank],
        }


def _entries(*rows: Tuple[str, int, str]) -> Tuple[HiddenStemEntry, ...]:
    return tuple(HiddenStemEntry(stem, days, rank) for stem, days, rank in rows)


# 地支藏干（按余气 → 中气 → 本气排列，每支司令天数合计 30）
HIDDEN_STEM_DETAILS: Mapping[str, Tuple[HiddenStemEntry, ...]] = MappingProxyType({
    '子': _entries(('壬', 10, 'residual'), ('癸', 20, 'dominant')),
    '丑': _entries(('癸', 7, 'residual'), ('辛', 7, 'transitional'), ('己', 16, 'dominant')),
    '寅': _entries(('戊', 7, 'residual'), ('丙', 7, 'transitional'), ('甲', 16, 'dominant')),
    '卯': _entries(('甲', 10, 'residual'), ('乙', 20, 'dominant')),
    '辰': _entries(('乙', 7, 'residual'), ('癸', 7, 'transitional'), ('戊', 16, 'dominant')),
    '巳': _entries(('戊', 7, 'residual'), ('庚', 7, 'transitional'), ('丙', 16, 'dominant')),
    '午': _entries(('丙', 10, 'residual'), ('丁', 20, 'dominant')),
    '未': _entries(('丁', 7, 'residual'), ('乙', 7, 'transitional'), ('己', 16, 'dominant')),
    '申': _entries(('戊', 7, 'residual'), ('壬', 7, 'transitional'), ('庚', 16, 'dominant')),
    '酉': _entries(('庚', 10, 'residual'), ('辛', 20, 'dominant')),
    '戌': _entries(('辛', 7, 'residual'), ('丁', 7, 'transitional'), ('戊', 16, 'dominant')),
    '亥': _entries(('戊', 7, 'residual'), ('甲', 7, 'transitional'), ('壬', 16, 'dominant')),
})

# 简化藏干列表（本气在前），供十神副星等展示使用
HIDDEN_STEMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    branch: tuple(e.stem for e in sorted(entries, key=lambda e: -e.command_days))
    for branch, entries in HIDDEN_STEM_DETAILS.items()
})

MONTH_DAYS = 30


def is_stem(symbol: Optional[str]) -> bool:
    return symbol in STEM_ELEMENTS


def is_branch(symbol: Optional[str]) -> bool:
    return symbol in BRANCH_ELEMENTS


def get_hidden_stems(branch: str) -> Tuple[HiddenStemEntry, ...]:
    """获取地支藏干条目，未知地支返回空元组"""
    return HIDDEN_STEM_DETAILS.get(branch, ())


def get_dominant_entry(branch: str) -> Optional[HiddenStemEntry]:
    """获取地支本气藏干"""
    for entry in HIDDEN_STEM_DETAILS.get(branch, ()):
        if entry.rank == 'dominant':
            return entry
    return None


def get_symbol_element(symbol: str) -> str:
    """天干或地支的五行，未知返回空字符串"""
    return STEM_ELEMENTS.get(symbol) or BRANCH_ELEMENTS.get(symbol, '')
