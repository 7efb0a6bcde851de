#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
刑冲合会关系表

包含六冲、六合、三合、三会（方合）、天干五合、三刑/相刑/自刑。
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Mapping, Tuple


@dataclass(frozen=True)
class BranchGroup:
    """三合/三会局定义"""
    name: str
    members: Tuple[str, str, str]
    element: str
    peak: str


# 六冲（对冲，地势相同）
BRANCH_CHONG: Tuple[FrozenSet[str], ...] = (
    frozenset({'子', '午'}),
    frozenset({'卯', '酉'}),
    frozenset({'寅', '申'}),
    frozenset({'巳', '亥'}),
    frozenset({'辰', '戌'}),
    frozenset({'丑', '未'}),
)

# 六合 -> 合化五行
BRANCH_LIUHE: Mapping[FrozenSet[str], str] = MappingProxyType({
    frozenset({'子', '丑'}): '土',
    frozenset({'寅', '亥'}): '木',
    frozenset({'卯', '戌'}): '火',
    frozenset({'辰', '酉'}): '金',
    frozenset({'巳', '申'}): '水',
    frozenset({'午', '未'}): '火',
})

# 三合局（生旺墓）
BRANCH_SANHE_GROUPS: Tuple[BranchGroup, ...] = (
    BranchGroup('申子辰', ('申', '子', '辰'), '水', '子'),
    BranchGroup('亥卯未', ('亥', '卯', '未'), '木', '卯'),
    BranchGroup('寅午戌', ('寅', '午', '戌'), '火', '午'),
    BranchGroup('巳酉丑', ('巳', '酉', '丑'), '金', '酉'),
)

# 三会局（方合）
BRANCH_SANHUI_GROUPS: Tuple[BranchGroup, ...] = (
    BranchGroup('寅卯辰', ('寅', '卯', '辰'), '木', '卯'),
    BranchGroup('巳午未', ('巳', '午', '未'), '火', '午'),
    BranchGroup('申酉戌', ('申', '酉', '戌'), '金', '酉'),
    BranchGroup('亥子丑', ('亥', '子', '丑'), '水', '子'),
)

# 天干五合 -> 合化五行
STEM_HE: Mapping[FrozenSet[str], str] = MappingProxyType({
    frozenset({'甲', '己'}): '土',
    frozenset({'乙', '庚'}): '金',
    frozenset({'丙', '辛'}): '水',
    frozenset({'丁', '壬'}): '木',
    frozenset({'戊', '癸'}): '火',
})

# 天干五合的习惯写法（阳干在前）
STEM_HE_NAMES: Mapping[FrozenSet[str], str] = MappingProxyType({
    frozenset({'甲', '己'}): '甲己',
    frozenset({'乙', '庚'}): '乙庚',
    frozenset({'丙', '辛'}): '丙辛',
    frozenset({'丁', '壬'}): '丁壬',
    frozenset({'戊', '癸'}): '戊癸',
})

# 三刑
BRANCH_XING_TRIPLES: Tuple[Tuple[FrozenSet[str], str], ...] = (
    (frozenset({'寅', '巳', '申'}), '恃势之刑'),
    (frozenset({'丑', '戌', '未'}), '无恩之刑'),
)

# 相刑
BRANCH_XING_MUTUAL: Tuple[FrozenSet[str], str] = (frozenset({'子', '卯'}), '无礼之刑')

# 自刑
BRANCH_SELF_XING: FrozenSet[str] = frozenset({'辰', '午', '酉', '亥'})

# 相邻柱位（六合、天干五合只看相邻）
ADJACENT_POSITIONS: Tuple[Tuple[str, str], ...] = (
    ('year', 'month'),
    ('month', 'day'),
    ('day', 'hour'),
)
