#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
十二长生模块

阳干顺行、阴干逆行，从各自的长生地起排 长生 → 养。
"""

from typing import Optional

from core.data.stems_branches import EARTHLY_BRANCHES, STEM_YINYANG

TWELVE_STAGES = ('长生', '沐浴', '冠带', '临官', '帝旺', '衰', '病', '死', '墓', '绝', '胎', '养')

# 身强的四个长生位（坐下有力）
STRONG_STAGES = frozenset({'长生', '冠带', '临官', '帝旺'})

# 各天干长生地
CHANGSHENG_BRANCH = {
    '甲': '亥', '丙': '寅', '戊': '寅', '庚': '巳', '壬': '申',
    '乙': '午', '丁': '酉', '己': '酉', '辛': '子', '癸': '卯',
}

# 建禄（临官）地
LU_BRANCH = {
    '甲': '寅', '乙': '卯', '丙': '巳', '丁': '午', '戊': '巳',
    '己': '午', '庚': '申', '辛': '酉', '壬': '亥', '癸': '子',
}

# 阳刃（帝旺）地，只有阳干
YANGREN_BRANCH = {
    '甲': '卯', '丙': '午', '戊': '午', '庚': '酉', '壬': '子',
}


def get_life_stage(stem: str, branch: str) -> Optional[str]:
    """
    计算天干在地支上的十二长生状态

    Args:
        stem: 天干
        branch: 地支

    Returns:
        十二长生名称；天干或地支未知时返回 None
    """
    start = CHANGSHENG_BRANCH.get(stem)
    if start is None or branch not in EARTHLY_BRANCHES:
        return None

    start_idx = EARTHLY_BRANCHES.index(start)
    branch_idx = EARTHLY_BRANCHES.index(branch)
    if STEM_YINYANG[stem] == '阳':
        offset = (branch_idx - start_idx) % 12
    else:
        offset = (start_idx - branch_idx) % 12
    return TWELVE_STAGES[offset]


def is_strong_stage(stem: str, branch: str) -> bool:
    return get_life_stage(stem, branch) in STRONG_STAGES
