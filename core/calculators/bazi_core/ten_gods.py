#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
十神计算模块

以日干为基准，计算任意天干（或地支本气）的十神关系，并归类为
比劫 / 印星 / 食伤 / 财星 / 官杀 五大类。
"""

import logging
from typing import List, Optional

from core.data.stems_branches import (
    BRANCH_ELEMENTS,
    BRANCH_YINYANG,
    STEM_ELEMENTS,
    STEM_YINYANG,
    get_hidden_stems,
)

from .element_relations import get_element_relation

logger = logging.getLogger(__name__)

# 五行关系 -> (同阴阳, 异阴阳) 十神
_RELATION_TEN_GODS = {
    'same': ('比肩', '劫财'),
    'me_producing': ('食神', '伤官'),
    'me_controlling': ('偏财', '正财'),
    'controlling_me': ('七杀', '正官'),
    'producing_me': ('偏印', '正印'),
}

# 十神大类
TEN_GOD_CATEGORIES = {
    '比肩': 'peer', '劫财': 'peer',
    '正印': 'resource', '偏印': 'resource',
    '食神': 'output', '伤官': 'output',
    '正财': 'wealth', '偏财': 'wealth',
    '正官': 'authority', '七杀': 'authority',
}

CATEGORY_NAMES = {
    'peer': '比劫',
    'resource': '印星',
    'output': '食伤',
    'wealth': '财星',
    'authority': '官杀',
}


def _ten_god_by_attrs(day_stem: str, element: str, yinyang: str) -> Optional[str]:
    day_element = STEM_ELEMENTS.get(day_stem)
    day_yinyang = STEM_YINYANG.get(day_stem)
    if not day_element or not element:
        return None

    relation = get_element_relation(day_element, element)
    names = _RELATION_TEN_GODS.get(relation)
    if names is None:
        return None
    return names[0] if day_yinyang == yinyang else names[1]


def get_ten_god(day_stem: str, target_stem: str) -> Optional[str]:
    """
    计算天干相对日干的十神

    Args:
        day_stem: 日干
        target_stem: 目标天干

    Returns:
        十神名称；任一天干未知时返回 None
    """
    ten_god = _ten_god_by_attrs(day_stem, STEM_ELEMENTS.get(target_stem, ''), STEM_YINYANG.get(target_stem, ''))
    if ten_god is None:
        logger.debug(f"⚠️ 无法计算十神: 日干={day_stem}, 目标={target_stem}")
    return ten_god


def get_branch_ten_god(day_stem: str, branch: str) -> Optional[str]:
    """地支（按地支本身五行阴阳）相对日干的十神"""
    return _ten_god_by_attrs(day_stem, BRANCH_ELEMENTS.get(branch, ''), BRANCH_YINYANG.get(branch, ''))


def get_branch_ten_gods(day_stem: str, branch: str) -> List[str]:
    """
    计算地支藏干的十神（副星），按余气 → 本气顺序

    Args:
        day_stem: 日干
        branch: 地支

    Returns:
        List[str]: 十神列表，未知地支返回空列表
    """
    branch_gods = []
    for entry in get_hidden_stems(branch):
        ten_god = get_ten_god(day_stem, entry.stem)
        if ten_god:
            branch_gods.append(ten_god)
    return branch_gods


def get_ten_god_category(ten_god: str) -> Optional[str]:
    """十神所属大类（peer/resource/output/wealth/authority）"""
    return TEN_GOD_CATEGORIES.get(ten_god)
