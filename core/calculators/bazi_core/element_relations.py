#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
五行生克关系模块

提供五行相生（木→火→土→金→水→木）、相克（木克土、土克水……）
的常量定义和计算函数。
"""

from typing import Literal, Tuple

from core.data.stems_branches import FIVE_ELEMENTS

# 五行关系类型（相对日主五行）
RelationType = Literal['same', 'me_producing', 'me_controlling', 'producing_me', 'controlling_me', 'unknown']


def _build_relations() -> dict:
    relations = {}
    count = len(FIVE_ELEMENTS)
    for i, element in enumerate(FIVE_ELEMENTS):
        relations[element] = {
            'produces': FIVE_ELEMENTS[(i + 1) % count],
            'controls': FIVE_ELEMENTS[(i + 2) % count],
            'controlled_by': FIVE_ELEMENTS[(i + 3) % count],
            'produced_by': FIVE_ELEMENTS[(i + 4) % count],
        }
    return relations


# 由相生序列推导：生下一位，克隔一位
ELEMENT_RELATIONS = _build_relations()


def generates(element: str) -> str:
    """我生的五行，未知五行返回空字符串"""
    return ELEMENT_RELATIONS.get(element, {}).get('produces', '')


def dominates(element: str) -> str:
    """我克的五行"""
    return ELEMENT_RELATIONS.get(element, {}).get('controls', '')


def generated_by(element: str) -> str:
    """生我的五行"""
    return ELEMENT_RELATIONS.get(element, {}).get('produced_by', '')


def dominated_by(element: str) -> str:
    """克我的五行"""
    return ELEMENT_RELATIONS.get(element, {}).get('controlled_by', '')


def get_element_relation(day_element: str, target_element: str) -> RelationType:
    """
    判断目标五行相对日主五行的生克关系

    Args:
        day_element: 日主五行（木/火/土/金/水）
        target_element: 目标五行

    Returns:
        RelationType: 'same' / 'me_producing' / 'me_controlling' /
        'producing_me' / 'controlling_me'，无法判断时为 'unknown'
    """
    if day_element not in ELEMENT_RELATIONS or target_element not in ELEMENT_RELATIONS:
        return 'unknown'
    if day_element == target_element:
        return 'same'

    relations = ELEMENT_RELATIONS[day_element]
    if target_element == relations['produces']:
        return 'me_producing'
    if target_element == relations['controls']:
        return 'me_controlling'
    if target_element == relations['produced_by']:
        return 'producing_me'
    return 'controlling_me'


def ally_elements(day_element: str) -> Tuple[str, ...]:
    """帮身五行：同我 + 生我"""
    if day_element not in ELEMENT_RELATIONS:
        return ()
    return (day_element, generated_by(day_element))


def opposing_elements(day_element: str) -> Tuple[str, ...]:
    """耗身五行：我生 + 我克 + 克我"""
    if day_element not in ELEMENT_RELATIONS:
        return ()
    return (generates(day_element), dominates(day_element), dominated_by(day_element))
