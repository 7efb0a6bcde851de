#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""干支基础数据与五行生克单元测试"""

import pytest

from core.calculators.bazi_core import (
    ELEMENT_RELATIONS,
    ally_elements,
    dominated_by,
    dominates,
    generated_by,
    generates,
    get_element_relation,
    opposing_elements,
)
from core.data.stems_branches import (
    BRANCH_TERRAIN,
    EARTHLY_BRANCHES,
    FIVE_ELEMENTS,
    HEAVENLY_STEMS,
    HIDDEN_STEMS,
    STEM_ELEMENTS,
    STEM_YINYANG,
    get_dominant_entry,
    get_hidden_stems,
    get_symbol_element,
)


class TestHiddenStems:
    @pytest.mark.parametrize("branch", EARTHLY_BRANCHES)
    def test_command_days_sum_to_30(self, branch):
        assert sum(e.command_days for e in get_hidden_stems(branch)) == 30

    @pytest.mark.parametrize("branch", EARTHLY_BRANCHES)
    def test_exactly_one_dominant(self, branch):
        ranks = [e.rank for e in get_hidden_stems(branch)]
        assert ranks.count('dominant') == 1

    @pytest.mark.parametrize("branch", EARTHLY_BRANCHES)
    def test_entry_count_by_terrain(self, branch):
        count = len(get_hidden_stems(branch))
        if BRANCH_TERRAIN[branch] == 'peak':
            assert 1 <= count <= 2
        else:
            assert count == 3

    @pytest.mark.parametrize("branch", EARTHLY_BRANCHES)
    def test_command_days_range(self, branch):
        for entry in get_hidden_stems(branch):
            assert 7 <= entry.command_days <= 20

    def test_dominant_entries(self):
        assert get_dominant_entry('子').stem == '癸'
        assert get_dominant_entry('寅').stem == '甲'
        assert get_dominant_entry('辰').stem == '戊'
        assert get_dominant_entry('未').stem == '己'

    def test_simple_hidden_list_puts_dominant_first(self):
        assert HIDDEN_STEMS['寅'][0] == '甲'
        assert HIDDEN_STEMS['午'] == ('丁', '丙')

    def test_unknown_branch(self):
        assert get_hidden_stems('X') == ()
        assert get_dominant_entry('-') is None

    def test_entry_to_dict(self):
        data = get_dominant_entry('酉').to_dict()
        assert data == {
            'stem': '辛', 'element': '金', 'command_days': 20,
            'rank': 'dominant', 'rank_name': '本气',
        }


class TestSymbols:
    def test_counts(self):
        assert len(HEAVENLY_STEMS) == 10
        assert len(EARTHLY_BRANCHES) == 12
        assert len(BRANCH_TERRAIN) == 12

    @pytest.mark.parametrize("stem", HEAVENLY_STEMS)
    def test_stems_alternate_polarity(self, stem):
        index = HEAVENLY_STEMS.index(stem)
        assert STEM_YINYANG[stem] == ('阳' if index % 2 == 0 else '阴')

    @pytest.mark.parametrize("stem", HEAVENLY_STEMS)
    def test_stem_pairs_share_element(self, stem):
        index = HEAVENLY_STEMS.index(stem)
        assert STEM_ELEMENTS[stem] == FIVE_ELEMENTS[index // 2]

    def test_symbol_element(self):
        assert get_symbol_element('甲') == '木'
        assert get_symbol_element('亥') == '水'
        assert get_symbol_element('?') == ''

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            STEM_ELEMENTS['甲'] = '火'


class TestElementCycles:
    @pytest.mark.parametrize("element", FIVE_ELEMENTS)
    def test_generative_cycle_closes(self, element):
        current = element
        for _ in range(5):
            current = generates(current)
        assert current == element

    @pytest.mark.parametrize("element", FIVE_ELEMENTS)
    def test_dominance_skips_one(self, element):
        assert dominates(element) == generates(generates(element))
        assert dominated_by(dominates(element)) == element
        assert generated_by(generates(element)) == element

    def test_known_relations(self):
        assert generates('木') == '火'
        assert dominates('木') == '土'
        assert dominated_by('木') == '金'
        assert generated_by('木') == '水'
        assert ELEMENT_RELATIONS['水']['controls'] == '火'

    @pytest.mark.parametrize("target,expected", [
        ('火', 'same'),
        ('土', 'me_producing'),
        ('金', 'me_controlling'),
        ('木', 'producing_me'),
        ('水', 'controlling_me'),
        ('?', 'unknown'),
    ])
    def test_relation_from_fire(self, target, expected):
        assert get_element_relation('火', target) == expected

    def test_ally_and_opposing_partition(self):
        for element in FIVE_ELEMENTS:
            allies = set(ally_elements(element))
            opposing = set(opposing_elements(element))
            assert allies | opposing == set(FIVE_ELEMENTS)
            assert not allies & opposing

    def test_unknown_element(self):
        assert generates('x') == ''
        assert ally_elements('x') == ()
