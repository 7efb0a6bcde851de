#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""五行力量矩阵单元测试"""

import pytest

from core.config.geju_config import GejuWeights
from core.geju import compute_force_matrix
from core.models import Chart

# 甲子 丙寅 戊午 庚申 的基础分（日干戊不计入）
SAMPLE_BASE = {
    '木': 1.0 + 16 / 30 * 2.5,
    '火': 1.2 + 7 / 30 * 2.5 + 10 / 30 * 1.5 + 20 / 30 * 1.5,
    '土': 7 / 30 * 2.5 + 7 / 30,
    '金': 1.0 + 16 / 30,
    '水': 1.0 + 7 / 30,
}


class TestBaseScores:
    def test_base_scores(self, sample_chart, default_weights):
        matrix = compute_force_matrix(sample_chart, weights=default_weights)
        assert matrix.error is None
        assert matrix.base_scores == pytest.approx(SAMPLE_BASE)
        assert sum(matrix.base_scores.values()) == pytest.approx(9.2)

    def test_day_stem_excluded(self, sample_chart, default_weights):
        matrix = compute_force_matrix(sample_chart, weights=default_weights)
        stem_sources = [c for c in matrix.contributions if c['source'] == 'stem']
        assert [c['position'] for c in stem_sources] == ['year', 'month', 'hour']

    def test_reference_attributes(self, sample_chart, default_weights):
        matrix = compute_force_matrix(sample_chart, weights=default_weights)
        assert matrix.day_master == '戊'
        assert matrix.day_master_element == '土'
        assert matrix.day_master_polarity == '阳'


class TestAdjustments:
    def test_clash_and_partial_trines(self, sample_chart, default_weights):
        # 子午冲(-0.4)、寅申冲(-0.3)、申子半合水(+0.2)、寅午半合火(+0.2)
        matrix = compute_force_matrix(sample_chart, weights=default_weights)
        expected = {
            '木': SAMPLE_BASE['木'] * 0.7,
            '火': SAMPLE_BASE['火'] * 0.8,
            '土': SAMPLE_BASE['土'],
            '金': SAMPLE_BASE['金'] * 0.7,
            '水': SAMPLE_BASE['水'] * 0.8,
        }
        assert matrix.scores == pytest.approx(expected)
        assert matrix.dominant_element == '火'
        assert matrix.weakest_element == '土'
        assert matrix.balanced is True

    def test_percentages(self, sample_chart, default_weights):
        matrix = compute_force_matrix(sample_chart, weights=default_weights)
        assert sum(matrix.percentages.values()) == pytest.approx(100, abs=0.3)
        assert matrix.percentages['火'] == 36.8
        assert matrix.percentages['土'] == 11.4

    def test_scores_floored_at_zero(self, default_weights):
        weights = default_weights.merged({'clash_retain': {'peak': -1.0}})
        chart = Chart.from_ganzhi('甲子', '丙寅', '戊午', '庚申')
        matrix = compute_force_matrix(chart, weights=weights)
        assert matrix.scores['水'] == 0.0
        assert matrix.scores['火'] == 0.0
        assert all(v >= 0 for v in matrix.scores.values())

    def test_tied_stems_neutralized(self, default_weights):
        # 丙辛相邻，月令卯本气乙木，不化水，两干合绊
        chart = Chart.from_ganzhi('丙午', '辛卯', '甲子', '丙寅')
        matrix = compute_force_matrix(chart, weights=default_weights)
        stems = {c['position']: c for c in matrix.contributions if c['source'] == 'stem'}
        assert stems['year']['neutralized'] is True
        assert stems['year']['score'] == 0.0
        assert stems['month']['neutralized'] is True
        assert stems['hour']['neutralized'] is False

    def test_vault_clash_raises_earth(self, default_weights):
        # 辰戌冲开库：土净增 0.1 倍基础分，其余五行不受冲的影响
        chart = Chart.from_ganzhi('甲辰', '丙戌', '庚寅', '丙子')
        matrix = compute_force_matrix(chart, weights=default_weights)
        earth_base = 16 / 30 + 16 / 30 * 2.5 + 7 / 30 * 1.5
        assert matrix.base_scores['土'] == pytest.approx(earth_base)
        assert matrix.adjustments['土'] == pytest.approx(earth_base * 0.1)
        assert matrix.adjustments['土'] > 0
        assert matrix.scores['土'] > matrix.base_scores['土']

    def test_matrix_hashable(self, sample_chart, default_weights):
        matrix = compute_force_matrix(sample_chart, weights=default_weights)
        assert isinstance(hash(matrix), int)


class TestCommandingOverride:
    def test_bonus_applied_to_month_dominant(self, sample_chart, default_weights):
        matrix = compute_force_matrix(sample_chart, '甲', weights=default_weights)
        assert matrix.commanding_stem == '甲'
        assert matrix.base_scores['木'] == pytest.approx(1.0 + 16 / 30 * 2.5 * 1.5)

    def test_non_dominant_override_ignored(self, sample_chart, default_weights):
        matrix = compute_force_matrix(sample_chart, '丙', weights=default_weights)
        assert matrix.commanding_stem is None
        assert matrix.base_scores == pytest.approx(SAMPLE_BASE)

    def test_invalid_override_ignored(self, sample_chart, default_weights):
        matrix = compute_force_matrix(sample_chart, 'X', weights=default_weights)
        assert matrix.error is None
        assert matrix.commanding_stem is None


class TestUnknownHour:
    @pytest.mark.parametrize("hour", [None, '-'])
    def test_hour_excluded(self, hour, default_weights):
        chart = Chart.from_ganzhi('甲子', '丙寅', '戊午', hour)
        matrix = compute_force_matrix(chart, weights=default_weights)
        assert matrix.error is None
        assert sum(matrix.base_scores.values()) == pytest.approx(7.2)
        assert all(c['position'] != 'hour' for c in matrix.contributions)
        assert all('hour' not in r.positions for r in matrix.interactions)


class TestErrors:
    def test_invalid_symbol(self, default_weights):
        chart = Chart.from_ganzhi('甲子', '丙寅', 'X午', '庚申')
        matrix = compute_force_matrix(chart, weights=default_weights)
        assert matrix.error
        assert sum(matrix.scores.values()) == 0

    def test_none_chart(self, default_weights):
        matrix = compute_force_matrix(None, weights=default_weights)
        assert matrix.error
        assert matrix.day_master == ''

    def test_idempotent(self, sample_chart, default_weights):
        first = compute_force_matrix(sample_chart, '甲', weights=default_weights).to_dict()
        second = compute_force_matrix(sample_chart, '甲', weights=default_weights).to_dict()
        assert first == second

    def test_to_dict_summary(self, sample_chart, default_weights):
        data = compute_force_matrix(sample_chart, weights=default_weights).to_dict()
        assert data['summary'] == {'dominant_element': '火', 'weakest_element': '土', 'balanced': True}
        assert len(data['interactions']) == 4
