#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""格局服务层单元测试"""

from unittest.mock import patch

from server.services.geju_service import GejuService


class TestGejuService:
    def test_analyze_success(self):
        result = GejuService.analyze('甲子', '丙寅', '戊午', '庚申')
        assert result['success'] is True
        assert result['data']['pattern']['name'] == '七杀格'

    def test_invalid_input(self):
        result = GejuService.classify_pattern('甲子', '丙寅', '戊X', '庚申')
        assert result['success'] is False
        assert result['invalid_input'] is True
        assert '命盘数据无效' in result['error']

    def test_is_hour_unknown_drops_hour(self):
        result = GejuService.detect_interactions('甲子', '丙寅', '戊午', '庚申', is_hour_unknown=True)
        assert result['data']['chart']['hour'] is None
        assert all('hour' not in r['positions'] for r in result['data']['interactions'])

    def test_force_error_reported(self):
        with patch('server.services.geju_service.compute_force_matrix') as mock_compute:
            mock_compute.return_value.error = '计算失败'
            result = GejuService.compute_force('甲子', '丙寅', '戊午', '庚申')
        assert result['success'] is False
        assert result['invalid_input'] is False

    def test_unexpected_failure(self):
        with patch('server.services.geju_service.analyze_chart', side_effect=RuntimeError('boom')):
            result = GejuService.analyze('甲子', '丙寅', '戊午', '庚申')
        assert result == {'success': False, 'error': 'boom', 'invalid_input': False}
