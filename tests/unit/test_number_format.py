"""Numeric coercion and net weight tests."""
from decimal import Decimal

import pytest

from weighbridge.utils.number_format import (
    parse_decimal, parse_non_negative_decimal, parse_int, compute_net_weight
)


class TestParseDecimal:

    @pytest.mark.parametrize('value, expected', [
        ('12.5', Decimal('12.5')),
        (' 7 ', Decimal('7')),
        (12, Decimal('12')),
        (12.1, Decimal('12.1')),
        (Decimal('3.25'), Decimal('3.25')),
        ('-4', Decimal('-4')),
    ])
    def test_numbers(self, value, expected):
        assert parse_decimal(value) == expected

    @pytest.mark.parametrize('value', [None, '', '   '])
    def test_empty_means_no_value(self, value):
        assert parse_decimal(value) is None

    @pytest.mark.parametrize('value', ['abc', '12kg', True, [1], {'kg': 1}, float('nan'), float('inf'), 'NaN'])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            parse_decimal(value)

    def test_non_negative_rejects_negative(self):
        with pytest.raises(ValueError, match='negative'):
            parse_non_negative_decimal('-0.5')

    def test_non_negative_accepts_zero(self):
        assert parse_non_negative_decimal(0) == Decimal('0')


class TestParseInt:

    @pytest.mark.parametrize('value, expected', [('12', 12), (12, 12), (12.0, 12), ('0', 0)])
    def test_whole_numbers(self, value, expected):
        assert parse_int(value) == expected

    @pytest.mark.parametrize('value', ['12.5', 3.7, 'twelve'])
    def test_rejects_fractions_and_text(self, value):
        with pytest.raises(ValueError):
            parse_int(value)

    def test_empty(self):
        assert parse_int('') is None


class TestComputeNetWeight:
    """Net weight is |second - first| and only exists when both weighings do."""

    @pytest.mark.parametrize('first, second, expected', [
        (Decimal('1000'), Decimal('3500'), Decimal('2500')),
        (Decimal('3500'), Decimal('1000'), Decimal('2500')),
        (Decimal('1200.50'), Decimal('1200.50'), Decimal('0')),
        (Decimal('0'), Decimal('18250.75'), Decimal('18250.75')),
    ])
    def test_absolute_difference(self, first, second, expected):
        assert compute_net_weight(first, second) == expected

    @pytest.mark.parametrize('first, second', [(None, Decimal('10')), (Decimal('10'), None), (None, None)])
    def test_missing_weighing(self, first, second):
        assert compute_net_weight(first, second) is None
