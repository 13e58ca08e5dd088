#!/usr/bin/env python3
"""
Tests for expanding a record's date range and days-met into meeting dates.
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from datetime import date, timedelta

from roomschedule.occurrences import generate_occurrences


def make_record(days_met, start='8/25/2025', end='12/16/2025'):
    return {'start_date': start, 'end_date': end, 'days_met': days_met}


def expected_dates(start, end, weekdays):
    """Brute-force reference: weekdays use Python's Monday=0 numbering."""
    out = []
    d = start
    while d <= end:
        if d.weekday() in weekdays:
            out.append(d)
        d += timedelta(days=1)
    return out


def test_tuesdays_in_fall_term():
    """Test one weekday over a full term."""
    dates = generate_occurrences(make_record('T'))
    assert len(dates) == 17, f'Expected 17 Tuesdays, got {len(dates)}'
    assert dates[0] == date(2025, 8, 26), f'First Tuesday should be 2025-08-26, got {dates[0]}'
    assert dates[-1] == date(2025, 12, 16), 'End date is inclusive'
    assert all(d.weekday() == 1 for d in dates), 'All dates should be Tuesdays'
    print('✓ test_tuesdays_in_fall_term passed')


def test_matches_brute_force():
    """Test several patterns against a day-by-day reference."""
    start, end = date(2025, 8, 25), date(2025, 12, 16)
    patterns = {
        'MWF': {0, 2, 4},
        'TR': {1, 3},
        'TuTh': {1, 3},
        'SaSu': {5, 6},
        'MTWRFSU': set(range(7)),
        'MMW': {0, 2},
    }
    for pattern, weekdays in patterns.items():
        dates = generate_occurrences(make_record(pattern))
        assert dates == expected_dates(start, end, weekdays), f'Mismatch for {pattern!r}'
        assert len(dates) == len(set(dates)), f'Duplicate dates for {pattern!r}'
    print('✓ test_matches_brute_force passed')


def test_serial_and_text_dates_agree():
    """Test a record mixing serial numbers and text dates."""
    text = generate_occurrences(make_record('MW'))
    serial = generate_occurrences(make_record('MW', start=45894, end='2025-12-16'))
    assert text == serial, 'Serial and text start dates should give the same dates'
    print('✓ test_serial_and_text_dates_agree passed')


def test_single_day_range():
    """Test a range of one day."""
    assert generate_occurrences(make_record('T', '8/26/2025', '8/26/2025')) == [date(2025, 8, 26)]
    assert generate_occurrences(make_record('M', '8/26/2025', '8/26/2025')) == []
    print('✓ test_single_day_range passed')


def test_soft_failures():
    """Test that bad input yields no dates rather than an error."""
    assert generate_occurrences(make_record('')) == [], 'No days met'
    assert generate_occurrences(make_record('XYZ')) == [], 'No weekday letters'
    assert generate_occurrences(make_record('T', start='someday')) == [], 'Bad start date'
    assert generate_occurrences(make_record('T', end=None)) == [], 'Missing end date'
    assert generate_occurrences(make_record('T', '12/16/2025', '8/25/2025')) == [], 'Inverted range'
    assert generate_occurrences({}) == [], 'Empty record'
    assert generate_occurrences(make_record('T', 'Aug 25', 'Dec 16')) == [], 'Dates without a year'
    print('✓ test_soft_failures passed')


def run_all_tests():
    """Run all tests."""
    print('Running occurrence tests...\n')

    test_tuesdays_in_fall_term()
    test_matches_brute_force()
    test_serial_and_text_dates_agree()
    test_single_day_range()
    test_soft_failures()

    print('\n' + '='*50)
    print('All tests passed! ✓')
    print('='*50)


if __name__ == '__main__':
    run_all_tests()
