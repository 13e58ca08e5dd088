#!/usr/bin/env python3
"""
Tests for header mapping, row cleanup and the filter_records function.
"""

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pandas as pd

from roomschedule.records import (
    ALL,
    FIELDS,
    cell_text,
    filter_records,
    map_header,
    normalize_row,
    normalize_rows,
    records_from_frame,
)


def make_records():
    return [
        {'course_section': 'CS101', 'room': 'RoomA', 'instructor': 'Nelson', 'status': 'Scheduled'},
        {'course_section': 'CS101', 'room': 'RoomB', 'instructor': 'Nelson', 'status': 'Cancelled'},
        {'course_section': 'CS202', 'room': 'RoomA', 'instructor': 'Ortiz', 'status': 'Scheduled'},
        {'course_section': 'CS202', 'room': 'RoomB', 'instructor': 'Ortiz', 'status': 'Scheduled'},
    ]


def raw_row(**overrides):
    row = {
        'Course/Section': 'MMET 320/502 LAB',
        'Course Offering Id': 25286,
        'Start Date': '8/25/2025',
        'End Date': '12/16/2025',
        'Days Met': 'T',
        'Start Time': '12:00 PM',
        'End Time': '2:50 PM',
        'Instructor': 'A',
        'Room': 'THOM 107AC',
        'Max Enrollment': 14,
        'Status': 'Scheduled',
        'Term': 202531,
    }
    row.update(overrides)
    return row


def test_map_header_synonyms():
    """Test case-insensitive header matching."""
    assert map_header('Course/Section') == 'course_section'
    assert map_header('course section') == 'course_section'
    assert map_header('  DAYS MET ') == 'days_met'
    assert map_header('Room') == 'room'
    assert map_header('Building') is None, 'Unknown headers are ignored'
    print('✓ test_map_header_synonyms passed')


def test_normalize_row():
    """Test that a full row maps onto every field."""
    record = normalize_row(raw_row(Building='THOM'))
    assert list(record) == FIELDS, 'Record should have exactly the canonical fields'
    assert record['course_section'] == 'MMET 320/502 LAB'
    assert record['course_offering_id'] == '25286', 'Ids are cleaned to text'
    assert record['term'] == '202531'
    assert record['start_date'] == '8/25/2025'
    assert record['max_enrollment'] == 14, 'Numeric raw fields keep their value'
    print('✓ test_normalize_row passed')


def test_cell_text():
    """Test cell cleanup."""
    assert cell_text(None) == ''
    assert cell_text(float('nan')) == ''
    assert cell_text('  A  ') == 'A'
    assert cell_text(25286.0) == '25286'
    assert cell_text(107) == '107'
    print('✓ test_cell_text passed')


def test_rows_missing_required_fields_are_dropped():
    """Test that rows without room, dates or times never reach the pipeline."""
    rows = [
        raw_row(),
        raw_row(Room=''),
        raw_row(**{'Start Time': None}),
        raw_row(**{'End Date': float('nan')}),
        {'Course/Section': 'X'},
    ]
    records = normalize_rows(rows)
    assert len(records) == 1, f'Expected 1 record, got {len(records)}'
    assert records[0]['room'] == 'THOM 107AC'
    print('✓ test_rows_missing_required_fields_are_dropped passed')


def test_records_from_frame():
    """Test normalizing a DataFrame as read from a spreadsheet."""
    df = pd.DataFrame([raw_row(), raw_row(Room=None)])
    records = records_from_frame(df)
    assert len(records) == 1, f'Expected 1 record, got {len(records)}'
    assert records_from_frame(pd.DataFrame()) == []
    print('✓ test_records_from_frame passed')


def test_filter_by_room():
    """Test filtering by room name."""
    filtered = filter_records(make_records(), room='RoomA')
    assert len(filtered) == 2, f'Expected 2 results, got {len(filtered)}'
    assert all(r['room'] == 'RoomA' for r in filtered), 'All results should have room RoomA'
    print('✓ test_filter_by_room passed')


def test_filter_by_multiple_criteria():
    """Test filtering by room and instructor."""
    filtered = filter_records(make_records(), room='RoomA', instructor='Ortiz')
    assert len(filtered) == 1, f'Expected 1 result, got {len(filtered)}'
    assert filtered[0]['course_section'] == 'CS202', f'Unexpected result: {filtered[0]}'
    print('✓ test_filter_by_multiple_criteria passed')


def test_filter_with_explicit_all():
    """Test filtering with explicit ALL sentinel."""
    filtered = filter_records(make_records(), room=ALL, instructor=ALL)
    assert len(filtered) == 4, f'Expected 4 results, got {len(filtered)}'
    print('✓ test_filter_with_explicit_all passed')


def test_filter_no_matches():
    """Test filtering with no matching results."""
    filtered = filter_records(make_records(), room='RoomZ')
    assert len(filtered) == 0, f'Expected 0 results, got {len(filtered)}'
    print('✓ test_filter_no_matches passed')


def test_filter_with_predicate():
    """Test filtering with custom predicate function."""
    filtered = filter_records(make_records(), room='RoomZ', predicate=lambda r: r['status'] == 'Scheduled')
    assert len(filtered) == 3, f'Expected 3 results, got {len(filtered)}'
    print('✓ test_filter_with_predicate passed')


def test_all_sentinel_uniqueness():
    """Test that ALL sentinel cannot match actual data."""
    assert ALL != 'RoomA', 'ALL should not equal room name'
    assert ALL != '', 'ALL should not equal an empty room'
    assert ALL != None, 'ALL should not equal None'
    assert ALL is ALL, 'ALL should equal itself with identity check'
    print('✓ test_all_sentinel_uniqueness passed')


def run_all_tests():
    """Run all tests."""
    print('Running record tests...\n')

    test_map_header_synonyms()
    test_normalize_row()
    test_cell_text()
    test_rows_missing_required_fields_are_dropped()
    test_records_from_frame()
    test_filter_by_room()
    test_filter_by_multiple_criteria()
    test_filter_with_explicit_all()
    test_filter_no_matches()
    test_filter_with_predicate()
    test_all_sentinel_uniqueness()

    print('\n' + '='*50)
    print('All tests passed! ✓')
    print('='*50)


if __name__ == '__main__':
    run_all_tests()
