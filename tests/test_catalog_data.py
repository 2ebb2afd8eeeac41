#!/usr/bin/env python3
"""
Test suite for catalog loading and the Project / FilterState records
"""

import sys
import os
import json
import tempfile

# Add parent directory's src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
from catalog_data import CatalogError, DEFAULT_CATALOG, build_projects, load_catalog
from models import Project, FilterState
from catalog_filter import filter_projects, get_all_unique_tags


def write_json(directory, data, name='catalog.json'):
    path = os.path.join(directory, name)
    with open(path, 'w', encoding='utf-8') as f:
        if isinstance(data, str):
            f.write(data)
        else:
            json.dump(data, f)
    return path


def test_builtin_catalog():
    projects = load_catalog('')
    assert len(projects) == len(DEFAULT_CATALOG)
    assert projects[0].name == 'Miden Name Service'
    assert projects[0].image_url == 'miden_name_service.png'
    assert projects[0].tags == ('Naming', 'Utility', 'Infrastructure')


def test_missing_file_falls_back_to_builtin():
    with tempfile.TemporaryDirectory() as tmp:
        projects = load_catalog(os.path.join(tmp, 'nope.json'))
    assert [p.id for p in projects] == [1]


def test_load_list_and_wrapped_catalogs():
    entries = [
        {'id': 7, 'name': 'Seven', 'description': 'd', 'link': 'https://seven', 'tags': ['B']},
        {'id': 3, 'name': 'Three', 'description': 'd', 'link': 'https://three', 'tags': ['A']},
    ]
    with tempfile.TemporaryDirectory() as tmp:
        from_list = load_catalog(write_json(tmp, entries, 'list.json'))
        from_object = load_catalog(write_json(tmp, {'projects': entries}, 'object.json'))

    assert [p.id for p in from_list] == [7, 3]
    assert from_list == from_object


def test_missing_image_is_tolerated():
    projects = build_projects([{'id': 1, 'name': 'No Image', 'link': 'https://x'}])
    assert projects[0].image_url == ''
    assert projects[0].tags == ()
    assert projects[0].description == ''


def test_null_text_fields_become_empty():
    projects = build_projects([
        {'id': 1, 'name': 'Nulls', 'description': None, 'link': None, 'imageUrl': None, 'tags': None}
    ])
    project = projects[0]
    assert project.description == ''
    assert project.link == ''
    assert project.image_url == ''
    assert project.tags == ()
    # Searching such an entry must not fail
    assert filter_projects(projects, 'desc', []) == []
    assert filter_projects(projects, 'null', []) == projects


def test_non_string_tags_are_coerced():
    projects = build_projects([
        {'id': 1, 'name': 'Dated', 'tags': ['Naming', 2024, None]},
        {'id': 2, 'name': 'Single', 'tags': 'Utility'},
    ])
    assert projects[0].tags == ('Naming', '2024')
    assert projects[1].tags == ('Utility',)
    assert get_all_unique_tags(projects) == ['2024', 'Naming', 'Utility']
    assert filter_projects(projects, '', {'2024'}) == [projects[0]]


def test_entry_with_unusable_id_is_rejected():
    try:
        build_projects([{'id': 'first', 'name': 'A'}])
    except CatalogError as e:
        assert 'malformed' in str(e)
    else:
        raise AssertionError('CatalogError not raised')


def test_entry_without_name_is_rejected():
    try:
        build_projects([{'id': 1}])
    except CatalogError as e:
        assert 'name' in str(e)
    else:
        raise AssertionError('CatalogError not raised')


def test_duplicate_ids_are_rejected():
    try:
        build_projects([{'id': 1, 'name': 'A'}, {'id': 1, 'name': 'B'}])
    except CatalogError as e:
        assert 'Duplicate' in str(e)
    else:
        raise AssertionError('CatalogError not raised')


def test_unparseable_file_is_rejected():
    with tempfile.TemporaryDirectory() as tmp:
        path = write_json(tmp, '{not json')
        try:
            load_catalog(path)
        except CatalogError:
            pass
        else:
            raise AssertionError('CatalogError not raised')


def test_project_to_dict_uses_page_field_names():
    project = Project.from_dict(DEFAULT_CATALOG[0])
    data = project.to_dict()
    assert data['imageUrl'] == 'miden_name_service.png'
    assert data['tags'] == ['Naming', 'Utility', 'Infrastructure']
    assert Project.from_dict(data) == project


def test_filter_state_flags():
    state = FilterState()
    assert not state.is_active
    assert not state.has_tag_selection

    state.search_term = 'x'
    assert state.is_active
    assert not state.has_tag_selection

    state = FilterState(selected_tags={'Naming'})
    assert state.is_active
    assert state.has_tag_selection


def test_filter_state_from_request_dict():
    assert FilterState.from_dict(None) == FilterState()
    state = FilterState.from_dict({'search_term': ' a ', 'selected_tags': ['B', 'A']})
    assert state.search_term == ' a '
    assert state.selected_tags == {'A', 'B'}
    assert state.to_dict()['selected_tags'] == ['A', 'B']


def main():
    """Run all tests and print a summary"""
    tests = [(name, func) for name, func in sorted(globals().items())
             if name.startswith('test_') and callable(func)]
    failed = 0
    for name, func in tests:
        try:
            func()
            print(f"✅ PASS - {name}")
        except Exception as e:
            print(f"❌ FAIL - {name}: {type(e).__name__}: {e}")
            failed += 1

    print("-" * 80)
    print(f"Total: {len(tests) - failed}/{len(tests)} tests passed")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
