"""
Tests for the immutable object editor.

Tests cover:
- Reading values, distinguishing absent from None
- Writing values with container creation
- Removing values
- Structural sharing and non-mutation
"""
import copy
from types import MappingProxyType

import pytest

from keychain_transform.editor import MISSING, delete_at, get_at, set_at


@pytest.fixture
def state():
    return {
        'regular': {'ole': [{'stuff': 'jk sekritz'}, {'stuff': 'more'}]},
        'other': {'things': 'moar sekrits', 'empty': None},
        'untouched': {'deep': [1, 2, 3]},
    }


class TestGetAt:
    """Tests for get_at."""

    def test_nested_value(self, state):
        assert get_at(state, 'regular.ole[0].stuff') == 'jk sekritz'
        assert get_at(state, 'other.things') == 'moar sekrits'

    def test_numeric_dotted_segment_indexes_lists(self, state):
        assert get_at(state, 'regular.ole.1.stuff') == 'more'

    def test_missing_value(self, state):
        assert get_at(state, 'other.nothing') is MISSING
        assert get_at(state, 'regular.ole[5].stuff') is MISSING
        assert get_at(state, 'other.things.deeper') is MISSING

    def test_none_is_not_missing(self, state):
        """Test that a stored None is returned as such."""
        assert get_at(state, 'other.empty') is None

    def test_missing_is_falsy(self):
        assert not MISSING
        assert repr(MISSING) == '<MISSING>'

    def test_root(self, state):
        assert get_at(state, '') is state


class TestSetAt:
    """Tests for set_at."""

    def test_replace_nested_value(self, state):
        snapshot = copy.deepcopy(state)
        result = set_at(state, 'regular.ole[0].stuff', 'new')

        assert result['regular']['ole'][0]['stuff'] == 'new'
        assert state == snapshot

    def test_structural_sharing(self, state):
        """Test that only the path spine is copied."""
        result = set_at(state, 'regular.ole[0].stuff', 'new')

        assert result is not state
        assert result['regular'] is not state['regular']
        assert result['regular']['ole'] is not state['regular']['ole']
        assert result['regular']['ole'][1] is state['regular']['ole'][1]
        assert result['other'] is state['other']
        assert result['untouched'] is state['untouched']

    def test_creates_mappings(self):
        assert set_at({}, 'a.b.c', 1) == {'a': {'b': {'c': 1}}}

    def test_creates_lists_for_indexes(self):
        assert set_at({}, 'a[2].b', 1) == {'a': [None, None, {'b': 1}]}

    def test_extends_existing_list(self):
        assert set_at({'a': [1]}, 'a[2]', 3) == {'a': [1, None, 3]}

    def test_replaces_scalars_on_the_way(self):
        assert set_at({'a': 'text'}, 'a.b', 1) == {'a': {'b': 1}}

    def test_mapping_proxy_input(self):
        """Test that read-only mappings are copied, not written to."""
        frozen = MappingProxyType({'inner': MappingProxyType({'x': 1})})
        result = set_at(frozen, 'inner.y', 2)
        assert result == {'inner': {'x': 1, 'y': 2}}
        assert dict(frozen['inner']) == {'x': 1}

    def test_root_replacement(self, state):
        assert set_at(state, '', {'new': True}) == {'new': True}


class TestDeleteAt:
    """Tests for delete_at."""

    def test_delete_mapping_key(self, state):
        snapshot = copy.deepcopy(state)
        result = delete_at(state, 'other.things')

        assert 'things' not in result['other']
        assert result['other'] == {'empty': None}
        assert result['untouched'] is state['untouched']
        assert state == snapshot

    def test_delete_inside_list(self, state):
        result = delete_at(state, 'regular.ole[0].stuff')
        assert result['regular']['ole'] == [{}, {'stuff': 'more'}]

    def test_delete_list_element_keeps_indexes(self, state):
        """Test that removed list slots are blanked, not shifted."""
        result = delete_at(state, 'regular.ole[0]')
        assert result['regular']['ole'] == [None, {'stuff': 'more'}]
        assert get_at(result, 'regular.ole[1].stuff') == 'more'

    def test_delete_missing_path(self, state):
        result = delete_at(state, 'nothing.here')
        assert result == state
        assert result is not state

    def test_delete_root(self, state):
        assert delete_at(state, '') == {}

    def test_delete_keeps_none_values(self, state):
        result = delete_at(state, 'other.empty')
        assert result['other'] == {'things': 'moar sekrits'}
