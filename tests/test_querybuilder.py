"""
Tests for the Freshdesk query builder.
"""
import pytest

from modules.ticket_sync.models import TicketStatus
from modules.ticket_sync.querybuilder import Parameter, Predicate, all_of, any_of


class TestParameter:
    def test_integer_equality(self):
        assert str(Parameter('agent_id').equals(42)) == 'agent_id:42'

    def test_enum_renders_its_value(self):
        assert str(Parameter('status').equals(TicketStatus.OPEN)) == 'status:2'

    def test_string_is_single_quoted(self):
        assert str(Parameter('tag').equals('vip')) == "tag:'vip'"

    def test_string_escapes_quotes(self):
        assert str(Parameter('tag').equals("o'brien")) == "tag:'o\\'brien'"

    def test_booleans_and_null(self):
        assert str(Parameter('spam').equals(False)) == 'spam:false'
        assert str(Parameter('group_id').equals(None)) == 'group_id:null'

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            Parameter('')


class TestCombinators:
    def test_all_of_joins_with_and(self):
        query = all_of(
            Parameter('agent_id').equals(42),
            Parameter('status').equals(TicketStatus.OPEN),
        )
        assert str(query) == '(agent_id:42 AND status:2)'

    def test_any_of_joins_with_or(self):
        query = any_of(Parameter('priority').equals(3), Parameter('priority').equals(4))
        assert str(query) == '(priority:3 OR priority:4)'

    def test_nesting(self):
        priority = any_of(Parameter('priority').equals(3), Parameter('priority').equals(4))
        query = all_of(priority, Parameter('status').equals(2))
        assert str(query) == '((priority:3 OR priority:4) AND status:2)'

    def test_single_predicate_is_unwrapped(self):
        predicate = Parameter('status').equals(2)
        assert all_of(predicate) == predicate

    def test_operators(self):
        a = Parameter('a').equals(1)
        b = Parameter('b').equals(2)
        assert a & b == Predicate('(a:1 AND b:2)')
        assert a | b == Predicate('(a:1 OR b:2)')

    def test_empty_combination_rejected(self):
        with pytest.raises(ValueError):
            all_of()
