"""
Tests for configuration loading and validation.
"""
import dataclasses

import pytest

from modules.ticket_sync.config import Config


def test_from_env_reads_variables(env_vars):
    config = Config.from_env()
    assert config.freshdesk_domain == 'acme'
    assert config.freshdesk_api_key == 'fd_env_key'
    assert config.todoist_api_key == 'td_env_key'
    assert config.todoist_list == 'Freshdesk'
    assert config.log_level == 'INFO'
    assert config.validate() == []


def test_overrides_win_over_environment(env_vars):
    config = Config.from_env(todoist_list='Support', freshdesk_domain=None)
    assert config.todoist_list == 'Support'
    assert config.freshdesk_domain == 'acme'


def test_unknown_override_rejected():
    with pytest.raises(TypeError):
        Config.from_env({}, bogus='x')


def test_link_domain_defaults_to_freshdesk_host():
    config = Config.from_env({'FRESHDESK_DOMAIN': 'acme'})
    assert config.link_domain == 'acme.freshdesk.com'
    assert config.freshdesk_base_url == 'https://acme.freshdesk.com/api/v2'


def test_custom_link_domain(config):
    assert config.link_domain == 'support.example.com'
    # API host is unaffected by the custom link domain
    assert config.freshdesk_base_url == 'https://acme.freshdesk.com/api/v2'


def test_validate_reports_every_missing_value():
    errors = Config.from_env({}).validate()
    assert len(errors) == 4
    assert any('TODOIST_FRESHDESK_LIST' in e for e in errors)


def test_validate_rejects_unknown_log_level(config):
    bad = dataclasses.replace(config, log_level='LOUD')
    assert bad.validate() == ['Invalid log level: LOUD']


def test_config_is_immutable(config):
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.todoist_list = 'Other'
