"""Unit tests for configuration loading."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

import json

import pytest

from confload.config import DEFAULT_CONFIG, load_config, state_path, template_path
from confload.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ('CONFLOAD_CONFIG', 'CONFLOAD_STATE_DIR', 'CONFLOAD_INSTALL_DIR'):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    config = load_config()

    assert config == DEFAULT_CONFIG
    assert config['cpu_threshold'] == 90.0
    assert config['memory_threshold'] == 90.0
    assert config['grace_period'] == 5.0


def test_file_overrides_defaults(tmp_path):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({'cpu_threshold': 75, 'template_name': 'zoom'}))

    config = load_config(str(path))

    assert config['cpu_threshold'] == 75
    assert config['template_name'] == 'zoom'
    assert config['memory_threshold'] == 90.0


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / 'env.json'
    path.write_text(json.dumps({'grace_period': 1}))
    monkeypatch.setenv('CONFLOAD_CONFIG', str(path))

    assert load_config()['grace_period'] == 1


def test_directory_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv('CONFLOAD_STATE_DIR', str(tmp_path / 'state'))
    monkeypatch.setenv('CONFLOAD_INSTALL_DIR', str(tmp_path / 'bin'))

    config = load_config()

    assert config['state_dir'] == str(tmp_path / 'state')
    assert config['install_dir'] == str(tmp_path / 'bin')


def test_explicit_overrides_win(tmp_path, monkeypatch):
    path = tmp_path / 'config.json'
    path.write_text(json.dumps({'state_dir': 'from-file'}))
    monkeypatch.setenv('CONFLOAD_STATE_DIR', 'from-env')

    assert load_config(str(path), overrides={'state_dir': 'explicit'})['state_dir'] == 'explicit'


def test_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / 'absent.json'))


@pytest.mark.parametrize('content', ['{broken', '[1, 2]'])
def test_malformed_file(tmp_path, content):
    path = tmp_path / 'config.json'
    path.write_text(content)

    with pytest.raises(ConfigError):
        load_config(str(path))


def test_paths():
    config = {**DEFAULT_CONFIG, 'state_dir': 'state', 'install_dir': 'bin', 'template_name': 'Zoom.exe'}

    assert state_path(config, 'counter_file') == os.path.join('state', 'counter.txt')
    assert template_path(config) == os.path.join('bin', 'Zoom.exe')
