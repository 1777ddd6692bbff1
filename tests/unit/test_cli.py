"""Unit tests for the interactive menu."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from confload import cli
from confload.config import DEFAULT_CONFIG
from confload.contracts.installer_stub import InstallerStub
from confload.contracts.process_inventory_stub import ProcessInventoryStub
from confload.contracts.prompt_stub import PromptStub
from confload.contracts.resource_monitor_stub import ResourceMonitorStub
from confload.contracts.state_store_stub import StateStoreStub
from confload.launcher import InstanceLauncher
from confload.models import MeetingCredentials
from confload.teardown import TeardownController


def make_menu(tmp_path, prompt, installed=True):
    install_dir = tmp_path / 'bin'
    install_dir.mkdir()
    config = {**DEFAULT_CONFIG, 'install_dir': str(install_dir), 'template_name': 'Zoom.exe'}
    inventory = ProcessInventoryStub()
    if installed:
        (install_dir / 'Zoom.exe').write_bytes(b'client')
        inventory.add_file(str(install_dir / 'Zoom.exe'))
    store = StateStoreStub(credentials=MeetingCredentials(meeting_id='123', meeting_code='abc'))
    launcher = InstanceLauncher(config, store, ResourceMonitorStub(), inventory, prompt)
    teardown = TeardownController(config, store, inventory, sleep=lambda seconds: None)
    installer = InstallerStub()
    return cli.LoadTestMenu(launcher, teardown, installer, prompt), inventory, store, installer


def test_start_and_stop_load(tmp_path, capsys):
    prompt = PromptStub(answers=['3'], confirmations=[True])
    menu, inventory, store, _ = make_menu(tmp_path, prompt)

    assert menu.handle('6') is True
    assert len(inventory.spawned) == 3
    assert store.counter == 3

    assert menu.handle('7') is True
    assert inventory.processes == {}
    assert store.counter == 0

    output = capsys.readouterr().out
    assert 'Launched 3 of 3 instances' in output
    assert 'Terminated 3 of 3 processes' in output


def test_invalid_count_returns_to_menu(tmp_path, capsys):
    menu, inventory, _, _ = make_menu(tmp_path, PromptStub(answers=['abc']))

    assert menu.handle('6') is True
    assert inventory.spawned == []
    assert 'Invalid instance count' in capsys.readouterr().out


def test_non_ascii_digit_count_returns_to_menu(tmp_path, capsys):
    """Test a superscript digit is rejected as a count, not a crash."""
    menu, inventory, store, _ = make_menu(tmp_path, PromptStub(answers=['²']))

    assert menu.handle('6') is True
    assert inventory.spawned == []
    assert store.saved_counters == []
    assert 'Invalid instance count' in capsys.readouterr().out


def test_closed_input_during_action_returns_to_menu(tmp_path, capsys):
    """Test end of input at the count prompt does not escape the menu."""
    class ClosedPrompt(PromptStub):
        def ask(self, question):
            raise EOFError

    menu, inventory, _, _ = make_menu(tmp_path, ClosedPrompt())

    assert menu.handle('6') is True
    assert inventory.spawned == []
    assert 'Interrupted' in capsys.readouterr().out


def test_missing_client_returns_to_menu(tmp_path, capsys):
    menu, _, _, _ = make_menu(tmp_path, PromptStub(answers=['2']), installed=False)

    assert menu.handle('6') is True
    assert 'Install it first' in capsys.readouterr().out


def test_installer_actions(tmp_path):
    menu, _, _, installer = make_menu(tmp_path, PromptStub())

    for choice in ('1', '2', '5', '4', '3'):
        assert menu.handle(choice) is True

    assert [call[0] for call in installer.calls] == ['download', 'install', 'firewall', 'firewall', 'uninstall']
    assert installer.firewall_enabled is True


def test_status(tmp_path, capsys):
    menu, _, _, _ = make_menu(tmp_path, PromptStub())

    menu.handle('8')

    output = capsys.readouterr().out
    assert 'Running instances' in output
    assert 'Saved meeting' in output


def test_unknown_option(tmp_path, capsys):
    menu, _, _, _ = make_menu(tmp_path, PromptStub())

    assert menu.handle('42') is True
    assert 'Unknown option' in capsys.readouterr().out


def test_run_until_exit(tmp_path, capsys):
    prompt = PromptStub(answers=['8', '9', '0', '6'])
    menu, inventory, _, _ = make_menu(tmp_path, prompt)

    menu.run()

    assert prompt.answers == ['6']
    assert inventory.spawned == []
    assert 'Goodbye' in capsys.readouterr().out


def test_run_stops_on_eof(tmp_path):
    class EOFPrompt(PromptStub):
        def ask(self, question):
            raise EOFError

    menu, _, _, _ = make_menu(tmp_path, EOFPrompt())

    menu.run()


def test_main_rejects_missing_config(tmp_path, capsys):
    assert cli.main(['--config', str(tmp_path / 'absent.json')]) == 1
    assert 'Config file not found' in capsys.readouterr().out
