#!/usr/bin/env python3
"""
Load Test Launcher
Interactive menu for installing the client and running load tests
"""

import argparse
import logging
import sys
from typing import Any, Callable, Dict, List, Optional

from .config import load_config, state_path
from .contracts.installer_contract import InstallerContract
from .contracts.prompt_contract import PromptContract
from .errors import LoadTestError
from .installer import ZoomInstaller
from .launcher import InstanceLauncher
from .logger import setup_logging
from .process_inventory import ProcessInventory
from .prompt import ConsolePrompt
from .resource_monitor import PsutilResourceMonitor
from .state_store import FileStateStore
from .teardown import TeardownController

logger = logging.getLogger(__name__)


# ANSI color codes
class Colors:
    GREEN = '\033[0;32m'
    BLUE = '\033[0;34m'
    YELLOW = '\033[1;33m'
    RED = '\033[0;31m'
    NC = '\033[0m'  # No Color
    BOLD = '\033[1m'


def print_colored(message, color=Colors.NC, end='\n'):
    """Print colored message"""
    print(f"{color}{message}{Colors.NC}", end=end)


def print_banner():
    """Display startup banner"""
    print_colored("╔════════════════════════════════════════════════════╗", Colors.BLUE)
    print_colored("║              Conference Load Launcher              ║", Colors.BLUE)
    print_colored("╚════════════════════════════════════════════════════╝", Colors.BLUE)
    print()


MENU = [
    ('1', 'Download installer'),
    ('2', 'Install client'),
    ('3', 'Uninstall client'),
    ('4', 'Turn firewall on'),
    ('5', 'Turn firewall off'),
    ('6', 'Start load test'),
    ('7', 'Stop load test'),
    ('8', 'Load test status'),
    ('0', 'Exit'),
]


def print_menu():
    print()
    for key, label in MENU:
        print_colored(f"  {key}. ", Colors.BOLD, end="")
        print(label)
    print()


def print_failures(failures: List[Dict[str, Any]]):
    for failure in failures:
        target = failure.get('ordinal', failure.get('pid', failure.get('path')))
        print_colored(f"  ✗ {failure['stage']} {target}: {failure['error']}", Colors.RED)


class LoadTestMenu:
    """Menu actions wired to the load-test components"""

    def __init__(self, launcher: InstanceLauncher, teardown: TeardownController,
                 installer: InstallerContract, prompt: PromptContract):
        self.launcher = launcher
        self.teardown = teardown
        self.installer = installer
        self.prompt = prompt
        self.actions: Dict[str, Callable[[], None]] = {
            '1': self.download,
            '2': self.install,
            '3': self.uninstall,
            '4': lambda: self.set_firewall(True),
            '5': lambda: self.set_firewall(False),
            '6': self.start_load,
            '7': self.stop_load,
            '8': self.show_status,
        }

    def download(self):
        path = self.installer.download()
        print_colored(f"✓ Installer saved to {path}", Colors.GREEN)

    def install(self):
        if self.installer.install_silently():
            print_colored("✓ Client installed", Colors.GREEN)
        else:
            print_colored("❌ Installation failed, see log for details", Colors.RED)

    def uninstall(self):
        results = self.installer.uninstall_all()
        for result in results:
            if result['success']:
                print_colored(f"✓ {' '.join(result['command'])}", Colors.GREEN)
            else:
                print_colored(f"✗ {' '.join(result['command'])}: {result['output']}", Colors.RED)

    def set_firewall(self, enabled: bool):
        state = 'on' if enabled else 'off'
        if self.installer.set_firewall_enabled(enabled):
            print_colored(f"✓ Firewall turned {state}", Colors.GREEN)
        else:
            print_colored(f"❌ Could not turn firewall {state}", Colors.RED)

    def start_load(self):
        count = self.prompt.ask("Number of instances to launch: ")
        report = self.launcher.run_stress_load(count)

        color = Colors.GREEN if report['success'] and not report['aborted'] else Colors.YELLOW
        print_colored(report['message'], color)
        for warning in report['warnings']:
            print_colored(f"  ⚠️  {warning}", Colors.YELLOW)
        print_failures(report['failures'])
        if report['last_ordinal'] is not None:
            print_colored(f"Instances {report['first_ordinal']}-{report['last_ordinal']} assigned", Colors.BLUE)

    def stop_load(self):
        print_colored("⏳ Stopping load test...", Colors.BLUE)
        report = self.teardown.stop_stress_load()
        print_colored(report['message'], Colors.GREEN if report['success'] else Colors.YELLOW)
        if report['remaining']:
            print_colored(f"  ⚠️  Still running: {', '.join(map(str, report['remaining']))}", Colors.YELLOW)
        print_failures(report['failures'])

    def show_status(self):
        status = self.launcher.get_status()
        print_colored("Client installed:   ", Colors.BLUE, end="")
        print('yes' if status['template_present'] else 'no')
        print_colored("Running instances:  ", Colors.BLUE, end="")
        print(status['running'])
        print_colored("Copies on disk:     ", Colors.BLUE, end="")
        print(status['copies'])
        print_colored("Last ordinal:       ", Colors.BLUE, end="")
        print(status['counter'])
        print_colored("Saved meeting:      ", Colors.BLUE, end="")
        print('yes' if status['credentials_saved'] else 'no')

    def handle(self, choice: str) -> bool:
        """Run one menu selection; False when the operator chose to exit"""
        if choice == '0':
            return False

        action = self.actions.get(choice)
        if action is None:
            print_colored(f"⚠️  Unknown option: {choice!r}", Colors.YELLOW)
            return True

        try:
            action()
        except LoadTestError as e:
            logger.error(f"Menu option {choice} failed: {e}")
            print_colored(f"❌ {e}", Colors.RED)
        except (KeyboardInterrupt, EOFError):
            print()
            logger.warning(f"Menu option {choice} interrupted by operator")
            print_colored("Interrupted", Colors.YELLOW)
        return True

    def run(self):
        while True:
            print_menu()
            try:
                choice = self.prompt.ask("Select an option: ")
            except EOFError:
                print()
                break
            if not self.handle(choice):
                break
        print_colored("Goodbye", Colors.BLUE)


def build_menu(config: Dict[str, Any], prompt: Optional[PromptContract] = None) -> LoadTestMenu:
    """Wire the real components together"""
    prompt = prompt or ConsolePrompt()
    state_store = FileStateStore.from_config(config)
    inventory = ProcessInventory()
    launcher = InstanceLauncher(
        config,
        state_store,
        PsutilResourceMonitor(interval=config['sample_interval']),
        inventory,
        prompt,
    )
    teardown = TeardownController(config, state_store, inventory)
    return LoadTestMenu(launcher, teardown, ZoomInstaller(config), prompt)


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function"""
    parser = argparse.ArgumentParser(description="Conference client load-test launcher")
    parser.add_argument('--config', help="JSON configuration file")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except LoadTestError as e:
        print_colored(f"❌ {e}", Colors.RED)
        return 1

    setup_logging(state_path(config, 'log_file'), config['log_level'])
    logger.info("Launcher started")

    print_banner()
    try:
        build_menu(config).run()
    except KeyboardInterrupt:
        print()
        print_colored("Interrupted by user", Colors.YELLOW)
    logger.info("Launcher exited")
    return 0


if __name__ == "__main__":
    sys.exit(main())
