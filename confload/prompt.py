# File: confload/prompt.py
# Purpose: Console operator prompt

from .contracts.prompt_contract import PromptContract

AFFIRMATIVE = ('y', 'yes')


class ConsolePrompt(PromptContract):
    """Reads operator answers from stdin"""

    def ask(self, question: str) -> str:
        return input(question).strip()

    def confirm(self, question: str) -> bool:
        return self.ask(question).lower() in AFFIRMATIVE
