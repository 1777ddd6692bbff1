# File: confload/contracts/prompt_stub.py
# Purpose: Concrete stub implementation for testing

from typing import Iterable, Optional

from .prompt_contract import PromptContract


class PromptStub(PromptContract):
    """Stub that answers from scripted queues and records every question"""

    def __init__(self, answers: Optional[Iterable[str]] = None,
                 confirmations: Optional[Iterable[bool]] = None):
        self.answers = list(answers or [])
        self.confirmations = list(confirmations or [])
        self.questions = []

    def ask(self, question: str) -> str:
        """Stub that pops the next answer, empty when exhausted"""
        self.questions.append(question)
        return self.answers.pop(0).strip() if self.answers else ''

    def confirm(self, question: str) -> bool:
        """Stub that pops the next confirmation, False when exhausted"""
        self.questions.append(question)
        return self.confirmations.pop(0) if self.confirmations else False
