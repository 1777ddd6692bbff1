# File: confload/contracts/prompt_contract.py
# Purpose: Define the boundary for interactive operator decisions

from abc import ABC, abstractmethod


class PromptContract(ABC):
    """Abstract contract defining the operator prompt interface"""

    @abstractmethod
    def ask(self, question: str) -> str:
        """Ask a free-form question

        Returns:
            Answer with surrounding whitespace removed
        """
        pass

    @abstractmethod
    def confirm(self, question: str) -> bool:
        """Ask a yes/no question

        Returns:
            True only for an affirmative answer; anything else is False
        """
        pass
