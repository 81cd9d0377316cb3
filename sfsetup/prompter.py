"""
Operator prompting

The workflow asks Question objects; a Prompter answers them. The inquirer
prompter renders them in the terminal.
"""

from abc import ABC, abstractmethod
from typing import Any

import inquirer

from sfsetup.models.prompts import Question, QuestionKind


class Prompter(ABC):
    """Answers operator questions."""

    @abstractmethod
    def ask(self, question: Question) -> Any:
        """
        Ask a single question.

        Raises:
            KeyboardInterrupt: If the operator interrupts the prompt
        """
        pass


class InquirerPrompter(Prompter):
    """Terminal prompts with arrow-key selection."""

    def ask(self, question: Question) -> Any:
        answers = inquirer.prompt(
            [self._build(question)], raise_keyboard_interrupt=True
        )
        if not answers:
            raise KeyboardInterrupt
        return answers[question.name]

    def _build(self, question: Question):
        validate = True
        if question.validate is not None:
            check = question.validate

            def validate(_answers, current):
                return check(current)

        if question.kind == QuestionKind.CONFIRM:
            return inquirer.Confirm(
                question.name,
                message=question.message,
                default=bool(question.default),
            )
        if question.kind == QuestionKind.PASSWORD:
            return inquirer.Password(
                question.name, message=question.message, echo="*", validate=validate
            )
        if question.kind == QuestionKind.SELECT:
            return inquirer.List(
                question.name,
                message=question.message,
                choices=question.choices,
                carousel=True,
            )
        return inquirer.Text(
            question.name,
            message=question.message,
            default=question.default,
            validate=validate,
        )
