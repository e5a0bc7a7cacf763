"""
Running-balance evaluation.

The first line opens the balance; every later operation line is deducted from
it and every subtotal line receives a snapshot of the current balance.
"""

from __future__ import annotations

import logging
from typing import Optional

from runledger.errors import EvalError
from runledger.nodes import Div, Document, Literal, Mul, Operation, OperationLine, SubtotalLine
from runledger.values import Value, divide, multiply, subtract

logger = logging.getLogger(__name__)


class Evaluator:
    """Evaluates operation trees and fills in subtotal lines."""

    def eval(self, node: Operation) -> Value:
        """Evaluate an operation tree bottom-up."""
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Mul):
            return multiply(self.eval(node.left), self.eval(node.right))
        if isinstance(node, Div):
            return divide(self.eval(node.left), self.eval(node.right))
        raise EvalError(f"Unsupported operation node: {type(node).__name__}")

    def run(self, document: Document) -> Optional[Value]:
        """Overwrite every subtotal with the running balance at that point.

        Returns the final balance, or None when the document is empty or opens
        with a subtotal; in that case nothing is changed.
        """
        if not document or not isinstance(document[0], OperationLine):
            logger.debug("Nothing to evaluate: document is empty or opens with a subtotal")
            return None

        balance = self.eval(document[0].operation)
        for line in document[1:]:
            if isinstance(line, OperationLine):
                balance = subtract(balance, self.eval(line.operation))
            elif isinstance(line, SubtotalLine):
                line.value = balance
        logger.debug(f"Final balance: {balance}")
        return balance


def evaluate(document: Document) -> Optional[Value]:
    """Evaluate a parsed document in place. See `Evaluator.run`."""
    return Evaluator().run(document)
