from typing import Any, Dict, Optional

from numerus.errors import EvalError
from numerus.types import Span


class Environment:
    """Maps variable names to their current values for one program run."""
    def __init__(self):
        self.values: Dict[str, Any] = {}

    def get(self, name: str, span: Optional[Span] = None) -> Any:
        if name in self.values:
            return self.values[name]
        raise EvalError(EvalError.UNDECLARED_VARIABLE, f"variable {name} is not declared", span)

    def declare(self, name: str, value: Any, span: Optional[Span] = None):
        if name in self.values:
            raise EvalError(EvalError.DUPLICATE_DECLARATION, f"variable {name} is already declared", span)
        self.values[name] = value

    def assign(self, name: str, value: Any, span: Optional[Span] = None):
        if name not in self.values:
            raise EvalError(EvalError.UNDECLARED_VARIABLE, f"cannot assign to undeclared variable {name}", span)
        self.values[name] = value
