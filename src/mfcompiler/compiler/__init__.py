"""Message compiler.

Lowers parsed messages into templates, evaluates them in-process and
emits them as Python source.

Python 3.13+.
"""

from .artifact import ArtifactRuntime, CompiledGroup, CompiledMessage, wrap
from .emitter import Emitter
from .evaluator import Evaluator
from .lowering import Compiler, MessageTree
from .nodes import CompiledNode, FunctionDef, NestedGroup, Template
from .packaging import package

__all__ = [
    "ArtifactRuntime",
    "CompiledGroup",
    "CompiledMessage",
    "CompiledNode",
    "Compiler",
    "Emitter",
    "Evaluator",
    "FunctionDef",
    "MessageTree",
    "NestedGroup",
    "Template",
    "package",
    "wrap",
]
