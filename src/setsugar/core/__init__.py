"""Core: syntax tree, printer and desugaring passes."""

from setsugar.core.ast import (
    BinaryOperator,
    BinaryOperatorKind,
    Comprehension,
    Connective,
    ConnectiveKind,
    Constant,
    ConstantKind,
    Negation,
    Node,
    Quantifier,
    QuantifierKind,
    Relation,
    RelationKind,
    UnaryOperator,
    UnaryOperatorKind,
    Variable,
    is_primitive,
)
from setsugar.core.errors import FormulaTooDeepError, SetSugarError
from setsugar.core.fresh import FreshVariables
from setsugar.core.printer import render
from setsugar.core.transformer import Transformer, transform

__all__ = [
    # AST
    "Node",
    "Constant",
    "ConstantKind",
    "Variable",
    "Relation",
    "RelationKind",
    "Negation",
    "Connective",
    "ConnectiveKind",
    "Quantifier",
    "QuantifierKind",
    "UnaryOperator",
    "UnaryOperatorKind",
    "BinaryOperator",
    "BinaryOperatorKind",
    "Comprehension",
    "is_primitive",
    # Errors
    "SetSugarError",
    "FormulaTooDeepError",
    # Desugaring
    "FreshVariables",
    "Transformer",
    "transform",
    # Printer
    "render",
]
