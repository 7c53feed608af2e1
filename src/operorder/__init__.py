"""
Arithmetic expression calculator.

This package evaluates arithmetic expressions such as ``"(1,200.5 + 3) * 2^3"``
by tokenizing them, reordering the tokens with the shunting-yard algorithm,
building a binary expression tree and evaluating it.
"""

from .config import (
    DEFAULT_CALCULATOR_CONFIG,
    CalculatorConfig,
    config_from_env,
    load_config,
)
from .errors import (
    ConfigurationError,
    DivisionByZeroError,
    EvaluationError,
    ExpressionError,
    InvalidCharacterError,
    LimitExceededError,
    MalformedExpressionError,
    NumberFormatError,
    ParseError,
    TokenizerError,
    UnbalancedParenthesesError,
)

# Evaluator
from .evaluator import (
    DEFAULT_ARITHMETIC_FUNCTIONS,
    CalculationResult,
    Evaluator,
    calculate,
    parse_expression,
    try_calculate,
)
from .limits import (
    DEFAULT_EXPRESSION_LIMITS,
    ExpressionLimits,
    check_expression_length,
    check_tree_depth,
    check_tree_node_count,
)

# Operators
from .operators import (
    DEFAULT_OPERATOR_TABLE,
    DEFAULT_OPERATORS,
    Associativity,
    OperatorDescriptor,
    OperatorTable,
    Precedence,
)

# Shunting-yard
from .shunting_yard import (
    CONVERTER_MODES,
    ConverterMode,
    ShuntingYardConverter,
    postfix_to_string,
    to_postfix,
)

# Tokenizer
from .tokenizer import (
    Token,
    Tokenizer,
    TokenType,
    tokenize,
)

# Tree
from .tree import (
    ExpressionNode,
    TreeBuilder,
    build_tree,
    count_nodes,
    to_infix,
    tree_to_string,
)

__all__ = [
    # Tokenizer
    "Token",
    "TokenType",
    "Tokenizer",
    "tokenize",
    # Operators
    "Associativity",
    "Precedence",
    "OperatorDescriptor",
    "OperatorTable",
    "DEFAULT_OPERATORS",
    "DEFAULT_OPERATOR_TABLE",
    # Shunting-yard
    "ConverterMode",
    "CONVERTER_MODES",
    "ShuntingYardConverter",
    "to_postfix",
    "postfix_to_string",
    # Tree
    "ExpressionNode",
    "TreeBuilder",
    "build_tree",
    "count_nodes",
    "to_infix",
    "tree_to_string",
    # Evaluator
    "DEFAULT_ARITHMETIC_FUNCTIONS",
    "CalculationResult",
    "Evaluator",
    "calculate",
    "parse_expression",
    "try_calculate",
    # Config
    "CalculatorConfig",
    "DEFAULT_CALCULATOR_CONFIG",
    "config_from_env",
    "load_config",
    # Limits
    "ExpressionLimits",
    "DEFAULT_EXPRESSION_LIMITS",
    "check_expression_length",
    "check_tree_depth",
    "check_tree_node_count",
    # Errors
    "ExpressionError",
    "TokenizerError",
    "InvalidCharacterError",
    "ConfigurationError",
    "ParseError",
    "UnbalancedParenthesesError",
    "MalformedExpressionError",
    "EvaluationError",
    "NumberFormatError",
    "DivisionByZeroError",
    "LimitExceededError",
]
