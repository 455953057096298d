"""Lint rules."""

from .result import Result
from .declarative import (
    DeclarativeResourceRule,
    ResourceMatcher,
    ResourceSourceChecker,
    ResourceTargetChecker,
    RuleDefinitionError,
    create_rule,
)
from .builtin import BUILTIN_RULES, RuleManager
from .plurals import strip_plurals

__all__ = [
    'Result',
    'DeclarativeResourceRule',
    'ResourceMatcher',
    'ResourceSourceChecker',
    'ResourceTargetChecker',
    'RuleDefinitionError',
    'create_rule',
    'BUILTIN_RULES',
    'RuleManager',
    'strip_plurals',
]
